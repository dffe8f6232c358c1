from loyverse_bridge.clients.loyverse import (  # noqa: F401
    LoyverseAPIError,
    LoyverseClient,
    get_loyverse_client,
)
