from loyverse_bridge.schemas.loyverse import (  # noqa: F401
    LoyverseLineItem,
    LoyversePayment,
    LoyverseReceipt,
)
from loyverse_bridge.schemas.receipt import (  # noqa: F401
    Action,
    ActionRequest,
    GetReceiptPayload,
    GetReceiptsByDatePayload,
    MergedItem,
    MergedReceipt,
    ReceiptStatus,
    SaveCustomerDataPayload,
    SupplementaryRecord,
)
