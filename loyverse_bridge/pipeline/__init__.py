"""
Receipt normalisation pipeline.

Loyverse receipt + supplementary record → merged view for the frontend.
"""
from loyverse_bridge.pipeline.formatter import (  # noqa: F401
    MalformedReceiptError,
    iso_utc,
    format_receipt,
    parse_decimal,
    split_timestamp,
)
