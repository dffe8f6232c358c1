"""
Frontend-facing contracts: the action envelope, per-action payloads, the
supplementary record and the merged receipt view.

Wire names are camelCase.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Action(str, Enum):
    GET_RECEIPT = "getReceipt"
    GET_RECEIPTS_BY_DATE = "getReceiptsByDate"
    SAVE_CUSTOMER_DATA = "saveCustomerData"


class ReceiptStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


# ---------------------------------------------------------------------------
# Request envelope
# ---------------------------------------------------------------------------

class ActionRequest(BaseModel):
    """``POST /api/loyverse`` body. ``action`` is parsed into :class:`Action` by the dispatcher."""
    action: Any = None
    payload: Optional[dict[str, Any]] = None


class GetReceiptPayload(CamelModel):
    receipt_number: Optional[str] = None


class GetReceiptsByDatePayload(CamelModel):
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class SaveCustomerDataPayload(CamelModel):
    loyverse_id: Optional[str] = None
    customer_data: Any = None


# ---------------------------------------------------------------------------
# Supplementary record (document store)
# ---------------------------------------------------------------------------

class SupplementaryRecord(CamelModel):
    """Stored document as written by any client (this service, the console,
    other tools). Values are passed through untyped; updatedAt may be a
    string or a Firestore timestamp (datetime)."""
    model_config = ConfigDict(extra="ignore")

    status: Any = None
    customer_data: Any = None
    invoice_links: Any = None
    updated_at: Any = None


# ---------------------------------------------------------------------------
# Merged view
# ---------------------------------------------------------------------------

class MergedItem(CamelModel):
    name: Optional[str] = None
    quantity: float
    price: float


class MergedReceipt(CamelModel):
    loyverse_id: str
    receipt_number: Optional[str] = None
    order_number: str
    date: str
    time: str
    payment_type: str
    items: list[MergedItem] = Field(default_factory=list)
    subtotal: float
    tax: float
    total: float
    status: Any = ReceiptStatus.PENDING.value
    invoice_links: Any = Field(default_factory=list)
    customer_data: Any = None
