"""
Loyverse receipt payloads as returned by ``GET /receipts`` with
``expand=lines,payments``.

Only the fields the bridge reads are modelled; everything else is ignored.
Money and quantity fields are kept raw and parsed by the formatter.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class LoyverseLineItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    item_name: Optional[str] = None
    quantity: Any = None
    price: Any = None


class LoyversePayment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    type: Optional[str] = None
    money_amount: Any = None


class LoyverseReceipt(BaseModel):
    model_config = ConfigDict(extra="ignore")

    receipt_id: str
    receipt_number: Optional[str] = None
    order: Optional[str] = None
    created_at: str
    line_items: list[LoyverseLineItem] = Field(default_factory=list)
    payments: list[LoyversePayment] = Field(default_factory=list)
    total_money: Any = None
    total_tax: Any = None
