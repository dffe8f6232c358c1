"""
Merge a Loyverse receipt with its supplementary record.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Optional

from loyverse_bridge.schemas import (
    LoyverseReceipt,
    MergedItem,
    MergedReceipt,
    ReceiptStatus,
    SupplementaryRecord,
)

UNKNOWN_PAYMENT = "Desconocido"
NO_ORDER = "N/A"


class MalformedReceiptError(ValueError):
    """A Loyverse receipt field could not be normalised."""


def iso_utc(value: datetime) -> str:
    """Render ``value`` as UTC ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (naive means UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_decimal(value: Any, field: str) -> float:
    """Parse a money/quantity value. Non-numeric, NaN and infinite values are rejected."""
    if isinstance(value, bool) or value is None:
        raise MalformedReceiptError(f"{field} is not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedReceiptError(f"{field} is not a number: {value!r}") from exc
    if not math.isfinite(number):
        raise MalformedReceiptError(f"{field} is not a finite number: {value!r}")
    return number


def split_timestamp(created_at: str) -> tuple[str, str]:
    """Return ``(YYYY-MM-DD, HH:MM:SS)`` in the offset the timestamp was reported in."""
    raw = created_at.strip() if isinstance(created_at, str) else ""
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise MalformedReceiptError(f"created_at is not a timestamp: {created_at!r}") from exc
    return moment.date().isoformat(), moment.strftime("%H:%M:%S")


def format_receipt(
    receipt: LoyverseReceipt,
    record: Optional[SupplementaryRecord] = None,
) -> MergedReceipt:
    """Build the frontend view of ``receipt``.

    ``record`` is the stored supplementary record, or ``None`` when the
    receipt was never annotated; absent values fall back to defaults.
    """
    record = record or SupplementaryRecord()

    payment_name = receipt.payments[0].name if receipt.payments else None
    date, time = split_timestamp(receipt.created_at)

    items = [
        MergedItem(
            name=line.item_name,
            quantity=parse_decimal(line.quantity, "line_items.quantity"),
            price=parse_decimal(line.price, "line_items.price"),
        )
        for line in receipt.line_items
    ]

    total = parse_decimal(receipt.total_money, "total_money")
    tax = parse_decimal(receipt.total_tax, "total_tax")

    return MergedReceipt(
        loyverse_id=receipt.receipt_id,
        receipt_number=receipt.receipt_number,
        order_number=receipt.order or NO_ORDER,
        date=date,
        time=time,
        payment_type=payment_name or UNKNOWN_PAYMENT,
        items=items,
        subtotal=total - tax,
        tax=tax,
        total=total,
        status=record.status or ReceiptStatus.PENDING.value,
        invoice_links=record.invoice_links if record.invoice_links is not None else [],
        customer_data=record.customer_data,
    )
