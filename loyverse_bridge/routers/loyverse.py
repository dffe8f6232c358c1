"""
Loyverse bridge endpoint.

POST /api/loyverse   {action, payload}

  getReceipt         one Loyverse receipt merged with its record
  getReceiptsByDate  receipts created in a date range, each merged
  saveCustomerData   upsert customer data, status → processing
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from loyverse_bridge.clients import LoyverseAPIError, LoyverseClient, get_loyverse_client
from loyverse_bridge.config import Settings, get_settings
from loyverse_bridge.pipeline import format_receipt, iso_utc
from loyverse_bridge.schemas import (
    Action,
    ActionRequest,
    GetReceiptPayload,
    GetReceiptsByDatePayload,
    LoyverseReceipt,
    ReceiptStatus,
    SaveCustomerDataPayload,
    SupplementaryRecord,
)
from loyverse_bridge.store import ReceiptStore, get_receipt_store

logger = logging.getLogger(__name__)
router = APIRouter()

P = TypeVar("P", bound=BaseModel)
Handler = Callable[[Dict[str, Any], LoyverseClient, ReceiptStore], Awaitable[Any]]


def require_credentials(settings: Settings = Depends(get_settings)) -> None:
    missing = settings.missing_credentials()
    if missing:
        logger.error("Server credentials not configured: %s", ", ".join(missing))
        raise HTTPException(status_code=500, detail="Server configuration error: missing credentials.")


def parse_payload(model: Type[P], payload: Dict[str, Any]) -> P:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.info("Rejected payload for %s: %s", model.__name__, exc.errors())
        raise HTTPException(status_code=400, detail="Invalid payload.")


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """ISO date or date-time; empty means no bound, naive means UTC."""
    if not value:
        return None
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_missing(value: Any) -> bool:
    """None, "", False and zero count as missing; empty objects and lists do not."""
    if isinstance(value, (dict, list)):
        return False
    return not value


async def merge_record(receipt: LoyverseReceipt, store: ReceiptStore) -> Dict[str, Any]:
    stored = await store.get(receipt.receipt_id)
    record = SupplementaryRecord.model_validate(stored) if stored else None
    return format_receipt(receipt, record).model_dump(by_alias=True)


# ── getReceipt ───────────────────────────────────────────────────────────
async def get_receipt(
    payload: Dict[str, Any], client: LoyverseClient, store: ReceiptStore
) -> Dict[str, Any]:
    req = parse_payload(GetReceiptPayload, payload)
    if not req.receipt_number:
        raise HTTPException(status_code=400, detail="Missing receiptNumber.")

    logger.info("Fetching receipt: %s", req.receipt_number)
    try:
        receipt = await client.get_receipt(req.receipt_number)
    except LoyverseAPIError as exc:
        if exc.not_found:
            logger.warning("Receipt not found in Loyverse: %s", req.receipt_number)
            raise HTTPException(
                status_code=404,
                detail=f"Receipt not found in Loyverse ({req.receipt_number}).",
            )
        raise HTTPException(status_code=exc.status_code, detail="Error communicating with Loyverse.")

    return await merge_record(receipt, store)


# ── getReceiptsByDate ────────────────────────────────────────────────────
async def get_receipts_by_date(
    payload: Dict[str, Any], client: LoyverseClient, store: ReceiptStore
) -> list:
    req = parse_payload(GetReceiptsByDatePayload, payload)
    start = parse_date(req.start_date)
    end = parse_date(req.end_date)

    logger.info("Fetching receipts: %s .. %s", start, end)
    try:
        receipts = await client.list_receipts(start, end)
    except LoyverseAPIError as exc:
        raise HTTPException(status_code=exc.status_code, detail="Error fetching receipts from Loyverse.")

    merged = await asyncio.gather(*(merge_record(r, store) for r in receipts))
    logger.info("Merged %d receipts", len(merged))
    return list(merged)


# ── saveCustomerData ─────────────────────────────────────────────────────
async def save_customer_data(
    payload: Dict[str, Any], client: LoyverseClient, store: ReceiptStore
) -> Dict[str, str]:
    req = parse_payload(SaveCustomerDataPayload, payload)
    if not req.loyverse_id or is_missing(req.customer_data):
        raise HTTPException(status_code=400, detail="Missing data to save.")

    await store.merge(
        req.loyverse_id,
        {
            "customerData": req.customer_data,
            "status": ReceiptStatus.PROCESSING.value,
            "updatedAt": iso_utc(datetime.now(timezone.utc)),
        },
    )
    logger.info("Saved customer data for %s", req.loyverse_id)
    return {"message": "Data saved successfully."}


ACTIONS: Dict[Action, Handler] = {
    Action.GET_RECEIPT: get_receipt,
    Action.GET_RECEIPTS_BY_DATE: get_receipts_by_date,
    Action.SAVE_CUSTOMER_DATA: save_customer_data,
}


# ── POST /api/loyverse ───────────────────────────────────────────────────
@router.post("/loyverse", dependencies=[Depends(require_credentials)])
async def dispatch(
    req: ActionRequest,
    client: LoyverseClient = Depends(get_loyverse_client),
    store: ReceiptStore = Depends(get_receipt_store),
    settings: Settings = Depends(get_settings),
):
    try:
        action = Action(req.action)
    except (ValueError, TypeError):
        logger.warning("Invalid action: %r", req.action)
        raise HTTPException(status_code=400, detail="Invalid action.")

    try:
        return await ACTIONS[action](req.payload or {}, client, store)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("Error in action '%s'", action.value)
        body = {"message": "Internal server error."}
        if settings.EXPOSE_ERROR_DETAILS:
            body["details"] = str(exc)
        return JSONResponse(status_code=500, content=body)
