"""
Supplementary record stores.

Every backend exposes the same two coroutines:

* ``get(receipt_id) -> dict``: the stored document, ``{}`` when absent
* ``merge(receipt_id, fields)``: create the document or shallow-merge ``fields`` into it
"""
from __future__ import annotations

from typing import Any, Dict, Protocol

from fastapi import Depends

from loyverse_bridge.config import Settings, get_settings
from loyverse_bridge.store.firestore import FirestoreReceiptStore
from loyverse_bridge.store.sql import SqlReceiptStore


class ReceiptStore(Protocol):
    async def get(self, receipt_id: str) -> Dict[str, Any]: ...

    async def merge(self, receipt_id: str, fields: Dict[str, Any]) -> None: ...


def get_receipt_store(settings: Settings = Depends(get_settings)) -> ReceiptStore:
    """Store dependency selected by ``RECEIPT_STORE_BACKEND``."""
    if settings.RECEIPT_STORE_BACKEND == "sql":
        from loyverse_bridge.database import SessionLocal

        return SqlReceiptStore(SessionLocal)
    from loyverse_bridge.firebase import get_firestore

    return FirestoreReceiptStore(get_firestore(settings), settings.RECEIPTS_COLLECTION)


__all__ = ["ReceiptStore", "FirestoreReceiptStore", "SqlReceiptStore", "get_receipt_store"]
