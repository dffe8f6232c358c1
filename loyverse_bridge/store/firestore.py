"""
Firestore-backed supplementary record store.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


class FirestoreReceiptStore:
    """One document per receipt in ``collection``, keyed by the Loyverse receipt_id."""

    def __init__(self, client, collection: str = "receipts") -> None:
        self.client = client
        self.collection = collection

    def _doc(self, receipt_id: str):
        return self.client.collection(self.collection).document(receipt_id)

    async def get(self, receipt_id: str) -> Dict[str, Any]:
        snap = await self._doc(receipt_id).get()
        return (snap.to_dict() or {}) if snap.exists else {}

    async def merge(self, receipt_id: str, fields: Dict[str, Any]) -> None:
        await self._doc(receipt_id).set(fields, merge=True)
        logger.info("Firestore %s/%s merged: %s", self.collection, receipt_id, sorted(fields))
