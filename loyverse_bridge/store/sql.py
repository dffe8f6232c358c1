"""
SQLAlchemy-backed supplementary record store (local development and tests).

Sessions are synchronous; each operation opens its own session in FastAPI's
threadpool so the event loop is never blocked and concurrent lookups never
share a session.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from loyverse_bridge.models.receipt_record import ReceiptRecordModel

logger = logging.getLogger(__name__)


class SqlReceiptStore:
    """Documents live in ``receipt_records.data`` as JSON."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory

    def _get(self, receipt_id: str) -> Dict[str, Any]:
        with self.session_factory() as db:
            row = db.query(ReceiptRecordModel).filter(ReceiptRecordModel.id == receipt_id).first()
            return dict(row.data or {}) if row else {}

    def _merge(self, receipt_id: str, fields: Dict[str, Any]) -> None:
        with self.session_factory() as db:
            row = db.query(ReceiptRecordModel).filter(ReceiptRecordModel.id == receipt_id).first()
            if row is None:
                db.add(ReceiptRecordModel(id=receipt_id, data=dict(fields)))
            else:
                # reassign so the JSON column is flagged dirty
                row.data = {**(row.data or {}), **fields}
                row.updated_at = datetime.utcnow()
            db.commit()

    async def get(self, receipt_id: str) -> Dict[str, Any]:
        return await run_in_threadpool(self._get, receipt_id)

    async def merge(self, receipt_id: str, fields: Dict[str, Any]) -> None:
        await run_in_threadpool(self._merge, receipt_id, fields)
        logger.info("Record %s merged: %s", receipt_id, sorted(fields))
