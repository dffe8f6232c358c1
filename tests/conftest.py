"""
Shared pytest fixtures: in-memory SQLite record store, fake Loyverse client,
FastAPI TestClient.
"""
import os
import tempfile

# Keep app startup away from Firebase and on-disk databases
os.environ.setdefault("RECEIPT_STORE_BACKEND", "sql")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DATA_DIR", tempfile.gettempdir())

import copy  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from loyverse_bridge.clients import LoyverseAPIError, get_loyverse_client  # noqa: E402
from loyverse_bridge.config import Settings, get_settings  # noqa: E402
from loyverse_bridge.database import Base  # noqa: E402
from loyverse_bridge.models import ReceiptRecordModel  # noqa: E402,F401  (register model)
from loyverse_bridge.main import app  # noqa: E402
from loyverse_bridge.schemas import LoyverseReceipt  # noqa: E402
from loyverse_bridge.store import SqlReceiptStore, get_receipt_store  # noqa: E402

# StaticPool ensures all connections share the same in-memory database
_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_Session = sessionmaker(autocommit=False, autoflush=False, bind=_ENGINE)


RECEIPT_A = {
    "receipt_number": "1-1001",
    "receipt_id": "b7e0c1d2-0001",
    "receipt_type": "SALE",
    "order": "Mesa 4",
    "created_at": "2024-03-05T14:07:09.000Z",
    "line_items": [
        {"item_name": "Café americano", "quantity": 2, "price": 35.0},
        {"item_name": "Pan dulce", "quantity": "1.5", "price": "18.50"},
    ],
    "payments": [
        {"name": "Efectivo", "type": "CASH", "money_amount": 100.0},
        {"name": "Tarjeta", "type": "CARD", "money_amount": 16.0},
    ],
    "total_money": 116.0,
    "total_tax": 16.0,
}

RECEIPT_B = {
    "receipt_number": "1-1002",
    "receipt_id": "b7e0c1d2-0002",
    "receipt_type": "SALE",
    "created_at": "2024-03-06T09:30:00.000Z",
    "line_items": [{"item_name": "Té verde", "quantity": 1, "price": 29.0}],
    "payments": [],
    "total_money": 29.0,
    "total_tax": 4.0,
}


class FakeLoyverseClient:
    """Stands in for LoyverseClient; receipts are looked up by receipt_number."""

    def __init__(self, receipts=(), error=None):
        self.receipts = [copy.deepcopy(r) for r in receipts]
        self.error = error
        self.calls = []

    async def get_receipt(self, receipt_number):
        self.calls.append(("get_receipt", receipt_number))
        if self.error:
            raise self.error
        for raw in self.receipts:
            if raw["receipt_number"] == receipt_number:
                return LoyverseReceipt.model_validate(raw)
        raise LoyverseAPIError(404, '{"errors":[{"code":"NOT_FOUND"}]}')

    async def list_receipts(self, created_at_min=None, created_at_max=None):
        self.calls.append(("list_receipts", created_at_min, created_at_max))
        if self.error:
            raise self.error
        return [LoyverseReceipt.model_validate(r) for r in self.receipts]


@pytest.fixture(autouse=True)
def _reset_tables():
    Base.metadata.create_all(bind=_ENGINE)
    yield
    Base.metadata.drop_all(bind=_ENGINE)


@pytest.fixture()
def db():
    session = _Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store():
    return SqlReceiptStore(_Session)


@pytest.fixture()
def pos():
    return FakeLoyverseClient([RECEIPT_A, RECEIPT_B])


@pytest.fixture()
def test_settings():
    return Settings(
        _env_file=None,
        LOYVERSE_ACCESS_TOKEN="test-token",
        RECEIPT_STORE_BACKEND="sql",
        DATABASE_URL="sqlite://",
    )


@pytest.fixture()
def client(test_settings, pos, store):
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_loyverse_client] = lambda: pos
    app.dependency_overrides[get_receipt_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
