"""
SQLAlchemy model for supplementary receipt records (SQL store backend).
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, JSON, String

from loyverse_bridge.database import Base


class ReceiptRecordModel(Base):
    """Schemaless document keyed by the Loyverse receipt_id."""
    __tablename__ = "receipt_records"

    id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False, default=dict)  # status, customerData, invoiceLinks, updatedAt

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
