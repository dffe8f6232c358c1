from loyverse_bridge.models.receipt_record import ReceiptRecordModel  # noqa: F401
