"""Pointman models."""

from pointman.models.customer import Customer
from pointman.models.batch import QRBatch, QRCode, QRFormat
from pointman.models.scheme import Scheme
from pointman.models.transaction import PointTransaction, TransactionType

__all__ = [
    "Customer",
    # Redemption aggregate
    "QRBatch",
    "QRCode",
    "QRFormat",
    # Catalog
    "Scheme",
    # Ledger
    "PointTransaction",
    "TransactionType",
]
