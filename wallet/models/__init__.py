"""
Data Models Package

This package contains all Pydantic models used in the Wallet Ledger.
All data stored by the ledger must conform to these schemas.
"""

from wallet.models.wallet import (
    Account,
    Favorite,
    Payment,
    PaymentStatus,
)
from wallet.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Account",
    "Favorite",
    "Payment",
    "PaymentStatus",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
