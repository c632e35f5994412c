"""
Core Data Models for Wallet Ledger

These models define the schemas for everything the ledger stores.
They are designed to:
1. Enforce the money invariants at runtime (no negative balance, no empty payment)
2. Be cheap to copy, so storage can hand out snapshots instead of live objects
3. Be serializable for storage and logging

DESIGN DECISION: All money is an integer count of minor currency units
(e.g. 10_000_00 is 10 000.00). No Decimal, no float.
"""

from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PaymentStatus(str, Enum):
    """
    Payment lifecycle status.

    The only transition the ledger performs is IN_PROGRESS -> REJECTED.
    COMPLETED is reserved for a settlement step that does not exist yet.
    """
    IN_PROGRESS = "in_progress"  # Money left the account, payment is open
    COMPLETED = "completed"
    REJECTED = "rejected"        # Refunded, terminal


# =============================================================================
# LEDGER MODELS
# =============================================================================

class Account(BaseModel):
    """
    A wallet account.

    The balance is mutated in place by the service; validate_assignment
    makes the model itself refuse a negative balance.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(
        ...,
        ge=1,
        description="Sequential account identifier"
    )
    phone: str = Field(
        ...,
        description="Phone number the account is registered to"
    )
    balance: int = Field(
        default=0,
        ge=0,
        description="Balance in minor currency units"
    )


class Payment(BaseModel):
    """A payment made from an account against a category."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique payment token"
    )
    account_id: int = Field(
        ...,
        ge=1,
        description="Account the money was taken from"
    )
    amount: int = Field(
        ...,
        gt=0,
        description="Amount in minor currency units"
    )
    category: str = Field(
        ...,
        description="Free-form payment category (e.g. 'auto')"
    )
    status: PaymentStatus = Field(
        default=PaymentStatus.IN_PROGRESS,
        description="Payment status"
    )

    @property
    def is_in_progress(self) -> bool:
        """True while the payment can still be rejected."""
        return self.status == PaymentStatus.IN_PROGRESS


class Favorite(BaseModel):
    """
    A payment bookmarked under a display name.

    Snapshot of the payment's account, amount and category taken when the
    favorite was created. Later changes to the payment do not affect it.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique favorite token"
    )
    account_id: int = Field(..., ge=1)
    amount: int = Field(..., gt=0)
    category: str
    name: str = Field(
        ...,
        description="User supplied display name"
    )
