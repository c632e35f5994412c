"""Ledger package."""

from wallet.ledger.service import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    FavoriteNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidPaymentStateError,
    LedgerIntegrityError,
    LedgerService,
    PaymentNotFoundError,
    WalletError,
    create_ledger_service,
    new_token,
)

__all__ = [
    # Service
    "LedgerService",
    "create_ledger_service",
    "new_token",
    # Exceptions
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "FavoriteNotFoundError",
    "InsufficientFundsError",
    "InvalidAmountError",
    "InvalidPaymentStateError",
    "LedgerIntegrityError",
    "PaymentNotFoundError",
    "WalletError",
]
