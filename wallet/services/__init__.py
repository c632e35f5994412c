"""Services package."""

from wallet.services.storage import (
    AccountStorageInterface,
    AuditStorageInterface,
    DuplicateError,
    FavoriteStorageInterface,
    InMemoryAccountStorage,
    InMemoryAuditStorage,
    InMemoryFavoriteStorage,
    InMemoryPaymentStorage,
    NotFoundError,
    PaymentStorageInterface,
    StorageError,
)

__all__ = [
    # Storage services
    "AccountStorageInterface",
    "AuditStorageInterface",
    "DuplicateError",
    "FavoriteStorageInterface",
    "InMemoryAccountStorage",
    "InMemoryAuditStorage",
    "InMemoryFavoriteStorage",
    "InMemoryPaymentStorage",
    "NotFoundError",
    "PaymentStorageInterface",
    "StorageError",
]
