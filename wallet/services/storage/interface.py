"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the ledger in memory today
2. Swap in a database-backed store later without touching LedgerService
3. Use pre-populated stores in tests

The interface is intentionally simple - we're not building a full ORM.
Just the operations the ledger needs: save, get, update, list.

Stores hand out copies. Mutating a returned model changes nothing until
it is passed back through an update_* call.
"""

from abc import ABC, abstractmethod
from typing import Optional

from wallet.models.wallet import Account, Favorite, Payment
from wallet.models.audit import AuditEvent


class AccountStorageInterface(ABC):
    """
    Abstract interface for account storage operations.

    Accounts are never deleted, so there is no delete operation.
    """

    @abstractmethod
    def save_account(self, account: Account) -> bool:
        """
        Save a new account.

        Args:
            account: The account to save

        Returns:
            True if saved successfully

        Raises:
            DuplicateError: If the id or the phone is already stored
        """
        pass

    @abstractmethod
    def get_account_by_id(self, account_id: int) -> Optional[Account]:
        """
        Retrieve an account by its ID.

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    def get_account_by_phone(self, phone: str) -> Optional[Account]:
        """
        Retrieve an account by its registered phone number.

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    def update_account(self, account: Account) -> bool:
        """
        Update an existing account (balance changes).

        Raises:
            NotFoundError: If the account doesn't exist
        """
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts in insertion order."""
        pass


class PaymentStorageInterface(ABC):
    """Abstract interface for payment storage operations."""

    @abstractmethod
    def save_payment(self, payment: Payment) -> bool:
        """
        Save a new payment.

        Raises:
            DuplicateError: If a payment with the same id is already stored
        """
        pass

    @abstractmethod
    def get_payment_by_id(self, payment_id: str) -> Optional[Payment]:
        """
        Retrieve a payment by its ID.

        Returns:
            The payment if found, None otherwise
        """
        pass

    @abstractmethod
    def update_payment(self, payment: Payment) -> bool:
        """
        Update an existing payment (status changes).

        Raises:
            NotFoundError: If the payment doesn't exist
        """
        pass

    @abstractmethod
    def list_payments(self, account_id: Optional[int] = None) -> list[Payment]:
        """
        List payments in creation order.

        Args:
            account_id: Only return payments of this account
        """
        pass


class FavoriteStorageInterface(ABC):
    """
    Abstract interface for favorite storage.

    Favorites are immutable - saved once, never updated or deleted.
    """

    @abstractmethod
    def save_favorite(self, favorite: Favorite) -> bool:
        """
        Save a new favorite.

        Raises:
            DuplicateError: If a favorite with the same id is already stored
        """
        pass

    @abstractmethod
    def get_favorite_by_id(self, favorite_id: str) -> Optional[Favorite]:
        """
        Retrieve a favorite by its ID.

        Returns:
            The favorite if found, None otherwise
        """
        pass

    @abstractmethod
    def list_favorites(self, account_id: Optional[int] = None) -> list[Favorite]:
        """List favorites in creation order, optionally for one account."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Args:
            entity_type: Type of entity (e.g., 'account', 'payment')
            entity_id: The entity's ID

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
