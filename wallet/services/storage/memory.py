"""
In-Memory Storage Implementation

The default (and currently only) backend. All state lives in dicts owned
by the store instance and is lost when the instance goes away.

Every read and write copies the model, so callers can never reach into
the store and change a balance or a status behind the ledger's back.
"""

from typing import Optional

from wallet.models.wallet import Account, Favorite, Payment
from wallet.models.audit import AuditEvent
from wallet.services.storage.interface import (
    AccountStorageInterface,
    AuditStorageInterface,
    DuplicateError,
    FavoriteStorageInterface,
    NotFoundError,
    PaymentStorageInterface,
)


class InMemoryAccountStorage(AccountStorageInterface):
    """Accounts keyed by id, with a phone -> id index."""

    def __init__(self):
        self._accounts: dict[int, Account] = {}
        self._phone_index: dict[str, int] = {}

    def save_account(self, account: Account) -> bool:
        if account.id in self._accounts:
            raise DuplicateError(f"Account already stored: {account.id}")
        if account.phone in self._phone_index:
            raise DuplicateError(f"Phone already stored: {account.phone}")

        self._accounts[account.id] = account.model_copy(deep=True)
        self._phone_index[account.phone] = account.id
        return True

    def get_account_by_id(self, account_id: int) -> Optional[Account]:
        account = self._accounts.get(account_id)
        return account.model_copy(deep=True) if account else None

    def get_account_by_phone(self, phone: str) -> Optional[Account]:
        account_id = self._phone_index.get(phone)
        if account_id is None:
            return None
        return self.get_account_by_id(account_id)

    def update_account(self, account: Account) -> bool:
        stored = self._accounts.get(account.id)
        if stored is None:
            raise NotFoundError(f"Account not found: {account.id}")
        if stored.phone != account.phone:
            # Phone is the registration key; it cannot be re-pointed
            raise DuplicateError(f"Account {account.id} phone cannot change")

        self._accounts[account.id] = account.model_copy(deep=True)
        return True

    def list_accounts(self) -> list[Account]:
        return [account.model_copy(deep=True) for account in self._accounts.values()]


class InMemoryPaymentStorage(PaymentStorageInterface):
    """Payments keyed by id, in creation order."""

    def __init__(self):
        self._payments: dict[str, Payment] = {}

    def save_payment(self, payment: Payment) -> bool:
        if payment.id in self._payments:
            raise DuplicateError(f"Payment already stored: {payment.id}")
        self._payments[payment.id] = payment.model_copy(deep=True)
        return True

    def get_payment_by_id(self, payment_id: str) -> Optional[Payment]:
        payment = self._payments.get(payment_id)
        return payment.model_copy(deep=True) if payment else None

    def update_payment(self, payment: Payment) -> bool:
        if payment.id not in self._payments:
            raise NotFoundError(f"Payment not found: {payment.id}")
        self._payments[payment.id] = payment.model_copy(deep=True)
        return True

    def list_payments(self, account_id: Optional[int] = None) -> list[Payment]:
        return [
            payment.model_copy(deep=True)
            for payment in self._payments.values()
            if account_id is None or payment.account_id == account_id
        ]


class InMemoryFavoriteStorage(FavoriteStorageInterface):
    """Favorites keyed by id. Favorites are frozen, so no copies are needed."""

    def __init__(self):
        self._favorites: dict[str, Favorite] = {}

    def save_favorite(self, favorite: Favorite) -> bool:
        if favorite.id in self._favorites:
            raise DuplicateError(f"Favorite already stored: {favorite.id}")
        self._favorites[favorite.id] = favorite
        return True

    def get_favorite_by_id(self, favorite_id: str) -> Optional[Favorite]:
        return self._favorites.get(favorite_id)

    def list_favorites(self, account_id: Optional[int] = None) -> list[Favorite]:
        return [
            favorite
            for favorite in self._favorites.values()
            if account_id is None or favorite.account_id == account_id
        ]


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event.model_copy(deep=True))
        return True

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            event
            for event in self._events
            if event.entity_type == entity_type and event.entity_id == entity_id
        ]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events[-limit:])) if limit > 0 else []
