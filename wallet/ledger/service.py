"""
Ledger Service

The bookkeeping core: accounts, payments and favorite payments.

DESIGN DECISION: LedgerService owns no module-level state. Each instance
holds its own stores and its own account counter, so two services never
see each other's data.

The service is single-threaded by contract. Callers sharing one instance
across threads must serialise access themselves.

Every refused operation raises a WalletError subclass and leaves the
stores exactly as they were. Nothing is retried here.
"""

from typing import Callable, Optional
from uuid import uuid4

from wallet.audit import AuditLogger, configure_logging
from wallet.config import LedgerSettings, get_settings
from wallet.models.wallet import Account, Favorite, Payment, PaymentStatus
from wallet.services.storage import (
    AccountStorageInterface,
    FavoriteStorageInterface,
    InMemoryAccountStorage,
    InMemoryAuditStorage,
    InMemoryFavoriteStorage,
    InMemoryPaymentStorage,
    PaymentStorageInterface,
)


class WalletError(Exception):
    """Base exception for refused ledger operations."""
    code = "wallet_error"


class AccountAlreadyExistsError(WalletError):
    """Phone number is already registered."""
    code = "account_already_exists"


class AccountNotFoundError(WalletError):
    """No account with the given id."""
    code = "account_not_found"


class PaymentNotFoundError(WalletError):
    """No payment with the given id."""
    code = "payment_not_found"


class FavoriteNotFoundError(WalletError):
    """No favorite with the given id."""
    code = "favorite_not_found"


class InvalidAmountError(WalletError):
    """Amount must be a positive number of minor units."""
    code = "invalid_amount"


class InsufficientFundsError(WalletError):
    """Balance is too small to cover the payment."""
    code = "insufficient_funds"

    def __init__(self, account_id: int, balance: int, amount: int):
        self.account_id = account_id
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Insufficient funds on account {account_id}: "
            f"balance {balance}, requested {amount}"
        )


class InvalidPaymentStateError(WalletError):
    """Payment is not in a state that allows the operation."""
    code = "invalid_payment_state"

    def __init__(self, payment_id: str, status: PaymentStatus):
        self.payment_id = payment_id
        self.status = status
        super().__init__(f"Payment {payment_id} is {status.value}, expected in_progress")


class LedgerIntegrityError(Exception):
    """
    Stored data is inconsistent (e.g. a payment whose account is gone).

    Not a WalletError: it signals a bug, not a refused operation.
    """
    pass


def new_token() -> str:
    """Default payment/favorite id generator."""
    return str(uuid4())


class LedgerService:
    """
    Wallet bookkeeping service.

    Operations:
    - register_account / find_account_by_id / deposit
    - pay / find_payment_by_id / reject / repeat
    - favorite_payment / find_favorite_by_id / pay_from_favorite

    Models returned by the service are snapshots; call the find_* methods
    again to see later changes.
    """

    def __init__(
        self,
        account_storage: Optional[AccountStorageInterface] = None,
        payment_storage: Optional[PaymentStorageInterface] = None,
        favorite_storage: Optional[FavoriteStorageInterface] = None,
        id_factory: Optional[Callable[[], str]] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the service.

        Args:
            account_storage: Account store. Defaults to an empty in-memory store.
            payment_storage: Payment store. Defaults to an empty in-memory store.
            favorite_storage: Favorite store. Defaults to an empty in-memory store.
            id_factory: Generates payment and favorite ids. Defaults to UUID4 strings.
            audit_logger: Receives an event per operation. Optional.
        """
        self._accounts = account_storage or InMemoryAccountStorage()
        self._payments = payment_storage or InMemoryPaymentStorage()
        self._favorites = favorite_storage or InMemoryFavoriteStorage()
        self._new_id = id_factory or new_token
        self._audit_logger = audit_logger

        # Continue numbering after whatever the account store already holds
        self._last_account_id = max(
            (account.id for account in self._accounts.list_accounts()),
            default=0,
        )

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def register_account(self, phone: str) -> Account:
        """
        Register a new account with a zero balance.

        Raises:
            AccountAlreadyExistsError: If the phone is already registered
        """
        if self._accounts.get_account_by_phone(phone) is not None:
            raise self._refused(
                "register_account",
                AccountAlreadyExistsError(f"Phone already registered: {phone}"),
            )

        account = Account(id=self._last_account_id + 1, phone=phone, balance=0)
        self._accounts.save_account(account)
        self._last_account_id = account.id

        if self._audit_logger:
            self._audit_logger.log_account_registered(account.id, phone)

        return account

    def find_account_by_id(self, account_id: int) -> Account:
        """
        Raises:
            AccountNotFoundError: If no such account
        """
        return self._require_account(account_id, "find_account_by_id")

    def deposit(self, account_id: int, amount: int) -> None:
        """
        Add funds to an account.

        Raises:
            AccountNotFoundError: If no such account
            InvalidAmountError: If amount <= 0
        """
        account = self._require_account(account_id, "deposit")
        self._require_positive(amount, "deposit", "account", account_id)

        account.balance += amount
        self._accounts.update_account(account)

        if self._audit_logger:
            self._audit_logger.log_deposit(account_id, amount, account.balance)

    # -------------------------------------------------------------------------
    # Payments
    # -------------------------------------------------------------------------

    def pay(self, account_id: int, amount: int, category: str) -> Payment:
        """
        Take amount from the account and record an in-progress payment.

        Raises:
            AccountNotFoundError: If no such account
            InvalidAmountError: If amount <= 0
            InsufficientFundsError: If the balance is smaller than amount
        """
        return self._pay(account_id, amount, category, "pay")

    def find_payment_by_id(self, payment_id: str) -> Payment:
        """
        Raises:
            PaymentNotFoundError: If no such payment
        """
        return self._require_payment(payment_id, "find_payment_by_id")

    def reject(self, payment_id: str) -> None:
        """
        Reject an in-progress payment and refund its amount.

        Payments returned earlier by pay() or repeat() are snapshots and
        keep showing IN_PROGRESS; call find_payment_by_id() to see the
        rejection.

        Raises:
            PaymentNotFoundError: If no such payment
            InvalidPaymentStateError: If the payment is not in progress
            LedgerIntegrityError: If the payment's account no longer exists
        """
        payment = self._require_payment(payment_id, "reject")
        if not payment.is_in_progress:
            raise self._refused(
                "reject",
                InvalidPaymentStateError(payment.id, payment.status),
                "payment",
                payment.id,
            )

        account = self._accounts.get_account_by_id(payment.account_id)
        if account is None:
            message = f"Payment {payment.id} references missing account {payment.account_id}"
            if self._audit_logger:
                self._audit_logger.log_integrity_error(
                    "reject",
                    message,
                    details={"payment_id": payment.id, "account_id": payment.account_id},
                )
            raise LedgerIntegrityError(message)

        payment.status = PaymentStatus.REJECTED
        account.balance += payment.amount
        self._payments.update_payment(payment)
        self._accounts.update_account(account)

        if self._audit_logger:
            self._audit_logger.log_payment_rejected(payment.id, account.id, payment.amount)

    def repeat(self, payment_id: str) -> Payment:
        """
        Make a new payment with the same account, amount and category.

        This is a full payment, not a copy: the balance is checked again.

        Raises:
            PaymentNotFoundError: If no such payment
            InsufficientFundsError: If the balance no longer covers the amount
        """
        source = self._require_payment(payment_id, "repeat")
        payment = self._pay(source.account_id, source.amount, source.category, "repeat")

        if self._audit_logger:
            self._audit_logger.log_payment_repeated(source.id, payment.id)

        return payment

    # -------------------------------------------------------------------------
    # Favorites
    # -------------------------------------------------------------------------

    def favorite_payment(self, payment_id: str, name: str) -> Favorite:
        """
        Bookmark a payment under a display name.

        Raises:
            PaymentNotFoundError: If no such payment
        """
        payment = self._require_payment(payment_id, "favorite_payment")

        favorite = Favorite(
            id=self._new_id(),
            account_id=payment.account_id,
            amount=payment.amount,
            category=payment.category,
            name=name,
        )
        self._favorites.save_favorite(favorite)

        if self._audit_logger:
            self._audit_logger.log_favorite_created(favorite.id, payment.id, name)

        return favorite

    def find_favorite_by_id(self, favorite_id: str) -> Favorite:
        """
        Raises:
            FavoriteNotFoundError: If no such favorite
        """
        return self._require_favorite(favorite_id, "find_favorite_by_id")

    def pay_from_favorite(self, favorite_id: str) -> Payment:
        """
        Make a payment from a favorite's account, amount and category.

        Raises:
            FavoriteNotFoundError: If no such favorite
            AccountNotFoundError: If the favorite's account is gone
            InsufficientFundsError: If the balance doesn't cover the amount
        """
        favorite = self._require_favorite(favorite_id, "pay_from_favorite")
        payment = self._pay(
            favorite.account_id,
            favorite.amount,
            favorite.category,
            "pay_from_favorite",
        )

        if self._audit_logger:
            self._audit_logger.log_favorite_paid(favorite.id, payment.id)

        return payment

    # -------------------------------------------------------------------------
    # Collection accessors
    # -------------------------------------------------------------------------

    def accounts(self) -> list[Account]:
        """All accounts in registration order."""
        return self._accounts.list_accounts()

    def payments(self) -> list[Payment]:
        """All payments in creation order, any status."""
        return self._payments.list_payments()

    def favorites(self) -> list[Favorite]:
        """All favorites in creation order."""
        return self._favorites.list_favorites()

    def account_history(self, account_id: int) -> list[Payment]:
        """
        Payments of one account in creation order.

        Raises:
            AccountNotFoundError: If no such account
        """
        self._require_account(account_id, "account_history")
        return self._payments.list_payments(account_id=account_id)

    def sum_payments(self) -> int:
        """Total amount of every recorded payment, rejected ones included."""
        return sum(payment.amount for payment in self._payments.list_payments())

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _pay(self, account_id: int, amount: int, category: str, operation: str) -> Payment:
        account = self._require_account(account_id, operation)
        self._require_positive(amount, operation, "account", account_id)

        if account.balance < amount:
            raise self._refused(
                operation,
                InsufficientFundsError(account.id, account.balance, amount),
                "account",
                account.id,
            )

        payment = Payment(
            id=self._new_id(),
            account_id=account.id,
            amount=amount,
            category=category,
            status=PaymentStatus.IN_PROGRESS,
        )
        # Save the payment first: a duplicate id must fail before any debit
        self._payments.save_payment(payment)
        account.balance -= amount
        self._accounts.update_account(account)

        if self._audit_logger:
            self._audit_logger.log_payment_created(payment.id, account.id, amount, category)

        return payment

    def _require_account(self, account_id: int, operation: str) -> Account:
        account = self._accounts.get_account_by_id(account_id)
        if account is None:
            raise self._refused(
                operation,
                AccountNotFoundError(f"Account not found: {account_id}"),
                "account",
                account_id,
            )
        return account

    def _require_payment(self, payment_id: str, operation: str) -> Payment:
        payment = self._payments.get_payment_by_id(payment_id)
        if payment is None:
            raise self._refused(
                operation,
                PaymentNotFoundError(f"Payment not found: {payment_id}"),
                "payment",
                payment_id,
            )
        return payment

    def _require_favorite(self, favorite_id: str, operation: str) -> Favorite:
        favorite = self._favorites.get_favorite_by_id(favorite_id)
        if favorite is None:
            raise self._refused(
                operation,
                FavoriteNotFoundError(f"Favorite not found: {favorite_id}"),
                "favorite",
                favorite_id,
            )
        return favorite

    def _require_positive(self, amount: int, operation: str, entity_type: str, entity_id) -> None:
        if amount <= 0:
            raise self._refused(
                operation,
                InvalidAmountError(f"Amount must be positive, got {amount}"),
                entity_type,
                entity_id,
            )

    def _refused(
        self,
        operation: str,
        error: WalletError,
        entity_type: Optional[str] = None,
        entity_id=None,
    ) -> WalletError:
        """Audit a refused operation and hand the error back for raising."""
        if self._audit_logger:
            self._audit_logger.log_operation_failed(
                operation,
                error,
                entity_type=entity_type,
                entity_id=str(entity_id) if entity_id is not None else None,
            )
        return error


def create_ledger_service(
    settings: Optional[LedgerSettings] = None,
) -> LedgerService:
    """
    Factory function to create a fully wired ledger.

    Args:
        settings: Ledger settings. Defaults to get_settings().

    Returns:
        LedgerService on in-memory stores, with an in-memory audit trail
        when audit is enabled.
    """
    settings = settings or get_settings()
    configure_logging(settings.effective_log_level, settings.log_json)

    audit_logger = None
    if settings.audit_enabled:
        audit_logger = AuditLogger(
            InMemoryAuditStorage(),
            history_limit=settings.audit_history_limit,
        )

    return LedgerService(audit_logger=audit_logger)
