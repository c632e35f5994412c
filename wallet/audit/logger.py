"""
Audit Logger

DESIGN DECISION: Every ledger operation is logged.
This provides:
1. Complete traceability of money movement
2. Debugging capability when an operation is refused
3. A per-account history that survives a refund

The audit logger:
- Is synchronous, like the ledger it observes
- Gracefully handles storage and event build failures (never breaks a ledger operation)
- Keys events by entity so one account or payment can be traced
"""

import logging
import sys
from typing import Any, Callable, Optional

import structlog

from wallet.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from wallet.services.storage import AuditStorageInterface


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Call once at startup, before the first logger is used;
    create_ledger_service() does this from settings.
    """
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for history queries)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
        history_limit: int = 100,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
            history_limit: Default size of recent_events() results.
        """
        self._storage = storage
        self._history_limit = history_limit
        self._logger = structlog.get_logger("wallet.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def recent_events(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Most recent events, newest first. Empty without storage."""
        if not self._storage:
            return []
        return self._storage.get_recent_events(limit or self._history_limit)

    def history(self, entity_type: str, entity_id) -> list[AuditEvent]:
        """All events for one account, payment or favorite, oldest first."""
        if not self._storage:
            return []
        return self._storage.get_events_by_entity(entity_type, str(entity_id))

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.CRITICAL:
            self._logger.critical("audit_event", **log_dict)
        elif event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def _emit(self, build: Callable[..., AuditEvent], **kwargs: Any) -> bool:
        """
        Build an event and log it.

        Ledger state has already changed when most events are emitted,
        so a failure to build the event is logged and reported as False.
        """
        try:
            event = build(**kwargs)
        except Exception as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_event_build_failed",
                builder=getattr(build, "__name__", repr(build)),
                error=str(e),
            )
            return False
        return self.log(event)

    def log_account_registered(self, account_id: int, phone: str) -> bool:
        """Log account registration."""
        return self._emit(
            AuditEventBuilder.account_registered,
            account_id=account_id,
            phone=phone,
        )

    def log_deposit(self, account_id: int, amount: int, balance: int) -> bool:
        """Log a deposit."""
        return self._emit(
            AuditEventBuilder.deposit_made,
            account_id=account_id,
            amount=amount,
            balance=balance,
        )

    def log_payment_created(
        self,
        payment_id: str,
        account_id: int,
        amount: int,
        category: str,
    ) -> bool:
        """Log a new payment."""
        return self._emit(
            AuditEventBuilder.payment_created,
            payment_id=payment_id,
            account_id=account_id,
            amount=amount,
            category=category,
        )

    def log_payment_rejected(self, payment_id: str, account_id: int, amount: int) -> bool:
        """Log a rejection and its refund."""
        return self._emit(
            AuditEventBuilder.payment_rejected,
            payment_id=payment_id,
            account_id=account_id,
            amount=amount,
        )

    def log_payment_repeated(self, source_payment_id: str, payment_id: str) -> bool:
        return self._emit(
            AuditEventBuilder.payment_repeated,
            source_payment_id=source_payment_id,
            payment_id=payment_id,
        )

    def log_favorite_created(self, favorite_id: str, payment_id: str, name: str) -> bool:
        return self._emit(
            AuditEventBuilder.favorite_created,
            favorite_id=favorite_id,
            payment_id=payment_id,
            name=name,
        )

    def log_favorite_paid(self, favorite_id: str, payment_id: str) -> bool:
        return self._emit(
            AuditEventBuilder.favorite_paid,
            favorite_id=favorite_id,
            payment_id=payment_id,
        )

    def log_operation_failed(
        self,
        operation: str,
        error: Exception,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> bool:
        """Log a refused operation (not found, insufficient funds, ...)."""
        return self._emit(
            AuditEventBuilder.operation_failed,
            operation=operation,
            error_code=getattr(error, "code", type(error).__name__),
            error_message=str(error),
            entity_type=entity_type,
            entity_id=entity_id,
        )

    def log_integrity_error(
        self,
        operation: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> bool:
        """Log a ledger inconsistency."""
        return self._emit(
            AuditEventBuilder.integrity_error,
            operation=operation,
            error_message=error_message,
            details=details,
        )
