"""Tests for the audit logger and logging setup."""

import structlog
from structlog.testing import capture_logs

from wallet.audit import AuditLogger, configure_logging
from wallet.models.audit import AuditEvent, AuditEventBuilder, AuditEventType
from wallet.services.storage import InMemoryAuditStorage


class FailingAuditStorage(InMemoryAuditStorage):
    """Audit storage whose writes always fail."""

    def append_event(self, event: AuditEvent) -> bool:
        raise RuntimeError("disk full")


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_log_without_storage(self):
        """Test that local-only logging reports success."""
        logger = AuditLogger()
        event = AuditEventBuilder.account_registered(1, "+992000000001")

        assert logger.log(event) is True
        assert logger.recent_events() == []
        assert logger.history("account", 1) == []

    def test_log_persists_to_storage(self):
        """Test that events are appended to storage."""
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)

        logger.log_account_registered(1, "+992000000001")
        logger.log_deposit(1, 100, 100)

        history = logger.history("account", 1)
        assert [e.event_type for e in history] == [
            AuditEventType.ACCOUNT_REGISTERED,
            AuditEventType.DEPOSIT_MADE,
        ]

    def test_storage_failure_is_not_raised(self):
        """Test that a failing store doesn't break the caller."""
        logger = AuditLogger(FailingAuditStorage())
        event = AuditEventBuilder.deposit_made(1, 100, 100)

        assert logger.log(event) is False

    def test_event_build_failure_is_not_raised(self, monkeypatch):
        """Test that a failing event builder doesn't break the caller."""

        def broken(**kwargs):
            raise ValueError("bad event")

        monkeypatch.setattr(AuditEventBuilder, "payment_created", broken)
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)

        with capture_logs() as logs:
            assert logger.log_payment_created("p-1", 1, 100, "auto") is False

        assert storage.get_recent_events() == []
        assert logs[0]["event"] == "audit_event_build_failed"
        assert logs[0]["log_level"] == "error"

    def test_long_description_is_accepted(self):
        """Test that free-form text of any length fits in an event."""
        event = AuditEventBuilder.payment_created("p-1", 1, 100, "x" * 1000)
        assert "x" * 1000 in event.description

    def test_recent_events_uses_history_limit(self):
        """Test the default limit for recent events."""
        logger = AuditLogger(InMemoryAuditStorage(), history_limit=2)
        for account_id in (1, 2, 3):
            logger.log_account_registered(account_id, f"+99200000000{account_id}")

        assert [e.entity_id for e in logger.recent_events()] == ["3", "2"]
        assert len(logger.recent_events(limit=3)) == 3

    def test_operation_failed_uses_error_code(self):
        """Test that an error's code attribute becomes the event error_code."""

        class RefusedError(Exception):
            code = "refused"

        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)
        logger.log_operation_failed("pay", RefusedError("no"), "account", "1")

        event = storage.get_recent_events(limit=1)[0]
        assert event.error_code == "refused"
        assert event.error_message == "no"

    def test_operation_failed_falls_back_to_class_name(self):
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)
        logger.log_operation_failed("pay", ValueError("bad"))

        assert storage.get_recent_events(limit=1)[0].error_code == "ValueError"

    def test_severity_selects_log_method(self):
        """Test that warning and critical events are logged at their level."""
        with capture_logs() as logs:
            logger = AuditLogger()
            logger.log(AuditEventBuilder.operation_failed("pay", "x", "y"))
            logger.log(AuditEventBuilder.integrity_error("reject", "gone"))
            logger.log(AuditEventBuilder.account_registered(1, "+992000000001"))

        assert [entry["log_level"] for entry in logs] == ["warning", "critical", "info"]
        assert all(entry["event"] == "audit_event" for entry in logs)
        assert logs[0]["event_type"] == "operation_failed"


class TestConfigureLogging:
    """Tests for structlog configuration."""

    def test_configure_logging_json(self):
        configure_logging("DEBUG", json_logs=True)
        try:
            processors = structlog.get_config()["processors"]
            assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        finally:
            structlog.reset_defaults()

    def test_configure_logging_console(self):
        configure_logging("INFO", json_logs=False)
        try:
            processors = structlog.get_config()["processors"]
            assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        finally:
            structlog.reset_defaults()
