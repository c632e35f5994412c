"""
Tests for Wallet Ledger models

Test strategy:
1. Unit tests for individual components (models, stores, audit logger)
2. Service tests drive LedgerService through its public operations only
3. Deterministic ids via an injected id factory
"""

import pytest
from pydantic import ValidationError

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


class TestLedgerModels:
    """Tests for account, payment and favorite models."""

    def test_account_creation(self):
        """Test Account model creation with default balance."""
        account = Account(id=1, phone="+992000000001")
        assert account.id == 1
        assert account.phone == "+992000000001"
        assert account.balance == 0

    def test_account_rejects_negative_balance(self):
        """Test that a negative balance is rejected at construction."""
        with pytest.raises(ValueError):
            Account(id=1, phone="+992000000001", balance=-1)

    def test_account_rejects_negative_balance_on_assignment(self):
        """Test that validate_assignment guards the balance."""
        account = Account(id=1, phone="+992000000001", balance=100)
        with pytest.raises(ValueError):
            account.balance = -1
        assert account.balance == 100

    def test_account_id_starts_at_one(self):
        """Test that account ids are positive."""
        with pytest.raises(ValueError):
            Account(id=0, phone="+992000000001")

    def test_payment_defaults_to_in_progress(self):
        """Test Payment model creation."""
        payment = Payment(id="p1", account_id=1, amount=1_000_00, category="auto")
        assert payment.status == PaymentStatus.IN_PROGRESS
        assert payment.is_in_progress is True

    def test_payment_rejects_zero_amount(self):
        """Test that empty payments are rejected."""
        with pytest.raises(ValueError):
            Payment(id="p1", account_id=1, amount=0, category="auto")

    def test_payment_status_change(self):
        """Test status transition on a payment."""
        payment = Payment(id="p1", account_id=1, amount=100, category="auto")
        payment.status = PaymentStatus.REJECTED
        assert payment.is_in_progress is False

    def test_payments_compare_by_value(self):
        """Test that copies of a payment are equal."""
        payment = Payment(id="p1", account_id=1, amount=100, category="auto")
        assert payment.model_copy(deep=True) == payment

    def test_favorite_is_frozen(self):
        """Test that favorites cannot be changed after creation."""
        favorite = Favorite(
            id="f1",
            account_id=1,
            amount=100,
            category="auto",
            name="my auto",
        )
        with pytest.raises(ValidationError):
            favorite.amount = 200
        assert favorite.amount == 100


class TestPaymentStatus:
    """Tests for the payment status enum."""

    def test_status_values(self):
        """Test status string values."""
        assert PaymentStatus.IN_PROGRESS.value == "in_progress"
        assert PaymentStatus.COMPLETED.value == "completed"
        assert PaymentStatus.REJECTED.value == "rejected"

    def test_status_from_value(self):
        assert PaymentStatus("rejected") is PaymentStatus.REJECTED


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.ACCOUNT_REGISTERED,
            description="Test account registered",
        )
        assert event.event_type == AuditEventType.ACCOUNT_REGISTERED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.DEPOSIT_MADE,
            description="Deposit made",
            details={"amount": 100},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "deposit_made"
        assert log_dict["details"]["amount"] == 100

    def test_audit_event_builder_payment_created(self):
        """Test AuditEventBuilder.payment_created."""
        event = AuditEventBuilder.payment_created(
            payment_id="p1",
            account_id=1,
            amount=100,
            category="auto",
        )
        assert event.event_type == AuditEventType.PAYMENT_CREATED
        assert event.entity_type == "payment"
        assert event.entity_id == "p1"
        assert event.details["category"] == "auto"

    def test_audit_event_builder_account_id_is_string(self):
        """Test that integer account ids are stored as strings."""
        event = AuditEventBuilder.account_registered(7, "+992000000001")
        assert event.entity_id == "7"

    def test_audit_event_builder_operation_failed(self):
        """Test AuditEventBuilder.operation_failed."""
        event = AuditEventBuilder.operation_failed(
            operation="pay",
            error_code="insufficient_funds",
            error_message="not enough",
            entity_type="account",
            entity_id="1",
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.error_code == "insufficient_funds"
        assert event.details["operation"] == "pay"

    def test_audit_event_builder_integrity_error(self):
        """Test that integrity errors are critical."""
        event = AuditEventBuilder.integrity_error("reject", "account missing")
        assert event.severity == AuditSeverity.CRITICAL
        assert event.event_type == AuditEventType.INTEGRITY_ERROR


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
