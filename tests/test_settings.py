"""Tests for configuration loading."""

import pytest

from wallet.config import LedgerSettings, get_settings


class TestLedgerSettings:
    """Tests for LedgerSettings."""

    def test_defaults(self, monkeypatch):
        """Test default values when no environment is set."""
        for name in ("WALLET_LOG_LEVEL", "WALLET_DEBUG_MODE", "WALLET_AUDIT_ENABLED"):
            monkeypatch.delenv(name, raising=False)

        settings = LedgerSettings(_env_file=None)
        assert settings.app_environment == "development"
        assert settings.log_level == "INFO"
        assert settings.audit_enabled is True
        assert settings.audit_history_limit == 100

    def test_env_prefix(self, monkeypatch):
        """Test that WALLET_* variables are read."""
        monkeypatch.setenv("WALLET_LOG_LEVEL", "warning")
        monkeypatch.setenv("WALLET_AUDIT_ENABLED", "false")
        monkeypatch.setenv("WALLET_AUDIT_HISTORY_LIMIT", "25")

        settings = LedgerSettings(_env_file=None)
        assert settings.log_level == "WARNING"
        assert settings.audit_enabled is False
        assert settings.audit_history_limit == 25

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValueError):
            LedgerSettings(_env_file=None, log_level="chatty")

    def test_history_limit_bounds(self):
        with pytest.raises(ValueError):
            LedgerSettings(_env_file=None, audit_history_limit=0)

    def test_debug_mode_forces_debug_level(self):
        settings = LedgerSettings(_env_file=None, log_level="ERROR", debug_mode=True)
        assert settings.effective_log_level == "DEBUG"

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
