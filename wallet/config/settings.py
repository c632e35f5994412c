"""
Configuration Management for Wallet Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The ledger core itself takes no configuration; settings only decide how
the service is wired (logging, audit trail) by create_ledger_service().
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LedgerSettings(BaseSettings):
    """
    Main ledger settings.

    Loads configuration from WALLET_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="WALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG log level)"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level for the structured logger"
    )
    log_json: bool = Field(
        default=True,
        description="Render log lines as JSON (False = console renderer)"
    )

    # Audit trail
    audit_enabled: bool = Field(
        default=True,
        description="Record an audit event for every ledger operation"
    )
    audit_history_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Default number of events returned by recent-event queries"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the log level name."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}. Allowed: {LOG_LEVELS}")
        return level

    @property
    def effective_log_level(self) -> str:
        """Log level after applying debug mode."""
        return "DEBUG" if self.debug_mode else self.log_level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get ledger settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
