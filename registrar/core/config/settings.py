# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for Registrar.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from registrar.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration for the student directory and course catalog.

    Attributes:
        url: SQLAlchemy connection URL.
        echo: Log every SQL statement.
        pool_pre_ping: Test connections before handing them out.
        sqlite_timeout: Seconds a SQLite connection waits for the write lock.
    """

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        extra="ignore",
    )

    url: str = "sqlite:///./registrar.db"
    echo: bool = False
    pool_pre_ping: bool = True
    sqlite_timeout: float = Field(default=30.0, gt=0)

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.url.startswith("sqlite")


class SMTPSettings(BaseSettings):
    """SMTP configuration for enrollment confirmation emails.

    Attributes:
        host: SMTP server hostname.
        port: SMTP server port.
        username: SMTP authentication username.
        password: SMTP authentication password.
        use_tls: Use STARTTLS.
        from_email: Sender email address.
        from_name: Sender display name.
        timeout: Delivery timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="SMTP_",
        extra="ignore",
    )

    host: str | None = None
    port: int = 587
    username: str | None = None
    password: SecretStr | None = None
    use_tls: bool = True
    from_email: str | None = None
    from_name: str = "Registrar"
    timeout: float = 30.0

    @property
    def is_configured(self) -> bool:
        """Check if every value needed for delivery is set."""
        return all([self.host, self.username, self.password, self.from_email])


class CreditPolicySettings(BaseSettings):
    """GPA-to-credit-load policy configuration.

    Tiers are evaluated from the highest minimum GPA down; the first tier
    whose minimum GPA the student reaches sets the credit cap.

    Attributes:
        tiers: List of (min_gpa, max_credits) pairs.
        floor_credits: Credit cap for students below every tier.
    """

    model_config = SettingsConfigDict(
        env_prefix="CREDIT_POLICY_",
        extra="ignore",
    )

    tiers: list[tuple[float, int]] = Field(
        default_factory=lambda: [(3.0, 24), (2.5, 21), (2.0, 18)],
    )
    floor_credits: int = Field(default=15, ge=0)

    @field_validator("tiers")
    @classmethod
    def sort_tiers(cls, value: list[tuple[float, int]]) -> list[tuple[float, int]]:
        """Order tiers by descending minimum GPA.

        Raises:
            ValueError: If a tier has a negative GPA or credit cap.
        """
        for min_gpa, max_credits in value:
            if min_gpa < 0 or max_credits < 0:
                raise ValueError("Credit policy tiers must be non-negative")
        return sorted(value, key=lambda tier: tier[0], reverse=True)


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment.
        debug: Enable debug mode.
        log_level: Logging level.
        database: Database settings.
        smtp: SMTP settings.
        credit_policy: Credit policy settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    smtp: SMTPSettings = Field(default_factory=SMTPSettings)
    credit_policy: CreditPolicySettings = Field(default_factory=CreditPolicySettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with debug enabled.
        """
        if self.environment == "production" and self.debug:
            raise ValueError(
                "Debug mode must be disabled in production. "
                "Set DEBUG=false environment variable."
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
