# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for Registrar.

Settings are Pydantic-based and loaded from environment variables.

Example:
    >>> from registrar.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.credit_policy.floor_credits
    15
"""

from registrar.core.config.settings import (
    CreditPolicySettings,
    DatabaseSettings,
    Settings,
    SMTPSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "SMTPSettings",
    "CreditPolicySettings",
]
