# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for Registrar.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
- async_bridge: Running coroutines from synchronous code
"""

from registrar.utils.async_bridge import run_async
from registrar.utils.datetime import utc_now
from registrar.utils.logging import log_context, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "log_context",
    # Datetime
    "utc_now",
    # Async
    "run_async",
]
