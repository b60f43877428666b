# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging configuration using structlog.

Registrar modules log through the standard library. setup_logging() attaches
a structlog ProcessorFormatter to the "registrar" logger, so those records
are rendered as colored console lines in development and as JSON elsewhere.
Values bound with log_context() are merged into every record emitted while
the context is open.

Example:
    >>> import logging
    >>> from registrar.utils.logging import setup_logging, log_context
    >>> from registrar.core.config import get_settings
    >>> setup_logging(get_settings())
    >>> with log_context(student_id="STU001", course_code="CS101"):
    ...     logging.getLogger("registrar.demo").info("Enrollment approved")
"""

import logging
import sys
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from registrar.core.config.settings import Settings

PACKAGE_LOGGER = "registrar"
QUIET_LOGGERS = ("sqlalchemy", "aiosmtplib", "asyncio")


def _build_formatter(settings: "Settings") -> structlog.stdlib.ProcessorFormatter:
    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_development or settings.debug:
        render: list[Processor] = [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        render = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *render],
    )


def setup_logging(settings: "Settings") -> None:
    """Configure structured logging for the application.

    Safe to call more than once; the previous handler is replaced.

    Args:
        settings: Application settings containing log_level and debug flag.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(settings))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def log_context(**kwargs: object) -> AbstractContextManager[None]:
    """Bind values to every log record emitted inside the block.

    Values bound by an enclosing block are restored on exit.

    Args:
        **kwargs: Key-value pairs to add to the logging context.
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
