# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Run async client libraries from synchronous code.

The enrollment workflows are synchronous, while some delivery clients
(aiosmtplib) only expose coroutines. Each thread keeps one persistent event
loop so clients that cache loop-bound resources keep working across calls.
"""

import asyncio
import logging
import threading
from typing import Any, Coroutine, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Thread-local storage for event loops
_thread_local = threading.local()


def _get_thread_event_loop() -> asyncio.AbstractEventLoop:
    """Get or create a persistent event loop for the current thread.

    Returns:
        Event loop for current thread.
    """
    loop = getattr(_thread_local, "event_loop", None)

    if loop is None or loop.is_closed():
        loop = asyncio.new_event_loop()
        _thread_local.event_loop = loop

        logger.debug(
            "Created new event loop for thread %s",
            threading.current_thread().name,
        )

    return loop


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from synchronous code.

    Args:
        coro: Coroutine to run.

    Returns:
        Result of coroutine.

    Raises:
        RuntimeError: If called from a thread whose event loop is running.

    Example:
        >>> run_async(aiosmtplib.send(message, hostname="smtp.example.com"))
    """
    loop = _get_thread_event_loop()
    return loop.run_until_complete(coro)
