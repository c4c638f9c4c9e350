"""Bounded execution of remote collaborator calls.

Every call is submitted to a small shared worker pool and waited on for at
most ``timeout`` seconds. A call that overruns raises ``RemoteCallTimeout``;
the worker is left to finish on its own since remote calls cannot be
cancelled mid-flight.

Workers start with a fresh context: adapters that need a Protean domain
context push their own.
"""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import TypeVar

import structlog

from shared.errors import RemoteCallTimeout

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="remote-call")


def call_with_timeout(operation: str, fn: Callable[..., T], *args, timeout: float, **kwargs) -> T:
    future = _executor.submit(fn, *args, **kwargs)
    try:
        return future.result(timeout=timeout)
    except FutureTimeout:
        logger.warning("Remote call timed out", operation=operation, timeout=timeout)
        raise RemoteCallTimeout(operation, timeout) from None
