"""
Bounded, immediate retry for flaky but idempotent requests.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, TypeVar

from .errors import RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry(
    identifier: str,
    max_attempts: int,
    operation: Callable[[], Awaitable[T]],
) -> T:
    """Await ``operation`` until it succeeds or ``max_attempts`` is spent.

    There is no delay between attempts. When every attempt fails a
    :class:`RetryExhaustedError` carrying ``identifier`` is raised from the
    last error.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    last_error: Optional[Exception] = None
    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            last_error = e
            logger.warning(
                "Attempt %d/%d failed for %s: %s",
                attempt,
                max_attempts,
                identifier,
                e,
            )

    raise RetryExhaustedError(identifier, max_attempts, last_error) from last_error
