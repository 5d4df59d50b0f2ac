"""Request pacing and retry for store calls."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, TypeVar

from listing_sync.store.errors import RateLimitedError, TransientStoreError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 3
MIN_INTERVAL_SECONDS = 0.35
DEFAULT_RETRY_AFTER_SECONDS = 60.0


class RetryPolicy:
    """Issues store calls one at a time, spaced apart, retrying recoverable failures.

    A call is attempted at most ``max_attempts`` times. Rate-limit responses
    wait for the advised duration; transient failures back off
    exponentially (``2 ** attempt`` seconds). Any other ``StoreError``, or a
    failure on the last attempt, propagates to the caller.
    """

    def __init__(
        self,
        *,
        max_attempts: int = MAX_ATTEMPTS,
        min_interval: float = MIN_INTERVAL_SECONDS,
        default_retry_after: float = DEFAULT_RETRY_AFTER_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_attempts = max_attempts
        self.min_interval = min_interval
        self.default_retry_after = default_retry_after
        self._sleep = sleep
        self._clock = clock
        self._last_completed: float | None = None

    async def run(self, call: Callable[[], Awaitable[T]], *, operation: str) -> T:
        """Await ``call()`` under the pacing and retry rules."""
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._attempt(call)
            except RateLimitedError as exc:
                if attempt >= self.max_attempts:
                    raise
                delay = exc.retry_after if exc.retry_after is not None else self.default_retry_after
                logger.warning(
                    "Rate limited on %s, waiting %.1fs (attempt %d/%d)",
                    operation,
                    delay,
                    attempt,
                    self.max_attempts,
                )
                await self._sleep(delay)
            except TransientStoreError as exc:
                if attempt >= self.max_attempts:
                    raise
                backoff = float(2**attempt)
                logger.warning(
                    "Retrying %s in %.0fs after %s (attempt %d/%d)",
                    operation,
                    backoff,
                    exc,
                    attempt,
                    self.max_attempts,
                )
                await self._sleep(backoff)

    async def _attempt(self, call: Callable[[], Awaitable[T]]) -> T:
        await self._wait_for_slot()
        try:
            return await call()
        finally:
            self._last_completed = self._clock()

    async def _wait_for_slot(self) -> None:
        if self._last_completed is None or self.min_interval <= 0:
            return
        remaining = self.min_interval - (self._clock() - self._last_completed)
        if remaining > 0:
            await self._sleep(remaining)
