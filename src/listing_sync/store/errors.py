"""Failures reported by the document store, classified for the retry policy."""

from __future__ import annotations

from listing_sync.errors import SyncError


class StoreError(SyncError):
    """A store call failed in a way that retrying will not fix."""


class RateLimitedError(StoreError):
    """The store asked the caller to slow down."""

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class TransientStoreError(StoreError):
    """Connection failure, timeout, or a 5xx response."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
