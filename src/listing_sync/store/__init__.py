"""Document store access: the Notion adapter, query filters and retry policy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from listing_sync.store.client import Block, NotionStore
from listing_sync.store.errors import RateLimitedError, StoreError, TransientStoreError
from listing_sync.store.filters import Equals
from listing_sync.store.retry import RetryPolicy

if TYPE_CHECKING:
    from listing_sync.models.page import Page


class DocumentStore(Protocol):
    """Operations the orchestrators issue against the remote store."""

    async def query(self, collection_id: str, query_filter: Equals) -> list[Page]:
        """Return every page in the collection matching the filter."""
        ...

    async def create(
        self,
        collection_id: str,
        properties: dict[str, Any],
        children: list[Block] | None = None,
    ) -> Page:
        """Create a page and return it."""
        ...

    async def archive(self, page_id: str) -> Page:
        """Archive a page and return it."""
        ...

    async def list_blocks(self, page_id: str) -> list[Block]:
        """Return every top-level content block of a page."""
        ...


__all__ = [
    "Block",
    "DocumentStore",
    "Equals",
    "NotionStore",
    "RateLimitedError",
    "RetryPolicy",
    "StoreError",
    "TransientStoreError",
]
