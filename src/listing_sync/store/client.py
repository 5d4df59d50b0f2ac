"""Async Notion client wrapper exposing the document-store operations the sync needs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from notion_client import AsyncClient
from notion_client.errors import (
    APIErrorCode,
    APIResponseError,
    HTTPResponseError,
    RequestTimeoutError,
)
from pydantic import ValidationError

from listing_sync.models.page import Page
from listing_sync.store.errors import RateLimitedError, StoreError, TransientStoreError
from listing_sync.store.retry import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from listing_sync.config import NotionConfig
    from listing_sync.store.filters import Equals

logger = logging.getLogger(__name__)

_HTTP_SERVER_ERROR = 500

Block = dict[str, Any]


def _retry_after(headers: httpx.Headers | None) -> float | None:
    raw = headers.get("retry-after") if headers is not None else None
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def classify_error(exc: Exception) -> StoreError:
    """Translate a client or transport exception into the store error taxonomy."""
    if isinstance(exc, APIResponseError) and exc.code == APIErrorCode.RateLimited:
        return RateLimitedError(str(exc), retry_after=_retry_after(exc.headers))
    if isinstance(exc, HTTPResponseError):
        if exc.status >= _HTTP_SERVER_ERROR:
            return TransientStoreError(str(exc), status=exc.status)
        return StoreError(str(exc))
    if isinstance(exc, RequestTimeoutError | httpx.TransportError):
        return TransientStoreError(str(exc) or type(exc).__name__)
    return StoreError(str(exc))


class NotionStore:
    """Manages the async Notion client and issues paced, retried requests through it."""

    def __init__(self, config: NotionConfig, *, retry: RetryPolicy | None = None) -> None:
        self._config = config
        self._retry = retry or RetryPolicy()
        self._client: AsyncClient | None = None

    async def initialize(self) -> None:
        """Create the authenticated client."""
        self._client = AsyncClient(auth=self._config.api_key, timeout_ms=self._config.timeout_ms)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> AsyncClient:
        if self._client is None:
            raise RuntimeError("NotionStore not initialized, call initialize() first")
        return self._client

    async def _request(self, operation: str, call: Callable[[], Awaitable[Any]]) -> Any:
        async def attempt() -> Any:
            try:
                return await call()
            except Exception as exc:
                raise classify_error(exc) from exc

        return await self._retry.run(attempt, operation=operation)

    async def _paginate(
        self,
        operation: str,
        fetch: Callable[..., Awaitable[Any]],
        **params: Any,
    ) -> AsyncIterator[dict[str, Any]]:
        """Yield every result across all pages, following cursors in order."""
        cursor: str | None = None
        while True:
            page_params = dict(params)
            if cursor:
                page_params["start_cursor"] = cursor
            response = await self._request(operation, lambda: fetch(**page_params))
            for item in response.get("results", []):
                yield item
            cursor = response.get("next_cursor") if response.get("has_more") else None
            if not cursor:
                return

    @staticmethod
    def _to_page(raw: Any) -> Page:
        try:
            return Page.model_validate(raw)
        except ValidationError as exc:
            raise StoreError(f"Unexpected page payload: {exc}") from exc

    async def iter_query(self, collection_id: str, query_filter: Equals) -> AsyncIterator[Page]:
        """Lazily yield every page in a collection that matches ``query_filter``."""
        async for raw in self._paginate(
            "query",
            self.client.databases.query,
            database_id=collection_id,
            filter=query_filter.to_notion(),
        ):
            yield self._to_page(raw)

    async def query(self, collection_id: str, query_filter: Equals) -> list[Page]:
        """Return all pages in a collection matching ``query_filter``."""
        return [page async for page in self.iter_query(collection_id, query_filter)]

    async def create(
        self,
        collection_id: str,
        properties: dict[str, Any],
        children: list[Block] | None = None,
    ) -> Page:
        """Create a page in a collection, with optional body content."""
        params: dict[str, Any] = {
            "parent": {"database_id": collection_id},
            "properties": properties,
        }
        if children:
            params["children"] = children
        raw = await self._request("create", lambda: self.client.pages.create(**params))
        return self._to_page(raw)

    async def archive(self, page_id: str) -> Page:
        """Mark a page archived."""
        raw = await self._request(
            "archive",
            lambda: self.client.pages.update(page_id=page_id, archived=True),
        )
        return self._to_page(raw)

    async def iter_blocks(self, page_id: str) -> AsyncIterator[Block]:
        """Lazily yield the top-level content blocks of a page."""
        async for block in self._paginate(
            "list_blocks",
            self.client.blocks.children.list,
            block_id=page_id,
        ):
            yield block

    async def list_blocks(self, page_id: str) -> list[Block]:
        """Return all top-level content blocks of a page."""
        return [block async for block in self.iter_blocks(page_id)]
