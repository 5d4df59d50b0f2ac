"""Shared fixtures: catalog schema, collection ids, page factories, in-memory store."""

from __future__ import annotations

import itertools
from collections import defaultdict
from typing import TYPE_CHECKING, Any

import httpx
import pytest
from notion_client.errors import APIErrorCode, APIResponseError

from listing_sync.catalog import PUBLIC_COLLECTION_KEYS, CatalogSchema, load_catalog_schema
from listing_sync.config import CollectionConfig
from listing_sync.models.page import Page

if TYPE_CHECKING:
    from collections.abc import Callable

    from listing_sync.store.filters import Equals

MASTER_DB = "master-db"


def public_db(key: str) -> str:
    return f"{key}-db"


class FakeStore:
    """In-memory document store that records every call it receives."""

    def __init__(self) -> None:
        self.pages: dict[str, list[Page]] = defaultdict(list)
        self.blocks: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.created: list[tuple[str, dict[str, Any], list[dict[str, Any]] | None]] = []
        self.failures: dict[tuple[str, str], Exception] = {}
        self._ids = itertools.count(1)

    def _record(self, operation: str, target: str) -> None:
        self.calls.append((operation, target))
        failure = self.failures.get((operation, target))
        if failure is not None:
            raise failure

    def calls_for(self, operation: str) -> list[str]:
        return [target for op, target in self.calls if op == operation]

    @staticmethod
    def _matches(page: Page, query_filter: Equals) -> bool:
        if query_filter.kind == "number":
            return page.number(query_filter.property) == query_filter.value
        return page.select_name(query_filter.property) == query_filter.value

    async def query(self, collection_id: str, query_filter: Equals) -> list[Page]:
        self._record("query", collection_id)
        return [
            page
            for page in self.pages[collection_id]
            if not page.archived and self._matches(page, query_filter)
        ]

    async def create(
        self,
        collection_id: str,
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> Page:
        self._record("create", collection_id)
        page = Page.model_validate(
            {
                "id": f"{next(self._ids):08d}-{collection_id}",
                "properties": {
                    name: {"type": next(iter(value)), **value} for name, value in properties.items()
                },
            }
        )
        self.pages[collection_id].append(page)
        self.created.append((collection_id, properties, children))
        return page

    async def archive(self, page_id: str) -> Page:
        self._record("archive", page_id)
        for pages in self.pages.values():
            for page in pages:
                if page.id == page_id:
                    page.archived = True
                    return page
        raise KeyError(page_id)

    async def list_blocks(self, page_id: str) -> list[dict[str, Any]]:
        self._record("list_blocks", page_id)
        return list(self.blocks.get(page_id, []))


def rich_text(text: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": text}, "plain_text": text}]


@pytest.fixture
def schema() -> CatalogSchema:
    return load_catalog_schema()


@pytest.fixture
def collections() -> CollectionConfig:
    return CollectionConfig(
        master=MASTER_DB,
        public={key: public_db(key) for key in PUBLIC_COLLECTION_KEYS},
    )


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def make_master_page(schema: CatalogSchema) -> Callable[..., Page]:
    """Build a master record with routing fields set; ``None`` leaves a field empty."""
    fields = schema.fields

    def _make(
        page_id: str = "master-page-1",
        *,
        title: str = "Promo video editor",
        category: str | None = "video-production",
        tier: str | None = "Tier1",
        master_id: int | None = 101,
        status: str = "Open",
        extra: dict[str, Any] | None = None,
    ) -> Page:
        properties: dict[str, Any] = {
            fields.title: {"type": "title", "title": rich_text(title)},
            fields.category: {
                "type": "select",
                "select": {"name": category} if category else None,
            },
            fields.tier: {"type": "select", "select": {"name": tier} if tier else None},
            fields.master_id: {
                "type": "unique_id",
                "unique_id": {"prefix": "JOB", "number": master_id},
            },
            fields.status: {"type": "status", "status": {"name": status}},
        }
        properties.update(extra or {})
        return Page.model_validate({"id": page_id, "properties": properties})

    return _make


@pytest.fixture
def make_api_error() -> Callable[..., APIResponseError]:
    """Build a notion-client API error backed by a real httpx response."""

    def _make(
        status: int,
        code: APIErrorCode,
        *,
        headers: dict[str, str] | None = None,
        message: str = "Request failed",
    ) -> APIResponseError:
        request = httpx.Request("POST", "https://api.notion.com/v1/pages")
        response = httpx.Response(
            status,
            headers=headers,
            json={"object": "error", "status": status, "code": code.value, "message": message},
            request=request,
        )
        return APIResponseError(response, message, code)

    return _make


@pytest.fixture
def make_public_page(schema: CatalogSchema) -> Callable[..., Page]:
    """Build a public copy carrying a back-reference to ``master_id``."""

    def _make(page_id: str, master_id: int) -> Page:
        return Page.model_validate(
            {
                "id": page_id,
                "properties": {
                    schema.fields.back_reference: {"type": "number", "number": master_id},
                },
            }
        )

    return _make
