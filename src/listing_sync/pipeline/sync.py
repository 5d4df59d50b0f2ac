"""Forward sync: copies open master records into their routed public collections."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from listing_sync.errors import (
    ContentFetchError,
    FetchError,
    RecordValidationError,
    TargetConfigError,
)
from listing_sync.pipeline.mapping import map_properties
from listing_sync.pipeline.results import Outcome, SyncSummary
from listing_sync.pipeline.routing import target_collections
from listing_sync.pipeline.sanitizer import prepare_content
from listing_sync.store.errors import StoreError

if TYPE_CHECKING:
    from listing_sync.catalog import CatalogSchema
    from listing_sync.config import CollectionConfig
    from listing_sync.models.page import Page
    from listing_sync.store import Block, DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MasterRef:
    """The routing and correlation fields of a validated master record."""

    title: str
    category: str
    tier: str
    master_id: int


def validate_master_record(page: Page, schema: CatalogSchema) -> MasterRef:
    """Extract the routing fields, raising ``RecordValidationError`` if any is absent."""
    fields = schema.fields
    title = page.plain_title(fields.title)
    category = page.select_name(fields.category)
    tier = page.select_name(fields.tier)
    master_id = page.unique_number(fields.master_id)

    missing = [
        name
        for name, value in (
            (fields.category, category),
            (fields.tier, tier),
            (fields.master_id, master_id),
        )
        if value is None or value == ""
    ]
    if missing:
        raise RecordValidationError(title, missing)
    return MasterRef(title=title, category=category, tier=tier, master_id=master_id)  # type: ignore[arg-type]


class ListingSyncOrchestrator:
    """Replicates each open master record into every public collection it routes to.

    Records are processed one at a time, and targets one at a time within a
    record. A target that already holds a page with the record's
    back-reference is skipped, so repeated runs never duplicate pages.
    """

    def __init__(
        self,
        store: DocumentStore,
        collections: CollectionConfig,
        schema: CatalogSchema,
    ) -> None:
        self._store = store
        self._collections = collections
        self._schema = schema

    async def run(self) -> SyncSummary:
        """Sync every open master record and return the tally.

        Raises ``FetchError`` when the open listing cannot be retrieved.
        """
        summary = SyncSummary()
        logger.info("Sync started")
        records = await self._fetch_open_records()
        logger.info("Fetched %d open listings", len(records))

        if not records:
            logger.info("No open listings to sync")
            return summary

        for page in records:
            await self._sync_record(page, summary)

        logger.info("Sync finished (%s)", summary)
        return summary

    async def _fetch_open_records(self) -> list[Page]:
        try:
            return await self._store.query(
                self._collections.master,
                self._schema.status_filter(self._schema.status.open),
            )
        except StoreError as exc:
            raise FetchError(f"Could not list open master records: {exc}") from exc

    async def _sync_record(self, page: Page, summary: SyncSummary) -> None:
        try:
            ref = validate_master_record(page, self._schema)
        except RecordValidationError as exc:
            logger.warning("Skipping inconsistent listing: %s", exc)
            summary.record(Outcome.ERROR)
            return

        targets = target_collections(ref.category, ref.tier)
        if not targets:
            logger.warning("Listing %r is out of scope (category=%s tier=%s)", ref.title, ref.category, ref.tier)
            summary.record(Outcome.SKIPPED)
            return

        logger.info("%s -> %d collections", ref.title, len(targets))
        properties = map_properties(page, self._schema)

        try:
            children = await self._load_content(page)
        except ContentFetchError as exc:
            logger.warning("  Copying %r without page content: %s", ref.title, exc)
            children = []

        for key in targets:
            outcome = await self._replicate(key, ref, properties, children)
            summary.record(outcome)

    async def _load_content(self, page: Page) -> list[Block]:
        try:
            blocks = await self._store.list_blocks(page.id)
        except StoreError as exc:
            raise ContentFetchError(str(exc)) from exc
        return prepare_content(blocks)

    def _collection_id(self, key: str) -> str:
        collection_id = self._collections.public.get(key)
        if not collection_id:
            raise TargetConfigError(key)
        return collection_id

    async def _replicate(
        self,
        key: str,
        ref: MasterRef,
        properties: dict[str, Any],
        children: list[Block],
    ) -> Outcome:
        """Create the record in one target collection unless it is already there."""
        try:
            collection_id = self._collection_id(key)
        except TargetConfigError as exc:
            logger.error("  %s (listing %r)", exc, ref.title)
            return Outcome.ERROR

        try:
            existing = await self._store.query(
                collection_id,
                self._schema.back_reference_filter(ref.master_id),
            )
            if existing:
                logger.info("  Skipped %s: already present", key)
                return Outcome.SKIPPED

            created = await self._store.create(collection_id, properties, children)
        except StoreError as exc:
            logger.error("  Failed on %s for listing %r: %s", key, ref.title, exc)
            return Outcome.ERROR

        logger.info("  Created in %s: %s...", key, created.id[:8])
        return Outcome.CREATED
