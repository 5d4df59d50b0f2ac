"""Cleanup: archives public copies of master records that have closed."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from listing_sync.errors import FetchError, TargetConfigError
from listing_sync.pipeline.results import CleanupSummary
from listing_sync.store.errors import StoreError

if TYPE_CHECKING:
    from listing_sync.catalog import CatalogSchema
    from listing_sync.config import CollectionConfig
    from listing_sync.models.page import Page
    from listing_sync.store import DocumentStore

logger = logging.getLogger(__name__)


class ListingCleanupOrchestrator:
    """Archives every public page whose back-reference points at a closed master record.

    Each closed record is searched for in all public collections, not only the
    ones its current category and tier route to, so copies placed before a
    reclassification are retracted too.
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

    async def run(self) -> CleanupSummary:
        """Retract every closed master record and return the tally.

        Raises ``FetchError`` when the closed listing cannot be retrieved.
        """
        summary = CleanupSummary()
        logger.info("Cleanup started")
        records = await self._fetch_closed_records()
        logger.info("Fetched %d closed listings", len(records))

        if not records:
            logger.info("No closed listings to clean up")
            return summary

        for page in records:
            summary.merge(await self._retract_record(page))

        logger.info("Cleanup finished (%s)", summary)
        return summary

    async def _fetch_closed_records(self) -> list[Page]:
        try:
            return await self._store.query(
                self._collections.master,
                self._schema.status_filter(self._schema.status.closed),
            )
        except StoreError as exc:
            raise FetchError(f"Could not list closed master records: {exc}") from exc

    async def _retract_record(self, page: Page) -> CleanupSummary:
        fields = self._schema.fields
        title = page.plain_title(fields.title)
        master_id = page.unique_number(fields.master_id)
        result = CleanupSummary()

        if master_id is None:
            logger.warning("Skipping listing %r: no %s", title, fields.master_id)
            result.errors += 1
            return result

        logger.info("Searching public collections for %s (ID: %d)", title, master_id)
        for key, collection_id in self._collections.public.items():
            try:
                if not collection_id:
                    raise TargetConfigError(key)
                await self._archive_copies(key, collection_id, master_id, result)
            except (TargetConfigError, StoreError) as exc:
                logger.error("  Failed on %s for listing %r: %s", key, title, exc)
                result.errors += 1

        logger.info("  %s: %s", title, result)
        return result

    async def _archive_copies(
        self,
        key: str,
        collection_id: str,
        master_id: int,
        result: CleanupSummary,
    ) -> None:
        """Archive every page in one collection that references ``master_id``."""
        found = await self._store.query(collection_id, self._schema.back_reference_filter(master_id))
        for page in found:
            await self._store.archive(page.id)
            result.archived += 1
            logger.info("  Archived from %s: %s...", key, page.id[:8])
