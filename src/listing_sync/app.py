"""Entry points for the forward-sync and cleanup jobs."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from listing_sync.catalog import load_catalog_schema
from listing_sync.config import load_settings
from listing_sync.errors import ConfigError, FetchError
from listing_sync.logging import configure_logging
from listing_sync.pipeline import ListingCleanupOrchestrator, ListingSyncOrchestrator
from listing_sync.store import NotionStore

if TYPE_CHECKING:
    Orchestrator = type[ListingSyncOrchestrator] | type[ListingCleanupOrchestrator]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


async def _run(job: str, orchestrator_class: Orchestrator) -> int:
    """Load settings, build the store, and run one orchestrator to completion."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        configure_logging()
        logger.error(str(exc))  # noqa: TRY400
        return EXIT_FAILURE
    configure_logging(settings.app.log_level, log_file=settings.app.log_file or None)

    try:
        settings.require_complete()
    except ConfigError as exc:
        logger.error(str(exc))  # noqa: TRY400
        return EXIT_FAILURE

    try:
        schema = load_catalog_schema(settings.app.catalog_path or None)
    except (OSError, ValidationError) as exc:
        logger.error("Could not load catalog schema: %s", exc)  # noqa: TRY400
        return EXIT_FAILURE

    store = NotionStore(settings.notion)
    await store.initialize()
    try:
        orchestrator = orchestrator_class(store, settings.collections, schema)
        await orchestrator.run()
    except FetchError as exc:
        logger.error("%s aborted: %s", job, exc)  # noqa: TRY400
        return EXIT_FAILURE
    finally:
        await store.close()
    return EXIT_OK


async def run_sync() -> int:
    """Copy open master listings into the public collections."""
    return await _run("Sync", ListingSyncOrchestrator)


async def run_cleanup() -> int:
    """Archive public copies of closed master listings."""
    return await _run("Cleanup", ListingCleanupOrchestrator)


def sync_main() -> None:
    """Console entry point for the forward sync."""
    raise SystemExit(asyncio.run(run_sync()))


def cleanup_main() -> None:
    """Console entry point for the cleanup."""
    raise SystemExit(asyncio.run(run_cleanup()))


__all__ = ["cleanup_main", "run_cleanup", "run_sync", "sync_main"]
