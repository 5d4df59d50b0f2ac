"""Replication pipeline: routing, mapping, sanitizing, and the two orchestrators."""

from listing_sync.pipeline.cleanup import ListingCleanupOrchestrator
from listing_sync.pipeline.sync import ListingSyncOrchestrator

__all__ = ["ListingCleanupOrchestrator", "ListingSyncOrchestrator"]
