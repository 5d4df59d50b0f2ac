"""Catalog topology and the field schema shared by the master and public collections.

The topology (which categories and tiers exist, and therefore which public
collections exist) is fixed. Field names, status values and the copy-list
live in ``catalog.json`` and can be swapped for another file at runtime.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from listing_sync.store.filters import Equals

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "catalog.json"

CATEGORY_PREFIXES: dict[str, str] = {
    "video-production": "video",
    "design-production": "design",
}

# Ordered from most exclusive to broadest.
TIERS: tuple[str, ...] = ("Tier1", "Tier2", "Tier3")

logger = logging.getLogger(__name__)


def collection_key(prefix: str, tier_number: int) -> str:
    """Return the public collection key for a category prefix and 1-based tier."""
    return f"{prefix}_tier{tier_number}"


PUBLIC_COLLECTION_KEYS: tuple[str, ...] = tuple(
    collection_key(prefix, number)
    for prefix in CATEGORY_PREFIXES.values()
    for number in range(1, len(TIERS) + 1)
)


class FieldNames(BaseModel):
    """Property names used by the collections."""

    model_config = ConfigDict(frozen=True)

    title: str
    master_id: str
    category: str
    tier: str
    status: str
    content: str
    back_reference: str


class StatusValues(BaseModel):
    model_config = ConfigDict(frozen=True)

    property_type: str = "status"
    open: str
    closed: str


class CatalogSchema(BaseModel):
    """Field schema and copy-list for replicating master records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    fields: FieldNames
    status: StatusValues
    copy_fields: tuple[str, ...] = Field(default=(), alias="copy")

    def status_filter(self, value: str) -> Equals:
        """Match master records whose status equals ``value``."""
        return Equals(self.fields.status, self.status.property_type, value)

    def back_reference_filter(self, master_id: int) -> Equals:
        """Match public records copied from the master record ``master_id``."""
        return Equals(self.fields.back_reference, "number", master_id)


@lru_cache(maxsize=4)
def load_catalog_schema(path: str | Path | None = None) -> CatalogSchema:
    """Load the catalog schema from ``path``, or the bundled default.

    Raises ``FileNotFoundError`` if the file does not exist.
    """
    source = Path(path) if path else DEFAULT_CATALOG_PATH
    schema = CatalogSchema.model_validate_json(source.read_text(encoding="utf-8"))
    logger.debug(
        "Catalog schema loaded: path=%s copy_fields=%d",
        source,
        len(schema.copy_fields),
    )
    return schema
