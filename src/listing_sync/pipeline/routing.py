"""Routing table: which public collections receive a master record."""

from __future__ import annotations

from listing_sync.catalog import CATEGORY_PREFIXES, TIERS, collection_key


def target_collections(category: str | None, tier: str | None) -> list[str]:
    """Return the public collection keys a record of ``category``/``tier`` is copied to.

    A tier is published to its own collection and every broader one, so
    ``Tier1`` fans out to all three tiers of its category and ``Tier3`` only
    to the last. Unknown categories or tiers route nowhere.
    """
    prefix = CATEGORY_PREFIXES.get(category) if category else None
    if prefix is None or tier not in TIERS:
        return []
    start = TIERS.index(tier) + 1
    return [collection_key(prefix, number) for number in range(start, len(TIERS) + 1)]
