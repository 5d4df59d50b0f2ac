"""Prepares content blocks read from one page for creation under another."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from listing_sync.store.client import Block

READ_ONLY_ATTRIBUTES = frozenset(
    {
        "id",
        "created_time",
        "last_edited_time",
        "created_by",
        "last_edited_by",
        "has_children",
        "parent",
        "archived",
    }
)

# Embedded databases and sub-pages cannot be duplicated by value.
UNCOPYABLE_KINDS = frozenset({"child_database", "child_page"})


def sanitize_block(block: Block) -> Block:
    """Return ``{kind: payload}`` with server-assigned attributes removed from the payload."""
    kind = block.get("type")
    payload: dict[str, Any] | None = block.get(kind) if kind else None
    if not payload:
        return {"type": kind, kind: {}}
    return {
        "type": kind,
        kind: {key: value for key, value in payload.items() if key not in READ_ONLY_ATTRIBUTES},
    }


def prepare_content(blocks: Iterable[Block]) -> list[Block]:
    """Drop uncopyable blocks and sanitize the rest, preserving order."""
    return [sanitize_block(block) for block in blocks if block.get("type") not in UNCOPYABLE_KINDS]
