"""Query filters understood by the document store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Equals:
    """Single-property equality predicate.

    ``kind`` is the property type the store filters on (``status``,
    ``select``, ``number``).
    """

    property: str
    kind: str
    value: str | int

    def to_notion(self) -> dict[str, Any]:
        return {"property": self.property, self.kind: {"equals": self.value}}
