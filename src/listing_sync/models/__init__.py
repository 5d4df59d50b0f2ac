"""Document models for master and public collection records."""

from listing_sync.models.page import (
    UNTITLED,
    Page,
    PropertyValue,
    SelectValue,
    TitleValue,
    UniqueIdValue,
    UnknownValue,
)

__all__ = [
    "UNTITLED",
    "Page",
    "PropertyValue",
    "SelectValue",
    "TitleValue",
    "UniqueIdValue",
    "UnknownValue",
]
