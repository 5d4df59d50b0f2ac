"""Builds the property set written to a public collection from a master record."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from listing_sync.models.page import TitleValue

if TYPE_CHECKING:
    from listing_sync.catalog import CatalogSchema
    from listing_sync.models.page import Page


def map_properties(page: Page, schema: CatalogSchema) -> dict[str, Any]:
    """Convert the copy-listed properties of ``page`` into writable values.

    Listed properties absent from the page are omitted. The long-form content
    field is carried as page body, not as a property. The title is always
    copied, and the back-reference is set from the page's unique id.
    """
    fields = schema.fields
    mapped: dict[str, Any] = {}

    for name in schema.copy_fields:
        if name in (fields.content, fields.title):
            continue
        prop = page.properties.get(name)
        if prop is None:
            continue
        mapped[name] = prop.to_write()

    title = page.properties.get(fields.title)
    if isinstance(title, TitleValue):
        mapped[fields.title] = title.to_write()

    master_id = page.unique_number(fields.master_id)
    if master_id is not None:
        mapped[fields.back_reference] = {"number": master_id}

    return mapped
