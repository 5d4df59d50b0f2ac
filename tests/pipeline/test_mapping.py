"""Tests for mapping master record properties onto a public record."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from listing_sync.pipeline.mapping import map_properties

if TYPE_CHECKING:
    from collections.abc import Callable

    from listing_sync.catalog import CatalogSchema
    from listing_sync.models.page import Page

_SPANS = [
    {
        "type": "text",
        "text": {"content": "Cut a 30s trailer", "link": None},
        "annotations": {"bold": True},
        "plain_text": "Cut a 30s trailer",
        "href": None,
    }
]
_DATE = {"start": "2026-11-01", "end": "2026-11-30", "time_zone": None}

_SOURCE_VALUES: dict[str, dict[str, Any]] = {
    "Summary": {"type": "rich_text", "rich_text": _SPANS},
    "Fee": {"type": "number", "number": 50000},
    "Budget": {"type": "number", "number": None},
    "Client": {"type": "select", "select": {"id": "x1", "name": "Acme", "color": "red"}},
    "Skills": {
        "type": "multi_select",
        "multi_select": [
            {"id": "s1", "name": "Premiere", "color": "blue"},
            {"id": "s2", "name": "After Effects", "color": "gray"},
        ],
    },
    "Deadline": {"type": "date", "date": _DATE},
    "Reference URL": {"type": "url", "url": "https://example.com/brief"},
    "Contact Email": {"type": "email", "email": "jobs@example.com"},
    "Contact Phone": {"type": "phone_number", "phone_number": "+81-3-0000-0000"},
    "Remote OK": {"type": "checkbox", "checkbox": True},
}

_EXPECTED: dict[str, dict[str, Any]] = {
    "Summary": {"rich_text": _SPANS},
    "Fee": {"number": 50000},
    "Budget": {"number": None},
    "Client": {"select": {"name": "Acme"}},
    "Skills": {"multi_select": [{"name": "Premiere"}, {"name": "After Effects"}]},
    "Deadline": {"date": _DATE},
    "Reference URL": {"url": "https://example.com/brief"},
    "Contact Email": {"email": "jobs@example.com"},
    "Contact Phone": {"phone_number": "+81-3-0000-0000"},
    "Remote OK": {"checkbox": True},
}


def _with_copy(schema: CatalogSchema, *names: str) -> CatalogSchema:
    return schema.model_copy(update={"copy_fields": names})


@pytest.mark.unit
class TestMapProperties:
    """Test the property mapper."""

    @pytest.mark.parametrize("name", sorted(_SOURCE_VALUES))
    def test_each_supported_type_maps_to_documented_shape(
        self,
        name: str,
        schema: CatalogSchema,
        make_master_page: Callable[..., Page],
    ) -> None:
        """Verify each supported property type emits its writable shape."""
        page = make_master_page(extra={name: _SOURCE_VALUES[name]})

        mapped = map_properties(page, _with_copy(schema, name))

        assert mapped[name] == _EXPECTED[name]

    def test_absent_select_maps_to_null_marker(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify a select with no option writes an explicit null."""
        page = make_master_page(extra={"Client": {"type": "select", "select": None}})

        mapped = map_properties(page, _with_copy(schema, "Client"))

        assert mapped["Client"] == {"select": None}

    def test_absent_multi_select_maps_to_empty_list(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify an empty multi-select is written as an empty list, not omitted."""
        page = make_master_page(extra={"Skills": {"type": "multi_select", "multi_select": []}})

        mapped = map_properties(page, _with_copy(schema, "Skills"))

        assert mapped["Skills"] == {"multi_select": []}

    def test_unrecognized_type_falls_back_to_rich_text(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify unknown property kinds are written as rich text."""
        page = make_master_page(
            extra={"Owner": {"type": "people", "people": [{"id": "u-1", "object": "user"}]}}
        )

        mapped = map_properties(page, _with_copy(schema, "Owner"))

        assert mapped["Owner"] == {"rich_text": []}

    def test_listed_but_absent_field_is_omitted(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify copy-listed properties missing from the page are not written."""
        mapped = map_properties(make_master_page(), _with_copy(schema, "Fee"))

        assert "Fee" not in mapped

    def test_unlisted_field_is_omitted(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify properties missing from the copy-list are not written."""
        page = make_master_page(extra={"Fee": {"type": "number", "number": 1}})

        mapped = map_properties(page, _with_copy(schema))

        assert "Fee" not in mapped

    def test_content_field_is_never_a_property(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify the long-form content field is left to the page body."""
        content = schema.fields.content
        page = make_master_page(extra={content: {"type": "rich_text", "rich_text": _SPANS}})

        mapped = map_properties(page, _with_copy(schema, content))

        assert content not in mapped

    def test_title_always_copied(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify the title is copied even when not in the copy-list."""
        page = make_master_page(title="Motion designer")

        mapped = map_properties(page, _with_copy(schema))

        spans = mapped[schema.fields.title]["title"]
        assert [span["plain_text"] for span in spans] == ["Motion designer"]

    def test_empty_title_copied_as_empty_list(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify an empty title is still written."""
        page = make_master_page(extra={schema.fields.title: {"type": "title", "title": []}})

        mapped = map_properties(page, _with_copy(schema))

        assert mapped[schema.fields.title] == {"title": []}

    def test_back_reference_from_unique_id(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify the back-reference carries the master record's unique id number."""
        mapped = map_properties(make_master_page(master_id=4242), schema)

        assert mapped[schema.fields.back_reference] == {"number": 4242}

    def test_no_back_reference_without_unique_id(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify the back-reference is omitted when the unique id has no number."""
        mapped = map_properties(make_master_page(master_id=None), schema)

        assert schema.fields.back_reference not in mapped

    def test_default_copy_list_maps_category(
        self, schema: CatalogSchema, make_master_page: Callable[..., Page]
    ) -> None:
        """Verify the bundled copy-list carries the category select across."""
        mapped = map_properties(make_master_page(category="design-production"), schema)

        assert mapped[schema.fields.category] == {"select": {"name": "design-production"}}
