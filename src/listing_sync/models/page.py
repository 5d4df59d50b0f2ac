"""Page document model and the property values the sync reads and writes.

Property values form a closed tagged union keyed on the ``type`` the store
reports. Every kind not listed here parses as ``UnknownValue``, which writes
back as rich text.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

RichText = list[dict[str, Any]]
UNTITLED = "(untitled)"


class SelectOption(BaseModel):
    name: str


class UniqueId(BaseModel):
    prefix: str | None = None
    number: int | None = None


class TitleValue(BaseModel):
    type: Literal["title"] = "title"
    title: RichText | None = None

    def to_write(self) -> dict[str, Any]:
        return {"title": self.title or []}


class RichTextValue(BaseModel):
    type: Literal["rich_text"] = "rich_text"
    rich_text: RichText | None = None

    def to_write(self) -> dict[str, Any]:
        return {"rich_text": self.rich_text or []}


class NumberValue(BaseModel):
    type: Literal["number"] = "number"
    number: int | float | None = None

    def to_write(self) -> dict[str, Any]:
        return {"number": self.number}


class SelectValue(BaseModel):
    type: Literal["select"] = "select"
    select: SelectOption | None = None

    def to_write(self) -> dict[str, Any]:
        # An explicit null clears the option on the created page.
        if self.select is None:
            return {"select": None}
        return {"select": {"name": self.select.name}}


class MultiSelectValue(BaseModel):
    type: Literal["multi_select"] = "multi_select"
    multi_select: list[SelectOption] | None = None

    def to_write(self) -> dict[str, Any]:
        return {"multi_select": [{"name": option.name} for option in self.multi_select or []]}


class DateValue(BaseModel):
    type: Literal["date"] = "date"
    date: dict[str, Any] | None = None

    def to_write(self) -> dict[str, Any]:
        return {"date": self.date}


class UrlValue(BaseModel):
    type: Literal["url"] = "url"
    url: str | None = None

    def to_write(self) -> dict[str, Any]:
        return {"url": self.url}


class EmailValue(BaseModel):
    type: Literal["email"] = "email"
    email: str | None = None

    def to_write(self) -> dict[str, Any]:
        return {"email": self.email}


class PhoneNumberValue(BaseModel):
    type: Literal["phone_number"] = "phone_number"
    phone_number: str | None = None

    def to_write(self) -> dict[str, Any]:
        return {"phone_number": self.phone_number}


class CheckboxValue(BaseModel):
    type: Literal["checkbox"] = "checkbox"
    checkbox: bool = False

    def to_write(self) -> dict[str, Any]:
        return {"checkbox": self.checkbox}


class StatusValue(BaseModel):
    """Workflow status. Read for filtering; writes back as empty rich text."""

    type: Literal["status"] = "status"
    status: SelectOption | None = None

    def to_write(self) -> dict[str, Any]:
        return {"rich_text": []}


class UniqueIdValue(BaseModel):
    """Store-assigned identifier. Read-only; writes back as empty rich text."""

    type: Literal["unique_id"] = "unique_id"
    unique_id: UniqueId | None = None

    def to_write(self) -> dict[str, Any]:
        return {"rich_text": []}


class UnknownValue(BaseModel):
    """Any property kind without a dedicated model."""

    model_config = ConfigDict(extra="allow")

    type: str
    rich_text: RichText | None = None

    def to_write(self) -> dict[str, Any]:
        return {"rich_text": self.rich_text or []}


_KNOWN_KINDS = frozenset(
    {
        "title",
        "rich_text",
        "number",
        "select",
        "multi_select",
        "date",
        "url",
        "email",
        "phone_number",
        "checkbox",
        "status",
        "unique_id",
    }
)


def _property_kind(value: Any) -> str:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return kind if kind in _KNOWN_KINDS else "unknown"


PropertyValue = Annotated[
    Union[
        Annotated[TitleValue, Tag("title")],
        Annotated[RichTextValue, Tag("rich_text")],
        Annotated[NumberValue, Tag("number")],
        Annotated[SelectValue, Tag("select")],
        Annotated[MultiSelectValue, Tag("multi_select")],
        Annotated[DateValue, Tag("date")],
        Annotated[UrlValue, Tag("url")],
        Annotated[EmailValue, Tag("email")],
        Annotated[PhoneNumberValue, Tag("phone_number")],
        Annotated[CheckboxValue, Tag("checkbox")],
        Annotated[StatusValue, Tag("status")],
        Annotated[UniqueIdValue, Tag("unique_id")],
        Annotated[UnknownValue, Tag("unknown")],
    ],
    Discriminator(_property_kind),
]


class Page(BaseModel):
    """A record in a master or public collection."""

    id: str
    archived: bool = False
    properties: dict[str, PropertyValue] = Field(default_factory=dict)

    def plain_title(self, name: str) -> str:
        """Return the title text for logging, or a placeholder when empty."""
        prop = self.properties.get(name)
        if not isinstance(prop, TitleValue) or not prop.title:
            return UNTITLED
        return "".join(span.get("plain_text", "") for span in prop.title) or UNTITLED

    def select_name(self, name: str) -> str | None:
        """Return the chosen option of a select or status property."""
        prop = self.properties.get(name)
        if isinstance(prop, SelectValue) and prop.select:
            return prop.select.name
        if isinstance(prop, StatusValue) and prop.status:
            return prop.status.name
        return None

    def unique_number(self, name: str) -> int | None:
        """Return the numeric part of a unique id property."""
        prop = self.properties.get(name)
        if isinstance(prop, UniqueIdValue) and prop.unique_id:
            return prop.unique_id.number
        return None

    def number(self, name: str) -> int | float | None:
        prop = self.properties.get(name)
        return prop.number if isinstance(prop, NumberValue) else None
