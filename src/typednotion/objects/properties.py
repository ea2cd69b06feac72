"""Property variants.

The same property *kind* (``PropertyType``) appears in two different roles:

* **Values** -- what a page holds for a property.  A page's title is a list
  of rich text spans, a select is a single option, and so on.
* **Schemas** -- how a database defines a property.  A database's title
  property carries an empty configuration object, a select lists its
  options, a number carries its display format.

Both families are tagged unions keyed by ``PropertyType`` and both keep the
payload under the key equal to the tag::

    {"id": "title", "type": "title", "title": [...]}     # value
    {"id": "title", "name": "Name", "type": "title", "title": {}}   # schema

The decoder picks the family from context (page vs database), never from
the payload's shape alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .common import Color, DateRange, ObjectReference
from .rich_text import RichText
from .users import PersonUser, User


class PropertyType(str, Enum):
    TITLE = "title"
    RICH_TEXT = "rich_text"
    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    PEOPLE = "people"
    FILES = "files"
    CHECKBOX = "checkbox"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    FORMULA = "formula"
    RELATION = "relation"
    ROLLUP = "rollup"
    CREATED_TIME = "created_time"
    CREATED_BY = "created_by"
    LAST_EDITED_TIME = "last_edited_time"
    LAST_EDITED_BY = "last_edited_by"


class FormulaResultType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


class RollupResultType(str, Enum):
    NUMBER = "number"
    DATE = "date"
    ARRAY = "array"


class FileType(str, Enum):
    FILE = "file"
    EXTERNAL = "external"


def _encode(value: Any) -> Any:
    if isinstance(value, list):
        return [_encode(item) for item in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


# ---------------------------------------------------------------------------
# Supporting records
# ---------------------------------------------------------------------------

@dataclass
class SelectOption:
    name: str = ""
    id: str = ""
    color: str = Color.DEFAULT

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.id:
            data["id"] = self.id
        if self.color != Color.DEFAULT:
            data["color"] = self.color
        return data


@dataclass
class FileReference:
    """A file attached to a ``files`` property.

    ``expiry_time`` is only set for Notion-hosted (``file``) files.
    """

    name: str = ""
    type: FileType = FileType.EXTERNAL
    url: str = ""
    expiry_time: str | None = None

    def to_dict(self) -> dict[str, Any]:
        target: dict[str, Any] = {"url": self.url}
        if self.type is FileType.FILE:
            target["expiry_time"] = self.expiry_time
        return {"name": self.name, "type": self.type.value, self.type.value: target}


@dataclass
class FormulaResult:
    """The computed value of a formula.

    ``value`` is a ``str``, a number, a ``bool`` or a :class:`DateRange`
    according to ``type``; any of them may be ``None``.
    """

    type: FormulaResultType = FormulaResultType.STRING
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, self.type.value: _encode(self.value)}


@dataclass
class RollupResult:
    """The aggregated value of a rollup.

    For ``array`` rollups ``value`` is a list of :class:`PropertyValue`
    objects (without ids); otherwise a number or :class:`DateRange`.
    """

    type: RollupResultType = RollupResultType.NUMBER
    value: Any = None
    function: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = {"type": self.type.value, self.type.value: _encode(self.value)}
        if self.function:
            data["function"] = self.function
        return data


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

@dataclass
class PropertyValue:
    """A page's value for one property.

    Subclasses name their payload attribute after the tag, so the generic
    :meth:`to_dict` can find it.
    """

    id: str = ""
    type: PropertyType = field(default=PropertyType.TITLE, init=False)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        data["type"] = self.type.value
        data[self.type.value] = _encode(getattr(self, self.type.value))
        return data


@dataclass
class TitleValue(PropertyValue):
    title: list[RichText] = field(default_factory=list)
    type: PropertyType = field(default=PropertyType.TITLE, init=False)


@dataclass
class RichTextValue(PropertyValue):
    rich_text: list[RichText] = field(default_factory=list)
    type: PropertyType = field(default=PropertyType.RICH_TEXT, init=False)


@dataclass
class TextValue(PropertyValue):
    """Rich text under the legacy ``text`` tag."""

    text: list[RichText] = field(default_factory=list)
    type: PropertyType = field(default=PropertyType.TEXT, init=False)


@dataclass
class NumberValue(PropertyValue):
    number: float | None = None
    type: PropertyType = field(default=PropertyType.NUMBER, init=False)


@dataclass
class SelectValue(PropertyValue):
    select: SelectOption | None = None
    type: PropertyType = field(default=PropertyType.SELECT, init=False)


@dataclass
class MultiSelectValue(PropertyValue):
    multi_select: list[SelectOption] = field(default_factory=list)
    type: PropertyType = field(default=PropertyType.MULTI_SELECT, init=False)


@dataclass
class DateValue(PropertyValue):
    date: DateRange | None = None
    type: PropertyType = field(default=PropertyType.DATE, init=False)


@dataclass
class PeopleValue(PropertyValue):
    people: list[User] = field(default_factory=list)
    type: PropertyType = field(default=PropertyType.PEOPLE, init=False)


@dataclass
class FilesValue(PropertyValue):
    files: list[FileReference] = field(default_factory=list)
    type: PropertyType = field(default=PropertyType.FILES, init=False)


@dataclass
class CheckboxValue(PropertyValue):
    checkbox: bool = False
    type: PropertyType = field(default=PropertyType.CHECKBOX, init=False)


@dataclass
class URLValue(PropertyValue):
    url: str | None = None
    type: PropertyType = field(default=PropertyType.URL, init=False)


@dataclass
class EmailValue(PropertyValue):
    email: str | None = None
    type: PropertyType = field(default=PropertyType.EMAIL, init=False)


@dataclass
class PhoneNumberValue(PropertyValue):
    phone_number: str | None = None
    type: PropertyType = field(default=PropertyType.PHONE_NUMBER, init=False)


@dataclass
class FormulaValue(PropertyValue):
    formula: FormulaResult = field(default_factory=FormulaResult)
    type: PropertyType = field(default=PropertyType.FORMULA, init=False)


@dataclass
class RelationValue(PropertyValue):
    relation: list[ObjectReference] = field(default_factory=list)
    type: PropertyType = field(default=PropertyType.RELATION, init=False)


@dataclass
class RollupValue(PropertyValue):
    rollup: RollupResult = field(default_factory=RollupResult)
    type: PropertyType = field(default=PropertyType.ROLLUP, init=False)


@dataclass
class CreatedTimeValue(PropertyValue):
    created_time: str = ""
    type: PropertyType = field(default=PropertyType.CREATED_TIME, init=False)


@dataclass
class CreatedByValue(PropertyValue):
    created_by: User = field(default_factory=PersonUser)
    type: PropertyType = field(default=PropertyType.CREATED_BY, init=False)


@dataclass
class LastEditedTimeValue(PropertyValue):
    last_edited_time: str = ""
    type: PropertyType = field(default=PropertyType.LAST_EDITED_TIME, init=False)


@dataclass
class LastEditedByValue(PropertyValue):
    last_edited_by: User = field(default_factory=PersonUser)
    type: PropertyType = field(default=PropertyType.LAST_EDITED_BY, init=False)


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

@dataclass
class PropertySchema:
    """A database's definition of one property."""

    id: str = ""
    name: str = ""
    type: PropertyType = field(default=PropertyType.TITLE, init=False)

    def _config(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        data["name"] = self.name
        data["type"] = self.type.value
        data[self.type.value] = self._config()
        return data


@dataclass
class TitleSchema(PropertySchema):
    type: PropertyType = field(default=PropertyType.TITLE, init=False)


@dataclass
class BasicPropertySchema(PropertySchema):
    """Schema for kinds whose configuration is always empty.

    Unlike the other schema variants the tag is chosen by the caller,
    e.g. ``BasicPropertySchema(name="Done", kind=PropertyType.CHECKBOX)``.
    """

    kind: PropertyType = PropertyType.RICH_TEXT

    def __post_init__(self) -> None:
        self.type = self.kind


@dataclass
class NumberSchema(PropertySchema):
    format: str = "number"
    type: PropertyType = field(default=PropertyType.NUMBER, init=False)

    def _config(self) -> dict[str, Any]:
        return {"format": self.format}


@dataclass
class SelectSchema(PropertySchema):
    options: list[SelectOption] = field(default_factory=list)
    type: PropertyType = field(default=PropertyType.SELECT, init=False)

    def _config(self) -> dict[str, Any]:
        return {"options": _encode(self.options)}


@dataclass
class MultiSelectSchema(PropertySchema):
    options: list[SelectOption] = field(default_factory=list)
    type: PropertyType = field(default=PropertyType.MULTI_SELECT, init=False)

    def _config(self) -> dict[str, Any]:
        return {"options": _encode(self.options)}


@dataclass
class FormulaSchema(PropertySchema):
    expression: str = ""
    type: PropertyType = field(default=PropertyType.FORMULA, init=False)

    def _config(self) -> dict[str, Any]:
        return {"expression": self.expression}


@dataclass
class RelationSchema(PropertySchema):
    database_id: str = ""
    synced_property_name: str | None = None
    synced_property_id: str | None = None
    type: PropertyType = field(default=PropertyType.RELATION, init=False)

    def _config(self) -> dict[str, Any]:
        return {
            "database_id": self.database_id,
            "synced_property_name": self.synced_property_name,
            "synced_property_id": self.synced_property_id,
        }


@dataclass
class RollupSchema(PropertySchema):
    relation_property_name: str = ""
    relation_property_id: str = ""
    rollup_property_name: str = ""
    rollup_property_id: str = ""
    function: str = ""
    type: PropertyType = field(default=PropertyType.ROLLUP, init=False)

    def _config(self) -> dict[str, Any]:
        return {
            "relation_property_name": self.relation_property_name,
            "relation_property_id": self.relation_property_id,
            "rollup_property_name": self.rollup_property_name,
            "rollup_property_id": self.rollup_property_id,
            "function": self.function,
        }
