"""Top-level API objects: pages, databases and paginated listings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from .parents import Parent, WorkspaceParent
from .properties import PropertySchema, PropertyValue
from .rich_text import RichText

T = TypeVar("T")


class ObjectType(str, Enum):
    """Discriminator of search and query results (the ``object`` field)."""

    PAGE = "page"
    DATABASE = "database"


@dataclass
class Page:
    """A page: a record whose property values follow its parent's schema."""

    id: str = ""
    created_time: str = ""
    last_edited_time: str = ""
    parent: Parent = field(default_factory=WorkspaceParent)
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    archived: bool = False
    url: str = ""
    object: ObjectType = field(default=ObjectType.PAGE, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "object": self.object.value,
            "id": self.id,
            "created_time": self.created_time,
            "last_edited_time": self.last_edited_time,
            "parent": self.parent.to_dict(),
            "properties": {
                name: value.to_dict() for name, value in self.properties.items()
            },
            "archived": self.archived,
            "url": self.url,
        }


@dataclass
class Database:
    """A database: a title plus the schema of its pages' properties."""

    id: str = ""
    created_time: str = ""
    last_edited_time: str = ""
    title: list[RichText] = field(default_factory=list)
    properties: dict[str, PropertySchema] = field(default_factory=dict)
    object: ObjectType = field(default=ObjectType.DATABASE, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "object": self.object.value,
            "id": self.id,
            "created_time": self.created_time,
            "last_edited_time": self.last_edited_time,
            "title": [span.to_dict() for span in self.title],
            "properties": {
                name: schema.to_dict() for name, schema in self.properties.items()
            },
        }


PageOrDatabase = Union[Page, Database]


@dataclass
class PaginatedList(Generic[T]):
    """One page of a cursor-paginated listing.

    ``next_cursor`` is opaque and is ``""`` when ``has_more`` is false.
    Pass it back unchanged as ``start_cursor`` to fetch the next page.
    """

    results: list[T] = field(default_factory=list)
    next_cursor: str = ""
    has_more: bool = False
    object: str = field(default="list", init=False)


class Direction(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass
class Sort:
    """A search sort criterion.  Notion only sorts search by edit time."""

    direction: Direction = Direction.DESCENDING
    timestamp: str = "last_edited_time"

    def to_dict(self) -> dict[str, Any]:
        return {"direction": self.direction.value, "timestamp": self.timestamp}
