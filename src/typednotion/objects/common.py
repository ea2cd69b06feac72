"""Small value records shared across the object families."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Color(str, Enum):
    """Text and option colors accepted by Notion."""

    DEFAULT = "default"
    GRAY = "gray"
    BROWN = "brown"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"
    RED = "red"
    GRAY_BACKGROUND = "gray_background"
    BROWN_BACKGROUND = "brown_background"
    ORANGE_BACKGROUND = "orange_background"
    YELLOW_BACKGROUND = "yellow_background"
    GREEN_BACKGROUND = "green_background"
    BLUE_BACKGROUND = "blue_background"
    PURPLE_BACKGROUND = "purple_background"
    PINK_BACKGROUND = "pink_background"
    RED_BACKGROUND = "red_background"


@dataclass
class DateRange:
    """A date or date range.  Both ends are ISO-8601 strings kept verbatim."""

    start: str = ""
    end: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end}


@dataclass
class ObjectReference:
    """A bare ``{"id": ...}`` pointer to a page or database."""

    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id}
