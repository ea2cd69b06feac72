"""Block variants: the units of page content.

A block's content lives under the key equal to its type::

    {
        "object": "block",
        "id": "...",
        "type": "to_do",
        "has_children": false,
        "to_do": {"text": [...], "checked": true, "children": [...]}
    }

Paragraphs, list items, to-dos and toggles may own child blocks.  Children
are fetched lazily (``BlockAPI.list_children``) and are only present here
when the payload embedded them or the caller built them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from .rich_text import RichText


class BlockType(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    CHILD_PAGE = "child_page"
    UNSUPPORTED = "unsupported"


@dataclass
class Block:
    """Fields shared by every block variant."""

    can_have_children: ClassVar[bool] = False

    id: str = ""
    created_time: str = ""
    last_edited_time: str = ""
    has_children: bool = False
    object: str = field(default="block", init=False)
    type: BlockType = field(default=BlockType.UNSUPPORTED, init=False)

    def _payload(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"object": self.object}
        # Server-assigned fields are left out of request bodies.
        if self.id:
            data["id"] = self.id
        if self.created_time:
            data["created_time"] = self.created_time
        if self.last_edited_time:
            data["last_edited_time"] = self.last_edited_time
        data["has_children"] = self.has_children
        data["type"] = self.type.value
        data[self.type.value] = self._payload()
        return data


@dataclass
class TextBlock(Block):
    text: list[RichText] = field(default_factory=list)

    def _payload(self) -> dict[str, Any]:
        return {"text": [span.to_dict() for span in self.text]}


@dataclass
class ContainerBlock(TextBlock):
    """A text block that may own child blocks."""

    can_have_children: ClassVar[bool] = True

    children: list[Block] = field(default_factory=list)

    def _payload(self) -> dict[str, Any]:
        payload = super()._payload()
        if self.children:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


@dataclass
class ParagraphBlock(ContainerBlock):
    type: BlockType = field(default=BlockType.PARAGRAPH, init=False)


@dataclass
class Heading1Block(TextBlock):
    type: BlockType = field(default=BlockType.HEADING_1, init=False)


@dataclass
class Heading2Block(TextBlock):
    type: BlockType = field(default=BlockType.HEADING_2, init=False)


@dataclass
class Heading3Block(TextBlock):
    type: BlockType = field(default=BlockType.HEADING_3, init=False)


@dataclass
class BulletedListItemBlock(ContainerBlock):
    type: BlockType = field(default=BlockType.BULLETED_LIST_ITEM, init=False)


@dataclass
class NumberedListItemBlock(ContainerBlock):
    type: BlockType = field(default=BlockType.NUMBERED_LIST_ITEM, init=False)


@dataclass
class ToggleBlock(ContainerBlock):
    type: BlockType = field(default=BlockType.TOGGLE, init=False)


@dataclass
class ToDoBlock(ContainerBlock):
    checked: bool = False
    type: BlockType = field(default=BlockType.TO_DO, init=False)

    def _payload(self) -> dict[str, Any]:
        payload = super()._payload()
        payload["checked"] = self.checked
        return payload


@dataclass
class ChildPageBlock(Block):
    title: str = ""
    type: BlockType = field(default=BlockType.CHILD_PAGE, init=False)

    def _payload(self) -> dict[str, Any]:
        return {"title": self.title}


@dataclass
class UnsupportedBlock(Block):
    """Sentinel for content the API itself reports as ``unsupported``."""

    type: BlockType = field(default=BlockType.UNSUPPORTED, init=False)
