"""Rich text spans and mentions.

A rich text span is a run of formatted text.  Every span carries the
rendered ``plain_text``, an optional ``href`` and a fixed
:class:`Annotations` record; the variant payload depends on ``type``:

Text span::

    {"type": "text", "text": {"content": "kale", "link": {"url": "..."}}, ...}

Mention span::

    {"type": "mention", "mention": {"type": "page", "page": {"id": "..."}}, ...}

Equation span::

    {"type": "equation", "equation": {"expression": "E=mc^2"}, ...}

Mentions are a nested tagged union of their own (user, page, database,
date).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .common import Color, DateRange, ObjectReference
from .users import PersonUser, User


class RichTextType(str, Enum):
    TEXT = "text"
    MENTION = "mention"
    EQUATION = "equation"


class MentionType(str, Enum):
    USER = "user"
    PAGE = "page"
    DATABASE = "database"
    DATE = "date"


@dataclass
class Annotations:
    """Formatting flags of a span.  Not polymorphic."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = Color.DEFAULT

    def to_dict(self) -> dict[str, Any]:
        return {
            "bold": self.bold,
            "italic": self.italic,
            "strikethrough": self.strikethrough,
            "underline": self.underline,
            "code": self.code,
            "color": self.color,
        }


@dataclass
class Link:
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url}


@dataclass
class TextContent:
    content: str = ""
    link: Link | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "link": self.link.to_dict() if self.link is not None else None,
        }


# ---------------------------------------------------------------------------
# Mentions
# ---------------------------------------------------------------------------

@dataclass
class Mention:
    type: MentionType = field(default=MentionType.PAGE, init=False)

    def _payload(self) -> dict[str, Any]:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, self.type.value: self._payload()}


@dataclass
class UserMention(Mention):
    user: User = field(default_factory=PersonUser)
    type: MentionType = field(default=MentionType.USER, init=False)

    def _payload(self) -> dict[str, Any]:
        return self.user.to_dict()


@dataclass
class PageMention(Mention):
    page: ObjectReference = field(default_factory=ObjectReference)
    type: MentionType = field(default=MentionType.PAGE, init=False)

    def _payload(self) -> dict[str, Any]:
        return self.page.to_dict()


@dataclass
class DatabaseMention(Mention):
    database: ObjectReference = field(default_factory=ObjectReference)
    type: MentionType = field(default=MentionType.DATABASE, init=False)

    def _payload(self) -> dict[str, Any]:
        return self.database.to_dict()


@dataclass
class DateMention(Mention):
    date: DateRange = field(default_factory=DateRange)
    type: MentionType = field(default=MentionType.DATE, init=False)

    def _payload(self) -> dict[str, Any]:
        return self.date.to_dict()


# ---------------------------------------------------------------------------
# Spans
# ---------------------------------------------------------------------------

@dataclass
class RichText:
    """Fields shared by every span variant."""

    plain_text: str = ""
    href: str | None = None
    annotations: Annotations = field(default_factory=Annotations)
    type: RichTextType = field(default=RichTextType.TEXT, init=False)

    def _payload(self) -> dict[str, Any]:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            self.type.value: self._payload(),
            "annotations": self.annotations.to_dict(),
            "plain_text": self.plain_text,
            "href": self.href,
        }


@dataclass
class TextRichText(RichText):
    text: TextContent = field(default_factory=TextContent)
    type: RichTextType = field(default=RichTextType.TEXT, init=False)

    def _payload(self) -> dict[str, Any]:
        return self.text.to_dict()

    @classmethod
    def plain(cls, content: str, url: str | None = None) -> TextRichText:
        """Build an unformatted span, optionally linked to *url*."""
        link = Link(url) if url is not None else None
        return cls(
            plain_text=content,
            href=url,
            text=TextContent(content=content, link=link),
        )


@dataclass
class MentionRichText(RichText):
    mention: Mention = field(default_factory=PageMention)
    type: RichTextType = field(default=RichTextType.MENTION, init=False)

    def _payload(self) -> dict[str, Any]:
        return self.mention.to_dict()


@dataclass
class EquationRichText(RichText):
    expression: str = ""
    type: RichTextType = field(default=RichTextType.EQUATION, init=False)

    def _payload(self) -> dict[str, Any]:
        return {"expression": self.expression}


def plain_text_of(spans: list[RichText]) -> str:
    """Concatenate the rendered text of *spans*."""
    return "".join(span.plain_text for span in spans)
