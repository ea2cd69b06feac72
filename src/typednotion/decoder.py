"""Polymorphic decoder: untyped JSON to typed Notion objects.

Every discriminated family (rich text, mention, user, parent, block,
property value, property schema, page-or-database) has exactly one
tag-to-builder table in this module.  Decoding an object is always the same
three steps:

1. read the discriminator (``type``, or ``object`` for search results) and
   look it up in the family's table -- unknown or missing tags raise
   :class:`~typednotion.errors.NotionUnsupportedKindError`;
2. read the fields every variant of the family shares;
3. hand the payload stored under the key named after the tag to the
   variant's builder, which recurses through the same tables for nested
   polymorphic positions.

Pages and databases are decoded in two passes: a structural pass produces a
raw record whose ``parent`` and ``properties`` are still plain mappings, and
a second pass resolves those through the dispatch tables.  Database
properties go through the *schema* table and page properties through the
*value* table; the two families share ``PropertyType`` but not their shape.

Errors carry a JSON path such as ``$.results[1].paragraph.children[0].type``
in ``context["path"]``.  Any error aborts the whole decode.

Each table is checked against its tag enum at import time, so adding an
enum member without a builder fails immediately instead of decoding into a
silent default.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from .config import DEFAULT_MAX_DECODE_DEPTH, MAX_DECODE_DEPTH_LIMIT
from .errors import NotionDecodeError, NotionUnsupportedKindError
from .objects.blocks import (
    Block,
    BlockType,
    BulletedListItemBlock,
    ChildPageBlock,
    Heading1Block,
    Heading2Block,
    Heading3Block,
    NumberedListItemBlock,
    ParagraphBlock,
    TextBlock,
    ToDoBlock,
    ToggleBlock,
    UnsupportedBlock,
)
from .objects.common import DateRange, ObjectReference
from .objects.parents import (
    DatabaseParent,
    PageParent,
    Parent,
    ParentType,
    WorkspaceParent,
)
from .objects.properties import (
    BasicPropertySchema,
    CheckboxValue,
    CreatedByValue,
    CreatedTimeValue,
    DateValue,
    EmailValue,
    FileReference,
    FilesValue,
    FileType,
    FormulaResult,
    FormulaResultType,
    FormulaSchema,
    FormulaValue,
    LastEditedByValue,
    LastEditedTimeValue,
    MultiSelectSchema,
    MultiSelectValue,
    NumberSchema,
    NumberValue,
    PeopleValue,
    PhoneNumberValue,
    PropertySchema,
    PropertyType,
    PropertyValue,
    RelationSchema,
    RelationValue,
    RichTextValue,
    RollupResult,
    RollupResultType,
    RollupSchema,
    RollupValue,
    SelectOption,
    SelectSchema,
    SelectValue,
    TextValue,
    TitleSchema,
    TitleValue,
    URLValue,
)
from .objects.resources import Database, ObjectType, Page, PageOrDatabase, PaginatedList
from .objects.rich_text import (
    Annotations,
    DatabaseMention,
    DateMention,
    EquationRichText,
    Link,
    Mention,
    MentionRichText,
    MentionType,
    PageMention,
    RichText,
    RichTextType,
    TextContent,
    TextRichText,
    UserMention,
)
from .objects.users import BotUser, PersonUser, User, UserType

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

ROOT = "$"


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _join(path: str, key: str) -> str:
    return f"{path}.{key}"


def _index(path: str, i: int) -> str:
    return f"{path}[{i}]"


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _mismatch(expected: str, value: Any, path: str) -> NotionDecodeError:
    actual = _json_type(value)
    return NotionDecodeError(
        f"expected {expected} at {path}, got {actual}",
        context={"path": path, "expected": expected, "actual": actual},
    )


def _as_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise _mismatch("object", value, path)
    return value


def _as_list(value: Any, path: str) -> list[Any]:
    """Return *value* as a list; ``null`` reads as an empty list."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise _mismatch("array", value, path)
    return value


def _as_str(value: Any, path: str, default: str = "") -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise _mismatch("string", value, path)
    return value


def _as_opt_str(value: Any, path: str) -> str | None:
    if value is None:
        return None
    return _as_str(value, path)


def _as_bool(value: Any, path: str, default: bool = False) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise _mismatch("boolean", value, path)
    return value


def _as_number(value: Any, path: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch("number", value, path)
    return value


def _payload(data: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any]:
    """Return the mapping stored under *key*; absent or ``null`` reads as ``{}``."""
    value = data.get(key)
    if value is None:
        return {}
    return _as_mapping(value, _join(path, key))


def _tag(
    data: Mapping[str, Any],
    field: str,
    enum: type[E],
    family: str,
    path: str,
) -> E:
    raw = data.get(field)
    tag_path = _join(path, field)
    if isinstance(raw, str):
        try:
            return enum(raw)
        except ValueError:
            pass
    shown = f"missing '{field}'" if raw is None else repr(raw)
    raise NotionUnsupportedKindError(
        f"{family} kind not supported: {shown} at {tag_path}",
        context={"path": tag_path, "family": family, "kind": raw},
    )


def _require_exhaustive(table: Mapping[Any, Any], enum: type[Enum], family: str) -> None:
    missing = [member.value for member in enum if member not in table]
    if missing:
        raise RuntimeError(f"{family} decoder has no builder for: {', '.join(missing)}")


# ---------------------------------------------------------------------------
# Shared leaf records
# ---------------------------------------------------------------------------

def _date_range(value: Any, path: str) -> DateRange:
    data = _as_mapping(value, path)
    return DateRange(
        start=_as_str(data.get("start"), _join(path, "start")),
        end=_as_opt_str(data.get("end"), _join(path, "end")),
    )


def _opt_date_range(value: Any, path: str) -> DateRange | None:
    return None if value is None else _date_range(value, path)


def _reference(value: Any, path: str) -> ObjectReference:
    data = _as_mapping(value, path)
    return ObjectReference(id=_as_str(data.get("id"), _join(path, "id")))


def _select_option(value: Any, path: str) -> SelectOption:
    data = _as_mapping(value, path)
    return SelectOption(
        name=_as_str(data.get("name"), _join(path, "name")),
        id=_as_str(data.get("id"), _join(path, "id")),
        color=_as_str(data.get("color"), _join(path, "color"), default="default"),
    )


def _select_options(value: Any, path: str) -> list[SelectOption]:
    return [
        _select_option(item, _index(path, i))
        for i, item in enumerate(_as_list(value, path))
    ]


def _file_reference(value: Any, path: str) -> FileReference:
    data = _as_mapping(value, path)
    kind = _tag(data, "type", FileType, "file", path)
    target = _payload(data, kind.value, path)
    target_path = _join(path, kind.value)
    return FileReference(
        name=_as_str(data.get("name"), _join(path, "name")),
        type=kind,
        url=_as_str(target.get("url"), _join(target_path, "url")),
        expiry_time=_as_opt_str(target.get("expiry_time"), _join(target_path, "expiry_time")),
    )


# ---------------------------------------------------------------------------
# Rich text and mentions
# ---------------------------------------------------------------------------

_RichTextBuilder = Callable[["Decoder", Mapping[str, Any], str, dict[str, Any]], RichText]


def _text_span(dec: Decoder, payload: Mapping[str, Any], path: str, common: dict[str, Any]) -> RichText:
    link_value = payload.get("link")
    link = None
    if link_value is not None:
        link_path = _join(path, "link")
        link_data = _as_mapping(link_value, link_path)
        link = Link(url=_as_str(link_data.get("url"), _join(link_path, "url")))
    content = _as_str(payload.get("content"), _join(path, "content"))
    return TextRichText(text=TextContent(content=content, link=link), **common)


def _mention_span(dec: Decoder, payload: Mapping[str, Any], path: str, common: dict[str, Any]) -> RichText:
    return MentionRichText(mention=dec.mention(payload, path), **common)


def _equation_span(dec: Decoder, payload: Mapping[str, Any], path: str, common: dict[str, Any]) -> RichText:
    expression = _as_str(payload.get("expression"), _join(path, "expression"))
    return EquationRichText(expression=expression, **common)


_RICH_TEXT_VARIANTS: dict[RichTextType, _RichTextBuilder] = {
    RichTextType.TEXT: _text_span,
    RichTextType.MENTION: _mention_span,
    RichTextType.EQUATION: _equation_span,
}

_MentionBuilder = Callable[["Decoder", Mapping[str, Any], str], Mention]

_MENTION_VARIANTS: dict[MentionType, _MentionBuilder] = {
    MentionType.USER: lambda dec, payload, path: UserMention(user=dec.user(payload, path)),
    MentionType.PAGE: lambda dec, payload, path: PageMention(page=_reference(payload, path)),
    MentionType.DATABASE: lambda dec, payload, path: DatabaseMention(
        database=_reference(payload, path)
    ),
    MentionType.DATE: lambda dec, payload, path: DateMention(date=_date_range(payload, path)),
}


def _annotations(value: Any, path: str) -> Annotations:
    if value is None:
        return Annotations()
    data = _as_mapping(value, path)
    return Annotations(
        bold=_as_bool(data.get("bold"), _join(path, "bold")),
        italic=_as_bool(data.get("italic"), _join(path, "italic")),
        strikethrough=_as_bool(data.get("strikethrough"), _join(path, "strikethrough")),
        underline=_as_bool(data.get("underline"), _join(path, "underline")),
        code=_as_bool(data.get("code"), _join(path, "code")),
        color=_as_str(data.get("color"), _join(path, "color"), default="default"),
    )


# ---------------------------------------------------------------------------
# Users and parents
# ---------------------------------------------------------------------------

_UserBuilder = Callable[[Mapping[str, Any], str, dict[str, Any]], User]

_USER_VARIANTS: dict[UserType, _UserBuilder] = {
    UserType.PERSON: lambda payload, path, common: PersonUser(
        email=_as_str(payload.get("email"), _join(path, "email")), **common
    ),
    UserType.BOT: lambda payload, path, common: BotUser(**common),
}

_ParentBuilder = Callable[[Mapping[str, Any], str], Parent]

_PARENT_VARIANTS: dict[ParentType, _ParentBuilder] = {
    ParentType.DATABASE: lambda data, path: DatabaseParent(
        database_id=_as_str(data.get("database_id"), _join(path, "database_id"))
    ),
    ParentType.PAGE: lambda data, path: PageParent(
        page_id=_as_str(data.get("page_id"), _join(path, "page_id"))
    ),
    ParentType.WORKSPACE: lambda data, path: WorkspaceParent(
        workspace=_as_bool(data.get("workspace"), _join(path, "workspace"), default=True)
    ),
}


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

_BlockBuilder = Callable[["Decoder", Mapping[str, Any], str, int, dict[str, Any]], Block]


def _block_text(dec: Decoder, payload: Mapping[str, Any], path: str) -> list[RichText]:
    # Newer API versions call the block text "rich_text".
    key = "text" if "text" in payload else "rich_text"
    return dec.rich_text_list(payload.get(key), _join(path, key))


def _block_children(dec: Decoder, payload: Mapping[str, Any], path: str, depth: int) -> list[Block]:
    children_path = _join(path, "children")
    return [
        dec._block(child, _index(children_path, i), depth + 1)
        for i, child in enumerate(_as_list(payload.get("children"), children_path))
    ]


def _text_block(cls: type[TextBlock]) -> _BlockBuilder:
    def build(dec, payload, path, depth, common):
        text = _block_text(dec, payload, path)
        if cls.can_have_children:
            return cls(text=text, children=_block_children(dec, payload, path, depth), **common)
        return cls(text=text, **common)

    return build


def _to_do_block(dec: Decoder, payload: Mapping[str, Any], path: str, depth: int, common: dict[str, Any]) -> Block:
    return ToDoBlock(
        text=_block_text(dec, payload, path),
        children=_block_children(dec, payload, path, depth),
        checked=_as_bool(payload.get("checked"), _join(path, "checked")),
        **common,
    )


def _child_page_block(dec: Decoder, payload: Mapping[str, Any], path: str, depth: int, common: dict[str, Any]) -> Block:
    return ChildPageBlock(title=_as_str(payload.get("title"), _join(path, "title")), **common)


_BLOCK_VARIANTS: dict[BlockType, _BlockBuilder] = {
    BlockType.PARAGRAPH: _text_block(ParagraphBlock),
    BlockType.HEADING_1: _text_block(Heading1Block),
    BlockType.HEADING_2: _text_block(Heading2Block),
    BlockType.HEADING_3: _text_block(Heading3Block),
    BlockType.BULLETED_LIST_ITEM: _text_block(BulletedListItemBlock),
    BlockType.NUMBERED_LIST_ITEM: _text_block(NumberedListItemBlock),
    BlockType.TO_DO: _to_do_block,
    BlockType.TOGGLE: _text_block(ToggleBlock),
    BlockType.CHILD_PAGE: _child_page_block,
    BlockType.UNSUPPORTED: lambda dec, payload, path, depth, common: UnsupportedBlock(**common),
}


# ---------------------------------------------------------------------------
# Property values
# ---------------------------------------------------------------------------

# A value reader turns the JSON found under the tag key into the attribute
# of the same name on the variant.  An absent or null payload reads as the
# variant's empty value.
_ValueReader = Callable[["Decoder", Any, str, int], Any]


def _read_formula(dec: Decoder, value: Any, path: str, depth: int) -> FormulaResult:
    if value is None:
        return FormulaResult()
    data = _as_mapping(value, path)
    kind = _tag(data, "type", FormulaResultType, "formula result", path)
    raw = data.get(kind.value)
    raw_path = _join(path, kind.value)
    if kind is FormulaResultType.STRING:
        result: Any = _as_opt_str(raw, raw_path)
    elif kind is FormulaResultType.NUMBER:
        result = _as_number(raw, raw_path)
    elif kind is FormulaResultType.BOOLEAN:
        result = None if raw is None else _as_bool(raw, raw_path)
    else:
        result = _opt_date_range(raw, raw_path)
    return FormulaResult(type=kind, value=result)


def _read_rollup(dec: Decoder, value: Any, path: str, depth: int) -> RollupResult:
    if value is None:
        return RollupResult()
    data = _as_mapping(value, path)
    kind = _tag(data, "type", RollupResultType, "rollup result", path)
    raw = data.get(kind.value)
    raw_path = _join(path, kind.value)
    if kind is RollupResultType.ARRAY:
        result: Any = [
            dec._property_value(item, _index(raw_path, i), depth + 1)
            for i, item in enumerate(_as_list(raw, raw_path))
        ]
    elif kind is RollupResultType.NUMBER:
        result = _as_number(raw, raw_path)
    else:
        result = _opt_date_range(raw, raw_path)
    return RollupResult(
        type=kind,
        value=result,
        function=_as_str(data.get("function"), _join(path, "function")),
    )


def _read_spans(dec: Decoder, value: Any, path: str, depth: int) -> list[RichText]:
    return dec.rich_text_list(value, path)


def _read_user(dec: Decoder, value: Any, path: str, depth: int) -> User:
    return PersonUser() if value is None else dec.user(value, path)


def _read_users(dec: Decoder, value: Any, path: str, depth: int) -> list[User]:
    return [dec.user(item, _index(path, i)) for i, item in enumerate(_as_list(value, path))]


def _read_files(dec: Decoder, value: Any, path: str, depth: int) -> list[FileReference]:
    return [_file_reference(item, _index(path, i)) for i, item in enumerate(_as_list(value, path))]


def _read_references(dec: Decoder, value: Any, path: str, depth: int) -> list[ObjectReference]:
    return [_reference(item, _index(path, i)) for i, item in enumerate(_as_list(value, path))]


def _read_option(dec: Decoder, value: Any, path: str, depth: int) -> SelectOption | None:
    return None if value is None else _select_option(value, path)


_PROPERTY_VALUE_VARIANTS: dict[PropertyType, tuple[type[PropertyValue], _ValueReader]] = {
    PropertyType.TITLE: (TitleValue, _read_spans),
    PropertyType.RICH_TEXT: (RichTextValue, _read_spans),
    PropertyType.TEXT: (TextValue, _read_spans),
    PropertyType.NUMBER: (NumberValue, lambda dec, v, path, depth: _as_number(v, path)),
    PropertyType.SELECT: (SelectValue, _read_option),
    PropertyType.MULTI_SELECT: (
        MultiSelectValue,
        lambda dec, v, path, depth: _select_options(v, path),
    ),
    PropertyType.DATE: (DateValue, lambda dec, v, path, depth: _opt_date_range(v, path)),
    PropertyType.PEOPLE: (PeopleValue, _read_users),
    PropertyType.FILES: (FilesValue, _read_files),
    PropertyType.CHECKBOX: (CheckboxValue, lambda dec, v, path, depth: _as_bool(v, path)),
    PropertyType.URL: (URLValue, lambda dec, v, path, depth: _as_opt_str(v, path)),
    PropertyType.EMAIL: (EmailValue, lambda dec, v, path, depth: _as_opt_str(v, path)),
    PropertyType.PHONE_NUMBER: (
        PhoneNumberValue,
        lambda dec, v, path, depth: _as_opt_str(v, path),
    ),
    PropertyType.FORMULA: (FormulaValue, _read_formula),
    PropertyType.RELATION: (RelationValue, _read_references),
    PropertyType.ROLLUP: (RollupValue, _read_rollup),
    PropertyType.CREATED_TIME: (CreatedTimeValue, lambda dec, v, path, depth: _as_str(v, path)),
    PropertyType.CREATED_BY: (CreatedByValue, _read_user),
    PropertyType.LAST_EDITED_TIME: (
        LastEditedTimeValue,
        lambda dec, v, path, depth: _as_str(v, path),
    ),
    PropertyType.LAST_EDITED_BY: (LastEditedByValue, _read_user),
}


# ---------------------------------------------------------------------------
# Property schemas
# ---------------------------------------------------------------------------

_SchemaBuilder = Callable[[Mapping[str, Any], str, dict[str, Any]], PropertySchema]


def _basic_schema(kind: PropertyType) -> _SchemaBuilder:
    def build(config, path, common):
        return BasicPropertySchema(kind=kind, **common)

    return build


def _relation_schema(config: Mapping[str, Any], path: str, common: dict[str, Any]) -> PropertySchema:
    return RelationSchema(
        database_id=_as_str(config.get("database_id"), _join(path, "database_id")),
        synced_property_name=_as_opt_str(
            config.get("synced_property_name"), _join(path, "synced_property_name")
        ),
        synced_property_id=_as_opt_str(
            config.get("synced_property_id"), _join(path, "synced_property_id")
        ),
        **common,
    )


def _rollup_schema(config: Mapping[str, Any], path: str, common: dict[str, Any]) -> PropertySchema:
    fields = (
        "relation_property_name",
        "relation_property_id",
        "rollup_property_name",
        "rollup_property_id",
        "function",
    )
    values = {name: _as_str(config.get(name), _join(path, name)) for name in fields}
    return RollupSchema(**values, **common)


_PROPERTY_SCHEMA_VARIANTS: dict[PropertyType, _SchemaBuilder] = {
    PropertyType.TITLE: lambda config, path, common: TitleSchema(**common),
    PropertyType.NUMBER: lambda config, path, common: NumberSchema(
        format=_as_str(config.get("format"), _join(path, "format"), default="number"),
        **common,
    ),
    PropertyType.SELECT: lambda config, path, common: SelectSchema(
        options=_select_options(config.get("options"), _join(path, "options")),
        **common,
    ),
    PropertyType.MULTI_SELECT: lambda config, path, common: MultiSelectSchema(
        options=_select_options(config.get("options"), _join(path, "options")),
        **common,
    ),
    PropertyType.FORMULA: lambda config, path, common: FormulaSchema(
        expression=_as_str(config.get("expression"), _join(path, "expression")),
        **common,
    ),
    PropertyType.RELATION: _relation_schema,
    PropertyType.ROLLUP: _rollup_schema,
}
for _kind in PropertyType:
    _PROPERTY_SCHEMA_VARIANTS.setdefault(_kind, _basic_schema(_kind))
del _kind


# ---------------------------------------------------------------------------
# Pages and databases
# ---------------------------------------------------------------------------

@dataclass
class _RawPage:
    """First-pass page: scalar fields typed, polymorphic fields untouched."""

    id: str
    created_time: str
    last_edited_time: str
    archived: bool
    url: str
    parent: Mapping[str, Any]
    properties: Mapping[str, Any]


@dataclass
class _RawDatabase:
    id: str
    created_time: str
    last_edited_time: str
    title: list[Any]
    properties: Mapping[str, Any]


_ObjectBuilder = Callable[["Decoder", Mapping[str, Any], str], PageOrDatabase]

_OBJECT_VARIANTS: dict[ObjectType, _ObjectBuilder] = {
    ObjectType.PAGE: lambda dec, data, path: dec.page(data, path),
    ObjectType.DATABASE: lambda dec, data, path: dec.database(data, path),
}


_require_exhaustive(_RICH_TEXT_VARIANTS, RichTextType, "rich text")
_require_exhaustive(_MENTION_VARIANTS, MentionType, "mention")
_require_exhaustive(_USER_VARIANTS, UserType, "user")
_require_exhaustive(_PARENT_VARIANTS, ParentType, "parent")
_require_exhaustive(_BLOCK_VARIANTS, BlockType, "block")
_require_exhaustive(_PROPERTY_VALUE_VARIANTS, PropertyType, "property value")
_require_exhaustive(_PROPERTY_SCHEMA_VARIANTS, PropertyType, "property schema")
_require_exhaustive(_OBJECT_VARIANTS, ObjectType, "object")


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------

class Decoder:
    """Turn parsed JSON into typed Notion objects.

    Parameters
    ----------
    max_depth:
        Deepest nesting of block children (and of rollup arrays) that will
        be followed, at most ``MAX_DECODE_DEPTH_LIMIT``.  Deeper input raises
        :class:`NotionDecodeError` with a "too deeply nested" message.

    Every public method takes the parsed JSON value and an optional
    ``path`` used as the prefix of error paths, so callers decoding a
    fragment of a larger document can report where the fragment lives.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DECODE_DEPTH) -> None:
        if not 1 <= max_depth <= MAX_DECODE_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DECODE_DEPTH_LIMIT}, got {max_depth}"
            )
        self.max_depth = max_depth

    # ── Rich text ───────────────────────────────────────────────────────

    def rich_text(self, data: Any, path: str = ROOT) -> RichText:
        data = _as_mapping(data, path)
        kind = _tag(data, "type", RichTextType, "rich text", path)
        common = {
            "plain_text": _as_str(data.get("plain_text"), _join(path, "plain_text")),
            "href": _as_opt_str(data.get("href"), _join(path, "href")),
            "annotations": _annotations(data.get("annotations"), _join(path, "annotations")),
        }
        payload = _payload(data, kind.value, path)
        return _RICH_TEXT_VARIANTS[kind](self, payload, _join(path, kind.value), common)

    def rich_text_list(self, data: Any, path: str = ROOT) -> list[RichText]:
        return [self.rich_text(item, _index(path, i)) for i, item in enumerate(_as_list(data, path))]

    def mention(self, data: Any, path: str = ROOT) -> Mention:
        data = _as_mapping(data, path)
        kind = _tag(data, "type", MentionType, "mention", path)
        return _MENTION_VARIANTS[kind](self, _payload(data, kind.value, path), _join(path, kind.value))

    # ── Users and parents ───────────────────────────────────────────────

    def user(self, data: Any, path: str = ROOT) -> User:
        data = _as_mapping(data, path)
        kind = _tag(data, "type", UserType, "user", path)
        common = {
            "id": _as_str(data.get("id"), _join(path, "id")),
            "name": _as_str(data.get("name"), _join(path, "name")),
            "avatar_url": _as_opt_str(data.get("avatar_url"), _join(path, "avatar_url")),
        }
        payload = _payload(data, kind.value, path)
        return _USER_VARIANTS[kind](payload, _join(path, kind.value), common)

    def parent(self, data: Any, path: str = ROOT) -> Parent:
        data = _as_mapping(data, path)
        kind = _tag(data, "type", ParentType, "parent", path)
        return _PARENT_VARIANTS[kind](data, path)

    # ── Blocks ──────────────────────────────────────────────────────────

    def block(self, data: Any, path: str = ROOT) -> Block:
        return self._block(data, path, 1)

    def blocks(self, data: Any, path: str = ROOT) -> list[Block]:
        return [self._block(item, _index(path, i), 1) for i, item in enumerate(_as_list(data, path))]

    def _block(self, data: Any, path: str, depth: int) -> Block:
        if depth > self.max_depth:
            raise NotionDecodeError(
                f"block children too deeply nested at {path} (max depth {self.max_depth})",
                context={"path": path, "max_depth": self.max_depth},
            )
        data = _as_mapping(data, path)
        kind = _tag(data, "type", BlockType, "block", path)
        common = {
            "id": _as_str(data.get("id"), _join(path, "id")),
            "created_time": _as_str(data.get("created_time"), _join(path, "created_time")),
            "last_edited_time": _as_str(
                data.get("last_edited_time"), _join(path, "last_edited_time")
            ),
            "has_children": _as_bool(data.get("has_children"), _join(path, "has_children")),
        }
        payload = _payload(data, kind.value, path)
        return _BLOCK_VARIANTS[kind](self, payload, _join(path, kind.value), depth, common)

    # ── Properties ──────────────────────────────────────────────────────

    def property_value(self, data: Any, path: str = ROOT) -> PropertyValue:
        return self._property_value(data, path, 1)

    def _property_value(self, data: Any, path: str, depth: int) -> PropertyValue:
        if depth > self.max_depth:
            raise NotionDecodeError(
                f"rollup values too deeply nested at {path} (max depth {self.max_depth})",
                context={"path": path, "max_depth": self.max_depth},
            )
        data = _as_mapping(data, path)
        kind = _tag(data, "type", PropertyType, "property", path)
        cls, read = _PROPERTY_VALUE_VARIANTS[kind]
        value = read(self, data.get(kind.value), _join(path, kind.value), depth)
        return cls(id=_as_str(data.get("id"), _join(path, "id")), **{kind.value: value})

    def property_schema(self, data: Any, path: str = ROOT, name: str = "") -> PropertySchema:
        """Decode a database property definition.

        *name* fills in the property name when the payload omits it, as
        older API versions do (the name is then only the mapping key).
        """
        data = _as_mapping(data, path)
        kind = _tag(data, "type", PropertyType, "property", path)
        common = {
            "id": _as_str(data.get("id"), _join(path, "id")),
            "name": _as_str(data.get("name"), _join(path, "name"), default=name),
        }
        config_path = _join(path, kind.value)
        config = data.get(kind.value)
        # A schema's configuration is always an object; an array here is a
        # page value decoded in the wrong context.
        config = {} if config is None else _as_mapping(config, config_path)
        return _PROPERTY_SCHEMA_VARIANTS[kind](config, config_path, common)

    # ── Pages and databases ─────────────────────────────────────────────

    def page(self, data: Any, path: str = ROOT) -> Page:
        raw = self._raw_page(data, path)
        properties_path = _join(path, "properties")
        return Page(
            id=raw.id,
            created_time=raw.created_time,
            last_edited_time=raw.last_edited_time,
            parent=self.parent(raw.parent, _join(path, "parent")),
            properties={
                name: self._property_value(value, _join(properties_path, name), 1)
                for name, value in raw.properties.items()
            },
            archived=raw.archived,
            url=raw.url,
        )

    def database(self, data: Any, path: str = ROOT) -> Database:
        raw = self._raw_database(data, path)
        properties_path = _join(path, "properties")
        return Database(
            id=raw.id,
            created_time=raw.created_time,
            last_edited_time=raw.last_edited_time,
            title=self.rich_text_list(raw.title, _join(path, "title")),
            properties={
                name: self.property_schema(schema, _join(properties_path, name), name=name)
                for name, schema in raw.properties.items()
            },
        )

    def object(self, data: Any, path: str = ROOT) -> PageOrDatabase:
        """Decode a search or query result, dispatching on its ``object`` field."""
        data = _as_mapping(data, path)
        kind = _tag(data, "object", ObjectType, "object", path)
        return _OBJECT_VARIANTS[kind](self, data, path)

    def _raw_page(self, data: Any, path: str) -> _RawPage:
        data = _as_mapping(data, path)
        return _RawPage(
            id=_as_str(data.get("id"), _join(path, "id")),
            created_time=_as_str(data.get("created_time"), _join(path, "created_time")),
            last_edited_time=_as_str(
                data.get("last_edited_time"), _join(path, "last_edited_time")
            ),
            archived=_as_bool(data.get("archived"), _join(path, "archived")),
            url=_as_str(data.get("url"), _join(path, "url")),
            parent=_as_mapping(data.get("parent"), _join(path, "parent")),
            properties=_payload(data, "properties", path),
        )

    def _raw_database(self, data: Any, path: str) -> _RawDatabase:
        data = _as_mapping(data, path)
        return _RawDatabase(
            id=_as_str(data.get("id"), _join(path, "id")),
            created_time=_as_str(data.get("created_time"), _join(path, "created_time")),
            last_edited_time=_as_str(
                data.get("last_edited_time"), _join(path, "last_edited_time")
            ),
            title=_as_list(data.get("title"), _join(path, "title")),
            properties=_payload(data, "properties", path),
        )

    # ── Listings ────────────────────────────────────────────────────────

    def paginated(
        self,
        data: Any,
        item: Callable[[Any, str], T],
        path: str = ROOT,
    ) -> PaginatedList[T]:
        """Decode a paginated envelope, running *item* on each result.

        *item* is one of this decoder's bound methods, e.g.
        ``decoder.paginated(body, decoder.block)``.
        """
        data = _as_mapping(data, path)
        results_path = _join(path, "results")
        return PaginatedList(
            results=[
                item(element, _index(results_path, i))
                for i, element in enumerate(_as_list(data.get("results"), results_path))
            ],
            next_cursor=_as_str(data.get("next_cursor"), _join(path, "next_cursor")),
            has_more=_as_bool(data.get("has_more"), _join(path, "has_more")),
        )
