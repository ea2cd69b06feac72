"""Tests for typednotion/decoder.py.

Covers:
- Round-trip of every variant family through to_dict() and back
- Discriminator exhaustiveness for each tag enum
- Unknown / missing discriminators
- Recursive block children and the depth guard
- Page-vs-database union decoding
- Schema vs value context for properties (title shape)
- Error paths
"""

from __future__ import annotations

import json

import pytest

from typednotion.config import MAX_DECODE_DEPTH_LIMIT
from typednotion.decoder import Decoder, _require_exhaustive
from typednotion.errors import NotionDecodeError, NotionUnsupportedKindError
from typednotion.objects import (
    Annotations,
    BasicPropertySchema,
    BlockType,
    BotUser,
    BulletedListItemBlock,
    CheckboxValue,
    ChildPageBlock,
    Color,
    CreatedByValue,
    CreatedTimeValue,
    Database,
    DatabaseMention,
    DatabaseParent,
    DateMention,
    DateRange,
    DateValue,
    EmailValue,
    EquationRichText,
    FileReference,
    FilesValue,
    FileType,
    FormulaResult,
    FormulaResultType,
    FormulaSchema,
    FormulaValue,
    Heading1Block,
    Heading2Block,
    Heading3Block,
    LastEditedByValue,
    LastEditedTimeValue,
    Link,
    MentionRichText,
    MultiSelectSchema,
    MultiSelectValue,
    NumberedListItemBlock,
    NumberSchema,
    NumberValue,
    ObjectReference,
    Page,
    PageMention,
    PageParent,
    ParagraphBlock,
    PeopleValue,
    PersonUser,
    PhoneNumberValue,
    PropertyType,
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
    TextContent,
    TextRichText,
    TextValue,
    TitleSchema,
    TitleValue,
    ToDoBlock,
    ToggleBlock,
    UnsupportedBlock,
    URLValue,
    UserMention,
    WorkspaceParent,
)

# ---------------------------------------------------------------------------
# Sample values
# ---------------------------------------------------------------------------

ADA = PersonUser(id="u-1", name="Ada", avatar_url="https://x/ada.png", email="ada@example.com")
BOT = BotUser(id="u-2", name="Importer")


def _text(content: str, **kwargs) -> TextRichText:
    return TextRichText(plain_text=content, text=TextContent(content=content), **kwargs)


RICH_TEXTS = [
    _text("plain"),
    TextRichText(
        plain_text="linked",
        href="https://example.com",
        annotations=Annotations(bold=True, italic=True, code=True, color=Color.RED_BACKGROUND),
        text=TextContent(content="linked", link=Link(url="https://example.com")),
    ),
    MentionRichText(plain_text="Ada", mention=UserMention(user=ADA)),
    MentionRichText(plain_text="Bot", mention=UserMention(user=BOT)),
    MentionRichText(plain_text="Page", mention=PageMention(page=ObjectReference(id="p-1"))),
    MentionRichText(
        plain_text="DB", mention=DatabaseMention(database=ObjectReference(id="d-1"))
    ),
    MentionRichText(
        plain_text="2021-05-13",
        mention=DateMention(date=DateRange(start="2021-05-13", end="2021-05-14")),
    ),
    EquationRichText(plain_text="E=mc^2", expression="E=mc^2"),
]

BLOCKS = [
    ParagraphBlock(text=[_text("para")]),
    ParagraphBlock(
        id="b-1",
        created_time="2021-05-13T10:00:00.000Z",
        last_edited_time="2021-05-13T11:00:00.000Z",
        has_children=True,
        text=[_text("parent")],
        children=[BulletedListItemBlock(text=[_text("child")])],
    ),
    Heading1Block(text=[_text("h1")]),
    Heading2Block(text=[_text("h2")]),
    Heading3Block(text=[_text("h3")]),
    BulletedListItemBlock(text=[_text("bullet")]),
    NumberedListItemBlock(text=[_text("one")]),
    ToDoBlock(text=[_text("buy milk")], checked=True),
    ToggleBlock(text=[_text("more")], children=[ParagraphBlock(text=[_text("hidden")])]),
    ChildPageBlock(id="b-2", title="Sub page"),
    UnsupportedBlock(id="b-3"),
]

PROPERTY_VALUES = [
    TitleValue(id="title", title=[_text("Groceries")]),
    RichTextValue(id="a", rich_text=[_text("notes"), EquationRichText(expression="x")]),
    TextValue(id="b", text=[_text("legacy")]),
    NumberValue(id="c", number=42),
    NumberValue(id="c", number=None),
    SelectValue(id="d", select=SelectOption(name="Doing", id="opt-1", color="blue")),
    SelectValue(id="d", select=None),
    MultiSelectValue(id="e", multi_select=[SelectOption(name="a"), SelectOption(name="b")]),
    DateValue(id="f", date=DateRange(start="2021-05-20")),
    DateValue(id="f", date=None),
    PeopleValue(id="g", people=[ADA, BOT]),
    FilesValue(
        id="h",
        files=[
            FileReference(name="brief.pdf", type=FileType.EXTERNAL, url="https://x/brief.pdf"),
            FileReference(
                name="img.png",
                type=FileType.FILE,
                url="https://s3/img.png",
                expiry_time="2021-05-13T12:00:00.000Z",
            ),
        ],
    ),
    CheckboxValue(id="i", checkbox=True),
    URLValue(id="j", url="https://example.com"),
    EmailValue(id="k", email="ada@example.com"),
    PhoneNumberValue(id="l", phone_number="+1 555 0100"),
    FormulaValue(id="m", formula=FormulaResult(type=FormulaResultType.STRING, value="hi")),
    FormulaValue(id="m", formula=FormulaResult(type=FormulaResultType.NUMBER, value=3.5)),
    FormulaValue(id="m", formula=FormulaResult(type=FormulaResultType.BOOLEAN, value=False)),
    FormulaValue(
        id="m",
        formula=FormulaResult(type=FormulaResultType.DATE, value=DateRange(start="2021-01-01")),
    ),
    RelationValue(id="n", relation=[ObjectReference(id="p-1"), ObjectReference(id="p-2")]),
    RollupValue(id="o", rollup=RollupResult(type=RollupResultType.NUMBER, value=7, function="sum")),
    RollupValue(
        id="o",
        rollup=RollupResult(
            type=RollupResultType.ARRAY,
            value=[NumberValue(number=1), TitleValue(title=[_text("x")])],
            function="show_original",
        ),
    ),
    CreatedTimeValue(id="p", created_time="2021-05-13T10:00:00.000Z"),
    CreatedByValue(id="q", created_by=ADA),
    LastEditedTimeValue(id="r", last_edited_time="2021-05-13T11:00:00.000Z"),
    LastEditedByValue(id="s", last_edited_by=BOT),
]

PROPERTY_SCHEMAS = [
    TitleSchema(id="title", name="Name"),
    BasicPropertySchema(id="a", name="Notes", kind=PropertyType.RICH_TEXT),
    BasicPropertySchema(id="b", name="Done", kind=PropertyType.CHECKBOX),
    NumberSchema(id="c", name="Price", format="dollar"),
    SelectSchema(id="d", name="Status", options=[SelectOption(name="Doing", id="1", color="blue")]),
    MultiSelectSchema(id="e", name="Tags", options=[SelectOption(name="x"), SelectOption(name="y")]),
    FormulaSchema(id="f", name="Total", expression='prop("Price") * 2'),
    RelationSchema(id="g", name="Projects", database_id="d-2", synced_property_name="Tasks"),
    RollupSchema(
        id="h",
        name="Sum",
        relation_property_name="Projects",
        rollup_property_name="Price",
        function="sum",
    ),
]


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------

class TestRoundTrip:
    @pytest.mark.parametrize("span", RICH_TEXTS, ids=lambda s: type(s).__name__)
    def test_rich_text(self, decoder: Decoder, span):
        assert decoder.rich_text(span.to_dict()) == span

    @pytest.mark.parametrize("block", BLOCKS, ids=lambda b: b.type.value)
    def test_block(self, decoder: Decoder, block):
        assert decoder.block(block.to_dict()) == block

    @pytest.mark.parametrize("value", PROPERTY_VALUES, ids=lambda v: v.type.value)
    def test_property_value(self, decoder: Decoder, value):
        assert decoder.property_value(value.to_dict()) == value

    @pytest.mark.parametrize("schema", PROPERTY_SCHEMAS, ids=lambda s: s.type.value)
    def test_property_schema(self, decoder: Decoder, schema):
        assert decoder.property_schema(schema.to_dict()) == schema

    @pytest.mark.parametrize(
        "parent",
        [DatabaseParent(database_id="d-1"), PageParent(page_id="p-1"), WorkspaceParent()],
        ids=lambda p: p.type.value,
    )
    def test_parent(self, decoder: Decoder, parent):
        assert decoder.parent(parent.to_dict()) == parent

    @pytest.mark.parametrize("user", [ADA, BOT], ids=lambda u: u.type.value)
    def test_user(self, decoder: Decoder, user):
        assert decoder.user(user.to_dict()) == user

    def test_page(self, decoder: Decoder):
        page = Page(
            id="p-1",
            parent=DatabaseParent(database_id="d-1"),
            properties={value.type.value: value for value in PROPERTY_VALUES},
            url="https://www.notion.so/p-1",
        )
        assert decoder.page(page.to_dict()) == page

    def test_database(self, decoder: Decoder):
        database = Database(
            id="d-1",
            title=[_text("Tasks")],
            properties={schema.name: schema for schema in PROPERTY_SCHEMAS},
        )
        assert decoder.database(database.to_dict()) == database

    def test_survives_json_encoding(self, decoder: Decoder):
        block = BLOCKS[1]
        assert decoder.block(json.loads(json.dumps(block.to_dict()))) == block


# ---------------------------------------------------------------------------
# Exhaustiveness
# ---------------------------------------------------------------------------

_VALUE_CLASSES = {value.type: type(value) for value in PROPERTY_VALUES}


class TestExhaustiveness:
    @pytest.mark.parametrize("kind", list(BlockType), ids=lambda k: k.value)
    def test_every_block_type_decodes(self, decoder: Decoder, kind):
        block = decoder.block({"object": "block", "type": kind.value, kind.value: {}})
        assert block.type is kind

    @pytest.mark.parametrize("kind", list(PropertyType), ids=lambda k: k.value)
    def test_every_property_value_type_decodes(self, decoder: Decoder, kind):
        cls = _VALUE_CLASSES[kind]
        value = decoder.property_value(cls().to_dict())
        assert type(value) is cls
        assert value.type is kind

    @pytest.mark.parametrize("kind", list(PropertyType), ids=lambda k: k.value)
    def test_every_property_schema_type_decodes(self, decoder: Decoder, kind):
        schema = decoder.property_schema({"id": "x", "type": kind.value, kind.value: {}})
        assert schema.type is kind

    def test_value_samples_cover_every_kind(self):
        assert set(_VALUE_CLASSES) == set(PropertyType)

    def test_missing_builder_is_rejected(self):
        with pytest.raises(RuntimeError, match="paragraph"):
            _require_exhaustive({BlockType.HEADING_1: object()}, BlockType, "block")


# ---------------------------------------------------------------------------
# Unknown discriminators
# ---------------------------------------------------------------------------

class TestUnsupportedKinds:
    def test_unknown_block_type(self, decoder: Decoder):
        with pytest.raises(NotionUnsupportedKindError) as exc_info:
            decoder.block({"type": "synced_block", "synced_block": {}})
        err = exc_info.value
        assert "kind not supported" in str(err)
        assert "synced_block" in str(err)
        assert err.kind == "synced_block"
        assert err.context["family"] == "block"
        assert err.path == "$.type"

    def test_missing_type(self, decoder: Decoder):
        with pytest.raises(NotionUnsupportedKindError) as exc_info:
            decoder.block({"object": "block", "id": "b-1"})
        assert exc_info.value.kind is None
        assert "kind not supported" in str(exc_info.value)

    def test_non_string_type(self, decoder: Decoder):
        with pytest.raises(NotionUnsupportedKindError):
            decoder.rich_text({"type": 3})

    @pytest.mark.parametrize(
        ("method", "payload"),
        [
            ("rich_text", {"type": "image"}),
            ("mention", {"type": "template_mention"}),
            ("user", {"type": "group"}),
            ("parent", {"type": "block_id", "block_id": "x"}),
            ("property_value", {"type": "status", "status": {}}),
            ("property_schema", {"type": "status", "status": {}}),
            ("object", {"object": "block"}),
        ],
    )
    def test_every_family_rejects_unknown_tags(self, decoder: Decoder, method, payload):
        with pytest.raises(NotionUnsupportedKindError):
            getattr(decoder, method)(payload)

    def test_unsupported_tag_is_a_decode_error(self, decoder: Decoder):
        with pytest.raises(NotionDecodeError):
            decoder.block({"type": "nope"})

    def test_server_unsupported_sentinel_is_not_an_error(self, decoder: Decoder):
        block = decoder.block({"object": "block", "id": "b-9", "type": "unsupported", "unsupported": {}})
        assert isinstance(block, UnsupportedBlock)
        assert block.id == "b-9"


# ---------------------------------------------------------------------------
# Structural decoding
# ---------------------------------------------------------------------------

class TestStructural:
    def test_unknown_fields_are_ignored(self, decoder: Decoder, span):
        data = {
            "object": "block",
            "type": "heading_2",
            "archived": False,
            "color": "default",
            "heading_2": {"text": [span("Title")], "is_toggleable": False},
        }
        block = decoder.block(data)
        assert isinstance(block, Heading2Block)
        assert block.text[0].plain_text == "Title"

    def test_missing_optional_fields_take_defaults(self, decoder: Decoder):
        block = decoder.block({"type": "to_do"})
        assert block == ToDoBlock()

    def test_block_text_accepts_rich_text_key(self, decoder: Decoder, span):
        block = decoder.block({"type": "paragraph", "paragraph": {"rich_text": [span("new api")]}})
        assert block.text[0].plain_text == "new api"

    def test_annotations_default_when_absent(self, decoder: Decoder):
        span = decoder.rich_text({"type": "text", "text": {"content": "x"}, "plain_text": "x"})
        assert span.annotations == Annotations()

    def test_type_mismatch_names_path(self, decoder: Decoder):
        with pytest.raises(NotionDecodeError) as exc_info:
            decoder.block({"type": "to_do", "to_do": {"checked": "yes"}})
        err = exc_info.value
        assert err.path == "$.to_do.checked"
        assert err.context["expected"] == "boolean"
        assert err.context["actual"] == "string"

    def test_bool_is_not_a_number(self, decoder: Decoder):
        with pytest.raises(NotionDecodeError):
            decoder.property_value({"type": "number", "number": True})

    def test_top_level_must_be_object(self, decoder: Decoder):
        with pytest.raises(NotionDecodeError, match=r"expected object at \$"):
            decoder.block(["not", "a", "block"])

    @pytest.mark.parametrize(
        "value",
        [
            FormulaValue(id="x"),
            RollupValue(id="x"),
            CreatedByValue(id="x"),
            LastEditedByValue(id="x"),
            NumberValue(id="x"),
            CheckboxValue(id="x"),
            PeopleValue(id="x"),
        ],
        ids=lambda value: value.type.value,
    )
    def test_absent_or_null_payload_is_empty_value(self, decoder: Decoder, value):
        kind = value.type.value
        assert decoder.property_value({"id": "x", "type": kind}) == value
        assert decoder.property_value({"id": "x", "type": kind, kind: None}) == value

    def test_text_only_block_ignores_children(self, decoder: Decoder):
        data = {"type": "heading_1", "heading_1": {"text": [], "children": [{"type": "bogus"}]}}
        assert decoder.block(data) == Heading1Block()


# ---------------------------------------------------------------------------
# Recursive children and depth
# ---------------------------------------------------------------------------

def _nested_paragraphs(levels: int) -> dict:
    block: dict = {"type": "paragraph", "paragraph": {"text": [], "children": []}}
    for _ in range(levels - 1):
        block = {"type": "paragraph", "paragraph": {"text": [], "children": [block]}}
    return block


class TestChildren:
    def test_two_levels_of_children(self, decoder: Decoder, span):
        data = {
            "type": "toggle",
            "has_children": True,
            "toggle": {
                "text": [span("root")],
                "children": [
                    {
                        "type": "paragraph",
                        "has_children": True,
                        "paragraph": {
                            "text": [span("a")],
                            "children": [{"type": "to_do", "to_do": {"text": [span("a.1")], "checked": True}}],
                        },
                    },
                    {
                        "type": "bulleted_list_item",
                        "has_children": True,
                        "bulleted_list_item": {
                            "text": [span("b")],
                            "children": [
                                {"type": "heading_3", "heading_3": {"text": [span("b.1")]}},
                                {"type": "child_page", "child_page": {"title": "b.2"}},
                            ],
                        },
                    },
                ],
            },
        }
        block = decoder.block(data)

        assert isinstance(block, ToggleBlock)
        assert len(block.children) == 2
        first, second = block.children
        assert isinstance(first, ParagraphBlock)
        assert isinstance(second, BulletedListItemBlock)
        assert len(first.children) == 1
        assert isinstance(first.children[0], ToDoBlock)
        assert first.children[0].checked is True
        assert [type(c) for c in second.children] == [Heading3Block, ChildPageBlock]
        assert second.children[1].title == "b.2"

    def test_depth_within_limit(self):
        block = Decoder(max_depth=3).block(_nested_paragraphs(3))
        assert len(block.children[0].children) == 1

    def test_depth_over_limit(self):
        with pytest.raises(NotionDecodeError, match="too deeply nested") as exc_info:
            Decoder(max_depth=2).block(_nested_paragraphs(3))
        assert exc_info.value.path == "$.paragraph.children[0].paragraph.children[0]"

    def test_default_depth_limit(self, decoder: Decoder):
        decoder.block(_nested_paragraphs(64))
        with pytest.raises(NotionDecodeError, match="too deeply nested"):
            decoder.block(_nested_paragraphs(65))

    def test_max_depth_must_be_positive(self):
        with pytest.raises(ValueError):
            Decoder(max_depth=0)

    def test_max_depth_upper_bound(self):
        with pytest.raises(ValueError, match="max_depth"):
            Decoder(max_depth=MAX_DECODE_DEPTH_LIMIT + 1)

    def test_largest_limit_decodes_to_full_depth(self):
        block = Decoder(max_depth=MAX_DECODE_DEPTH_LIMIT).block(
            _nested_paragraphs(MAX_DECODE_DEPTH_LIMIT)
        )
        assert isinstance(block, ParagraphBlock)

    def test_very_deep_input_raises_decode_error(self):
        chain: dict = {"type": "toggle", "toggle": {"text": []}}
        for _ in range(3000):
            chain = {"type": "toggle", "toggle": {"text": [], "children": [chain]}}
        with pytest.raises(NotionDecodeError, match="too deeply nested"):
            Decoder(max_depth=MAX_DECODE_DEPTH_LIMIT).block(chain)

    def test_deep_rollup_arrays_raise_decode_error(self):
        value: dict = {"type": "number", "number": 1}
        for _ in range(3000):
            value = {"type": "rollup", "rollup": {"type": "array", "array": [value]}}
        with pytest.raises(NotionDecodeError, match="too deeply nested"):
            Decoder(max_depth=MAX_DECODE_DEPTH_LIMIT).property_value(value)

    def test_error_path_through_list_and_children(self, decoder: Decoder, span):
        envelope = {
            "object": "list",
            "results": [
                {"type": "heading_1", "heading_1": {"text": [span("ok")]}},
                {
                    "type": "paragraph",
                    "paragraph": {"text": [], "children": [{"type": "bogus"}]},
                },
            ],
            "next_cursor": None,
            "has_more": False,
        }
        with pytest.raises(NotionUnsupportedKindError) as exc_info:
            decoder.paginated(envelope, decoder.block)
        assert exc_info.value.path == "$.results[1].paragraph.children[0].type"
        assert exc_info.value.kind == "bogus"


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

class TestPagesAndDatabases:
    def test_page_resolves_parent_and_values(self, decoder: Decoder, page_payload):
        page = decoder.page(page_payload)
        assert isinstance(page.parent, DatabaseParent)
        assert page.parent.database_id == "48f8fee9-cd79-4180-bc2f-ec0398253067"
        assert isinstance(page.properties["Name"], TitleValue)
        assert page.properties["Name"].title[0].plain_text == "Groceries"
        assert page.properties["Status"].select.name == "Doing"
        assert page.properties["Due"].date == DateRange(start="2021-05-20")
        assert page.url.startswith("https://www.notion.so/")

    def test_database_resolves_schemas(self, decoder: Decoder, database_payload):
        database = decoder.database(database_payload)
        assert isinstance(database.properties["Name"], TitleSchema)
        assert isinstance(database.properties["Status"], SelectSchema)
        assert database.properties["Status"].options[0].color == "blue"
        assert isinstance(database.properties["Due"], BasicPropertySchema)
        assert database.properties["Due"].type is PropertyType.DATE
        assert database.title[0].plain_text == "Tasks"

    def test_schema_name_defaults_to_key(self, decoder: Decoder, database_payload):
        database = decoder.database(database_payload)
        assert {name: s.name for name, s in database.properties.items()} == {
            "Name": "Name",
            "Status": "Status",
            "Due": "Due",
        }

    def test_schema_title_with_array_is_rejected(self, decoder: Decoder, database_payload, span):
        database_payload["properties"]["Name"]["title"] = [span("oops")]
        with pytest.raises(NotionDecodeError) as exc_info:
            decoder.database(database_payload)
        assert exc_info.value.path == "$.properties.Name.title"
        assert exc_info.value.context["expected"] == "object"

    def test_value_title_with_object_is_rejected(self, decoder: Decoder, page_payload):
        page_payload["properties"]["Name"]["title"] = {}
        with pytest.raises(NotionDecodeError) as exc_info:
            decoder.page(page_payload)
        assert exc_info.value.path == "$.properties.Name.title"
        assert exc_info.value.context["expected"] == "array"

    def test_page_requires_parent(self, decoder: Decoder, page_payload):
        del page_payload["parent"]
        with pytest.raises(NotionDecodeError, match=r"\$\.parent"):
            decoder.page(page_payload)

    def test_union_by_object_field(self, decoder: Decoder, page_payload, database_payload):
        envelope = {"results": [database_payload, page_payload], "has_more": False}
        listing = decoder.paginated(envelope, decoder.object)
        assert isinstance(listing.results[0], Database)
        assert isinstance(listing.results[1], Page)

        envelope = {"results": [page_payload, database_payload], "has_more": False}
        listing = decoder.paginated(envelope, decoder.object)
        assert isinstance(listing.results[0], Page)
        assert isinstance(listing.results[1], Database)


class TestPaginated:
    def test_null_cursor_reads_as_empty(self, decoder: Decoder):
        listing = decoder.paginated({"results": [], "next_cursor": None, "has_more": False}, decoder.user)
        assert listing.next_cursor == ""
        assert listing.has_more is False

    def test_cursor_is_passed_through_verbatim(self, decoder: Decoder):
        cursor = "fe2cc560-036c-44cd-90e8-294d5a74cebc"
        listing = decoder.paginated({"results": [], "next_cursor": cursor, "has_more": True}, decoder.user)
        assert listing.next_cursor == cursor
        assert listing.has_more is True

    def test_results_decoded_per_item(self, decoder: Decoder):
        envelope = {"results": [ADA.to_dict(), BOT.to_dict()], "has_more": False}
        listing = decoder.paginated(envelope, decoder.user)
        assert listing.results == [ADA, BOT]
