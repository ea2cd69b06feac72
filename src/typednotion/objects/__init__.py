"""Typed Notion objects.

Every discriminated family is a set of dataclasses sharing a base class;
the concrete class fixes the ``type`` tag.  Values built by callers are
serialized with ``to_dict()``; values read from the API are built by
:class:`typednotion.decoder.Decoder`.
"""

from .blocks import (
    Block,
    BlockType,
    BulletedListItemBlock,
    ChildPageBlock,
    ContainerBlock,
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
from .common import Color, DateRange, ObjectReference
from .parents import DatabaseParent, PageParent, Parent, ParentType, WorkspaceParent
from .properties import (
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
from .resources import (
    Database,
    Direction,
    ObjectType,
    Page,
    PageOrDatabase,
    PaginatedList,
    Sort,
)
from .rich_text import (
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
    plain_text_of,
)
from .users import BotUser, PersonUser, User, UserType

__all__ = [
    # Rich text
    "Annotations",
    "DatabaseMention",
    "DateMention",
    "EquationRichText",
    "Link",
    "Mention",
    "MentionRichText",
    "MentionType",
    "PageMention",
    "RichText",
    "RichTextType",
    "TextContent",
    "TextRichText",
    "UserMention",
    "plain_text_of",
    # Common
    "Color",
    "DateRange",
    "ObjectReference",
    # Users
    "BotUser",
    "PersonUser",
    "User",
    "UserType",
    # Parents
    "DatabaseParent",
    "PageParent",
    "Parent",
    "ParentType",
    "WorkspaceParent",
    # Blocks
    "Block",
    "BlockType",
    "BulletedListItemBlock",
    "ChildPageBlock",
    "ContainerBlock",
    "Heading1Block",
    "Heading2Block",
    "Heading3Block",
    "NumberedListItemBlock",
    "ParagraphBlock",
    "TextBlock",
    "ToDoBlock",
    "ToggleBlock",
    "UnsupportedBlock",
    # Properties
    "BasicPropertySchema",
    "CheckboxValue",
    "CreatedByValue",
    "CreatedTimeValue",
    "DateValue",
    "EmailValue",
    "FileReference",
    "FileType",
    "FilesValue",
    "FormulaResult",
    "FormulaResultType",
    "FormulaSchema",
    "FormulaValue",
    "LastEditedByValue",
    "LastEditedTimeValue",
    "MultiSelectSchema",
    "MultiSelectValue",
    "NumberSchema",
    "NumberValue",
    "PeopleValue",
    "PhoneNumberValue",
    "PropertySchema",
    "PropertyType",
    "PropertyValue",
    "RelationSchema",
    "RelationValue",
    "RichTextValue",
    "RollupResult",
    "RollupResultType",
    "RollupSchema",
    "RollupValue",
    "SelectOption",
    "SelectSchema",
    "SelectValue",
    "TextValue",
    "TitleSchema",
    "TitleValue",
    "URLValue",
    # Aggregates
    "Database",
    "Direction",
    "ObjectType",
    "Page",
    "PageOrDatabase",
    "PaginatedList",
    "Sort",
]
