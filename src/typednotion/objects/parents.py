"""Parent variants: what a page is nested under.

The tag doubles as the payload key, so a database parent reads::

    {"type": "database_id", "database_id": "..."}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ParentType(str, Enum):
    DATABASE = "database_id"
    PAGE = "page_id"
    WORKSPACE = "workspace"


@dataclass
class Parent:
    type: ParentType = field(default=ParentType.WORKSPACE, init=False)

    def _payload(self) -> Any:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, self.type.value: self._payload()}


@dataclass
class DatabaseParent(Parent):
    database_id: str = ""
    type: ParentType = field(default=ParentType.DATABASE, init=False)

    def _payload(self) -> Any:
        return self.database_id


@dataclass
class PageParent(Parent):
    page_id: str = ""
    type: ParentType = field(default=ParentType.PAGE, init=False)

    def _payload(self) -> Any:
        return self.page_id


@dataclass
class WorkspaceParent(Parent):
    workspace: bool = True
    type: ParentType = field(default=ParentType.WORKSPACE, init=False)

    def _payload(self) -> Any:
        return self.workspace
