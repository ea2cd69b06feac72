"""User variants.

A user is either a ``person`` (a human account, optionally exposing an
email address) or a ``bot`` (an integration).  The ``type`` tag is fixed by
the class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class UserType(str, Enum):
    PERSON = "person"
    BOT = "bot"


@dataclass
class User:
    """Fields shared by every user variant."""

    id: str = ""
    name: str = ""
    avatar_url: str | None = None
    object: str = field(default="user", init=False)
    type: UserType = field(default=UserType.PERSON, init=False)

    def _payload(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "object": self.object,
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "avatar_url": self.avatar_url,
            self.type.value: self._payload(),
        }


@dataclass
class PersonUser(User):
    email: str = ""
    type: UserType = field(default=UserType.PERSON, init=False)

    def _payload(self) -> dict[str, Any]:
        return {"email": self.email}


@dataclass
class BotUser(User):
    type: UserType = field(default=UserType.BOT, init=False)
