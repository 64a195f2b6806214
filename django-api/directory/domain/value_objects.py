"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SubjectId:
    """Opaque subject identifier issued by the identity provider."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Subject id cannot be empty")

    def __str__(self) -> str:
        return self.value


class Role(str, Enum):
    """Roles a user may request when their record is provisioned."""

    SUBMITTER = "submitter"
    ORGANIZER = "organizer"

    @classmethod
    def default(cls) -> "Role":
        return cls.SUBMITTER
