"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in directory/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from directory.domain.value_objects import EventId, Role, SubjectId

UNDEFINED_EMAIL = "undefined_email"


@dataclass(frozen=True)
class Identity:
    """A caller verified by the identity provider. Never persisted as such."""

    subject_id: SubjectId
    email: str | None = None


@dataclass(frozen=True)
class UserRecord:
    """Domain representation of a provisioned user.

    ``history`` holds the ids of attended events in the order they were joined.
    Entries may outlive the event they point to.
    """

    id: SubjectId
    email: str
    role: Role
    history: tuple[EventId, ...] = ()


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    title: str
    description: str
    owner_id: SubjectId
    created_at: datetime


@dataclass(frozen=True)
class EnsureUserResult:
    """Outcome of provisioning a user record."""

    created: bool


@dataclass(frozen=True)
class AttendanceResult:
    """Outcome of an attend or unattend transition."""

    event_id: EventId
    attending: bool
    changed: bool


@dataclass(frozen=True)
class NotificationResult:
    """Outcome of a confirmation send. Failures are reported, not raised."""

    success: bool
    error: str | None = None
