"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from directory.domain import Event, EventId, Role, SubjectId, UserRecord


class UserStore(ABC):
    """Interface for user record persistence operations."""

    @abstractmethod
    def get_or_create_user(self, subject_id: SubjectId, email: str, role: Role) -> tuple[UserRecord, bool]:
        """Return the user, creating it with the given fields if absent.

        Must be safe under concurrent duplicate calls for the same subject id.
        """
        ...

    @abstractmethod
    def user_exists(self, subject_id: SubjectId) -> bool:
        """Check if a user exists."""
        ...

    @abstractmethod
    def add_to_history(self, subject_id: SubjectId, event_id: EventId) -> bool:
        """Atomically add an event id to the user's history set.

        Returns True if the id was added, False if it was already present.
        """
        ...

    @abstractmethod
    def remove_from_history(self, subject_id: SubjectId, event_id: EventId) -> bool:
        """Atomically remove an event id from the user's history set.

        Returns True if the id was removed, False if it was not present.
        """
        ...


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def add_event(self, owner_id: SubjectId, title: str, description: str) -> Event:
        """Persist a new event with a store-assigned id and creation time."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def list_events_for_owner(self, owner_id: SubjectId) -> list[Event]:
        """Return the owner's events ordered by created_at descending."""
        ...

    @abstractmethod
    def find_events_by_title_range(self, start: str, end: str) -> list[Event]:
        """Return events whose title falls in the inclusive range [start, end]."""
        ...
