"""Event catalog service - all catalog business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Return domain models or raise domain errors
"""

import logging

from directory.domain import Event, EventId, Identity
from directory.domain.errors import MissingFieldError, NoSearchResultsError
from directory.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

# Highest code point; sorts last by code point and by UTF-8 bytes.
TITLE_RANGE_SENTINEL = "\U0010ffff"


class EventCatalog:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def create_event(self, identity: Identity, title: str | None, description: str | None) -> EventId:
        """Persist an event owned by the caller and return its id.

        Raises:
            MissingFieldError: If title or description is empty or absent.
        """
        missing = tuple(name for name, value in (("title", title), ("description", description)) if not _present(value))
        if missing:
            raise MissingFieldError("Title and description are required.", fields=missing)

        event = self._store.add_event(identity.subject_id, title, description)
        logger.info("Event %s created by %s", event.id, identity.subject_id)
        return event.id

    def list_own_events(self, identity: Identity) -> list[Event]:
        """Return the caller's events, newest first. May be empty."""
        return self._store.list_events_for_owner(identity.subject_id)

    def search_by_title_prefix(self, query: str | None) -> list[Event]:
        """Return every event whose title starts with ``query`` (case-sensitive).

        Raises:
            MissingFieldError: If the query is empty or all whitespace.
            NoSearchResultsError: If nothing matches.
        """
        if not _present(query):
            raise MissingFieldError("Query parameter is required.", fields=("query",))

        candidates = self._store.find_events_by_title_range(query, query + TITLE_RANGE_SENTINEL)
        events = [event for event in candidates if event.title.startswith(query)]
        if not events:
            raise NoSearchResultsError(query)
        return events


def _present(value: str | None) -> bool:
    return bool(value and value.strip())
