"""Attendance ledger: the attend/unattend state machine.

Each (user, event) pair is either attending or not. Both transitions are set
operations in the store, so repeating either one is a successful no-op.
"""

import logging

from directory.domain import AttendanceResult, EventId, Identity
from directory.domain.errors import EventNotFoundError, InvalidEventIdError, UserNotFoundError
from directory.signals import attendance_confirmed
from directory.stores.interfaces import EventStore, UserStore

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Service for attendance transitions."""

    def __init__(self, users: UserStore, events: EventStore) -> None:
        self._users = users
        self._events = events

    def attend(self, identity: Identity, event_id: str) -> AttendanceResult:
        """Add ``event_id`` to the caller's history and announce the confirmation.

        Every successful call, repeats included, sends ``attendance_confirmed``.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            UserNotFoundError: If the caller has no user record.
            EventNotFoundError: If the event does not exist.
        """
        parsed = _parse_event_id(event_id)
        if not self._users.user_exists(identity.subject_id):
            raise UserNotFoundError(str(identity.subject_id))

        event = self._events.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)

        added = self._users.add_to_history(identity.subject_id, parsed)
        if not added:
            logger.info("User %s already attending event %s", identity.subject_id, parsed)

        # send_robust: a failing receiver cannot undo or fail the transition.
        for receiver, response in attendance_confirmed.send_robust(
            sender=self.__class__,
            identity=identity,
            event=event,
            already_attending=not added,
        ):
            if isinstance(response, Exception):
                logger.error("Attendance receiver %r failed: %s", receiver, response)

        return AttendanceResult(event_id=parsed, attending=True, changed=added)

    def unattend(self, identity: Identity, event_id: str) -> AttendanceResult:
        """Remove ``event_id`` from the caller's history.

        The event itself is not looked up, so ids of deleted events can still be
        removed.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            UserNotFoundError: If the caller has no user record.
        """
        parsed = _parse_event_id(event_id)
        logger.info("Unattending event %s for %s", parsed, identity.subject_id)
        if not self._users.user_exists(identity.subject_id):
            raise UserNotFoundError(str(identity.subject_id))

        removed = self._users.remove_from_history(identity.subject_id, parsed)
        return AttendanceResult(event_id=parsed, attending=False, changed=removed)


def _parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidEventIdError() from exc
