"""Django ORM implementation of the user and event stores."""

import logging

from django.db import connection
from django.db.models import F
from django.db.models.functions import Collate

from directory import models
from directory.domain import Event, EventId, Role, SubjectId, UserRecord
from directory.stores.interfaces import EventStore, UserStore

logger = logging.getLogger(__name__)


def _to_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        description=row.description,
        owner_id=SubjectId(row.owner_id),
        created_at=row.created_at,
    )


def _to_user(row: models.UserProfile) -> UserRecord:
    history = models.Attendance.objects.filter(user_id=row.subject_id).values_list("event_id", flat=True)
    return UserRecord(
        id=SubjectId(row.subject_id),
        email=row.email,
        role=Role(row.role),
        history=tuple(EventId(value) for value in history),
    )


class DjangoUserStore(UserStore):
    """User store backed by Django ORM."""

    def get_or_create_user(self, subject_id: SubjectId, email: str, role: Role) -> tuple[UserRecord, bool]:
        row, created = models.UserProfile.objects.get_or_create(
            subject_id=subject_id.value,
            defaults={"email": email, "role": role.value},
        )
        if created:
            logger.info("Provisioned user %s with role %s", subject_id, role.value)
        return _to_user(row), created

    def user_exists(self, subject_id: SubjectId) -> bool:
        return models.UserProfile.objects.filter(subject_id=subject_id.value).exists()

    def add_to_history(self, subject_id: SubjectId, event_id: EventId) -> bool:
        # The unique constraint makes concurrent adds converge on one row.
        _, created = models.Attendance.objects.get_or_create(
            user_id=subject_id.value,
            event_id=event_id.value,
        )
        return created

    def remove_from_history(self, subject_id: SubjectId, event_id: EventId) -> bool:
        deleted, _ = models.Attendance.objects.filter(
            user_id=subject_id.value,
            event_id=event_id.value,
        ).delete()
        return deleted > 0


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def add_event(self, owner_id: SubjectId, title: str, description: str) -> Event:
        row = models.Event.objects.create(
            title=title,
            description=description,
            owner_id=owner_id.value,
        )
        return _to_event(row)

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(id=event_id.value).first()
        if row is None:
            return None
        return _to_event(row)

    def list_events_for_owner(self, owner_id: SubjectId) -> list[Event]:
        rows = models.Event.objects.filter(owner_id=owner_id.value).order_by("-created_at")
        return [_to_event(row) for row in rows]

    def find_events_by_title_range(self, start: str, end: str) -> list[Event]:
        rows = (
            models.Event.objects.annotate(title_key=_binary_title())
            .filter(title_key__gte=start, title_key__lte=end)
            .order_by("title_key", "-created_at")
        )
        return [_to_event(row) for row in rows]


def _binary_title():
    # Range bounds compare code point by code point; locale collations do not.
    if connection.vendor == "postgresql":
        return Collate("title", "C")
    return F("title")
