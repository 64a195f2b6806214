"""Pytest configuration and shared fixtures."""

import itertools
import threading
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from django.db import connections
from rest_framework.test import APIClient

from directory import signals, wiring
from directory.domain import Event, EventId, Identity, Role, SubjectId, UserRecord
from directory.services.auth_service import AuthGate
from directory.services.identity import IdentityProvider, InvalidCredentialError
from directory.stores.interfaces import EventStore, UserStore

ALICE = Identity(subject_id=SubjectId("alice-uid"), email="alice@example.com")
BOB = Identity(subject_id=SubjectId("bob-uid"), email="bob@example.com")


class StaticIdentityProvider(IdentityProvider):
    """Accepts a fixed set of tokens."""

    def __init__(self, tokens: dict[str, Identity]) -> None:
        self.tokens = tokens
        self.calls: list[str] = []

    def verify(self, token: str) -> Identity:
        self.calls.append(token)
        try:
            return self.tokens[token]
        except KeyError:
            raise InvalidCredentialError("unknown token") from None


class InMemoryUserStore(UserStore):
    def __init__(self) -> None:
        self.users: dict[SubjectId, UserRecord] = {}

    def get_or_create_user(self, subject_id, email, role):
        if subject_id in self.users:
            return self.users[subject_id], False
        self.users[subject_id] = UserRecord(id=subject_id, email=email, role=role)
        return self.users[subject_id], True

    def user_exists(self, subject_id):
        return subject_id in self.users

    def add_to_history(self, subject_id, event_id):
        user = self.users[subject_id]
        if event_id in user.history:
            return False
        self.users[subject_id] = UserRecord(user.id, user.email, user.role, user.history + (event_id,))
        return True

    def remove_from_history(self, subject_id, event_id):
        user = self.users[subject_id]
        if event_id not in user.history:
            return False
        history = tuple(item for item in user.history if item != event_id)
        self.users[subject_id] = UserRecord(user.id, user.email, user.role, history)
        return True


class InMemoryEventStore(EventStore):
    def __init__(self) -> None:
        self.events: dict[EventId, Event] = {}
        self._clock = itertools.count()

    def add_event(self, owner_id, title, description):
        created_at = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=next(self._clock))
        event = Event(EventId(uuid.uuid4()), title, description, owner_id, created_at)
        self.events[event.id] = event
        return event

    def get_event(self, event_id):
        return self.events.get(event_id)

    def list_events_for_owner(self, owner_id):
        owned = [event for event in self.events.values() if event.owner_id == owner_id]
        return sorted(owned, key=lambda event: event.created_at, reverse=True)

    def find_events_by_title_range(self, start, end):
        return sorted(
            (event for event in self.events.values() if start <= event.title <= end),
            key=lambda event: event.title,
        )


@pytest.fixture
def identity_provider() -> StaticIdentityProvider:
    return StaticIdentityProvider({"alice-token": ALICE, "bob-token": BOB})


@pytest.fixture(autouse=True)
def directory_wiring(monkeypatch, settings, identity_provider):
    settings.DIRECTORY_NOTIFICATIONS_ASYNC = False
    settings.DEFAULT_FROM_EMAIL = "events@example.com"
    signals.get_notification_queue.cache_clear()
    monkeypatch.setattr(wiring, "get_auth_gate", lambda: AuthGate(identity_provider))
    yield
    signals.get_notification_queue.cache_clear()


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def alice_client(api_client: APIClient) -> APIClient:
    api_client.credentials(HTTP_AUTHORIZATION="Bearer alice-token")
    return api_client


@pytest.fixture
def bob_client() -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION="Bearer bob-token")
    return client


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def alice_record(user_store: InMemoryUserStore) -> UserRecord:
    record, _ = user_store.get_or_create_user(ALICE.subject_id, ALICE.email, Role.SUBMITTER)
    return record


@pytest.fixture
def alice() -> Identity:
    return ALICE


@pytest.fixture
def bob() -> Identity:
    return BOB


@pytest.fixture
def run_concurrently():
    """Call ``target`` from ``count`` threads released together by a barrier."""

    def run(target, count: int = 6) -> tuple[list, list[Exception]]:
        barrier = threading.Barrier(count)
        results: list = []
        errors: list[Exception] = []

        def worker():
            try:
                barrier.wait(timeout=10)
                results.append(target())
            except Exception as exc:
                errors.append(exc)
            finally:
                connections.close_all()

        threads = [threading.Thread(target=worker) for _ in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)
        return results, errors

    return run
