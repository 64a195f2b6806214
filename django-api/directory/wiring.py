"""Process-wide service instances, built once on first use."""

from functools import lru_cache

from django.conf import settings
from django.utils.module_loading import import_string

from directory.services.attendance_service import AttendanceLedger
from directory.services.auth_service import AuthGate
from directory.services.event_service import EventCatalog
from directory.services.identity import IdentityProvider
from directory.services.user_service import UserDirectory
from directory.stores.django_store import DjangoEventStore, DjangoUserStore


@lru_cache(maxsize=None)
def get_identity_provider() -> IdentityProvider:
    config = settings.DIRECTORY_IDENTITY_PROVIDER
    provider_class = import_string(config["CLASS"])
    return provider_class(**config.get("OPTIONS", {}))


@lru_cache(maxsize=None)
def get_auth_gate() -> AuthGate:
    return AuthGate(get_identity_provider())


@lru_cache(maxsize=None)
def get_user_directory() -> UserDirectory:
    return UserDirectory(DjangoUserStore())


@lru_cache(maxsize=None)
def get_event_catalog() -> EventCatalog:
    return EventCatalog(DjangoEventStore())


@lru_cache(maxsize=None)
def get_attendance_ledger() -> AttendanceLedger:
    return AttendanceLedger(DjangoUserStore(), DjangoEventStore())
