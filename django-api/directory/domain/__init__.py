from directory.domain.models import (
    AttendanceResult,
    EnsureUserResult,
    Event,
    Identity,
    NotificationResult,
    UserRecord,
)
from directory.domain.value_objects import EventId, Role, SubjectId

__all__ = [
    "AttendanceResult",
    "EnsureUserResult",
    "Event",
    "Identity",
    "NotificationResult",
    "UserRecord",
    "EventId",
    "Role",
    "SubjectId",
]
