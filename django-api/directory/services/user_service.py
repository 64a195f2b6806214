"""User directory: lazy provisioning of user records."""

from directory.domain import EnsureUserResult, Identity, Role
from directory.domain.models import UNDEFINED_EMAIL
from directory.stores.interfaces import UserStore


class UserDirectory:
    """Service for user record operations."""

    def __init__(self, store: UserStore) -> None:
        self._store = store

    def ensure_user(self, identity: Identity, requested_role: Role | None = None) -> EnsureUserResult:
        """Create the caller's record on first contact; otherwise do nothing."""
        _, created = self._store.get_or_create_user(
            identity.subject_id,
            email=identity.email or UNDEFINED_EMAIL,
            role=requested_role or Role.default(),
        )
        return EnsureUserResult(created=created)
