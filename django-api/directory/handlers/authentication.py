"""DRF authentication backed by the AuthGate."""

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.request import Request

from directory import wiring
from directory.domain import Identity
from directory.domain.errors import AuthError


class AuthenticatedIdentity:
    """The ``request.user`` DRF sees for a verified caller."""

    is_authenticated = True
    is_anonymous = False

    def __init__(self, identity: Identity) -> None:
        self.identity = identity

    def __str__(self) -> str:
        return str(self.identity.subject_id)


class BearerTokenAuthentication(BaseAuthentication):
    """Requires ``Authorization: Bearer <token>`` on every request."""

    keyword = "Bearer"

    def authenticate(self, request: Request) -> tuple[AuthenticatedIdentity, str]:
        raw_header = get_authorization_header(request).decode("latin-1")
        try:
            identity = wiring.get_auth_gate().authenticate(raw_header or None)
        except AuthError as exc:
            raise exceptions.AuthenticationFailed(detail=exc.message, code=exc.code.value) from exc
        return AuthenticatedIdentity(identity), raw_header[len(self.keyword) + 1:].strip()

    def authenticate_header(self, request: Request) -> str:
        return self.keyword
