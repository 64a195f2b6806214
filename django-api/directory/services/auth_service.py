"""Bearer-credential gate in front of every route."""

import logging

from directory.domain import Identity
from directory.domain.errors import AuthInvalidError, AuthMissingError
from directory.services.identity import IdentityProvider, InvalidCredentialError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AuthGate:
    """Turns a raw Authorization header into a verified Identity.

    Has no side effects; downstream services take the returned Identity as a
    precondition.
    """

    def __init__(self, provider: IdentityProvider) -> None:
        self._provider = provider

    def authenticate(self, raw_header: str | None) -> Identity:
        """Return the verified identity for ``raw_header``.

        Raises:
            AuthMissingError: If the header is absent or not a bearer credential.
            AuthInvalidError: If the identity provider rejects the token.
            IdentityProviderUnavailableError: If the provider cannot be reached.
        """
        if not raw_header or not raw_header.startswith(BEARER_PREFIX):
            raise AuthMissingError()

        token = raw_header[len(BEARER_PREFIX):].strip()
        if not token:
            raise AuthMissingError()

        try:
            return self._provider.verify(token)
        except InvalidCredentialError as exc:
            logger.warning("Rejected bearer token: %s", exc)
            raise AuthInvalidError() from exc
