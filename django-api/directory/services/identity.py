"""Identity provider interface and the JWT-backed implementation."""

import logging
from abc import ABC, abstractmethod

import jwt

from directory.domain import Identity, SubjectId
from directory.domain.errors import IdentityProviderUnavailableError

logger = logging.getLogger(__name__)


class InvalidCredentialError(Exception):
    """Raised by providers when a token is expired, malformed or revoked."""


class IdentityProvider(ABC):
    """Interface for the external service that verifies bearer tokens."""

    @abstractmethod
    def verify(self, token: str) -> Identity:
        """Return the identity for a valid token.

        Raises:
            InvalidCredentialError: If the token is rejected.
            IdentityProviderUnavailableError: If verification could not be attempted.
        """
        ...


class JWTIdentityProvider(IdentityProvider):
    """Verifies RS256 ID tokens against a JWKS endpoint.

    The defaults in settings point at Firebase's secure-token keys, so tokens
    minted by Firebase Authentication for the configured project verify here.
    """

    algorithms = ["RS256"]

    def __init__(
        self,
        jwks_url: str,
        audience: str,
        issuer: str,
        leeway: int = 0,
        jwk_client: jwt.PyJWKClient | None = None,
    ) -> None:
        self._audience = audience
        self._issuer = issuer
        self._leeway = leeway
        self._jwk_client = jwk_client or jwt.PyJWKClient(jwks_url, cache_keys=True)

    def verify(self, token: str) -> Identity:
        try:
            signing_key = self._jwk_client.get_signing_key_from_jwt(token)
        except jwt.PyJWKClientConnectionError as exc:
            logger.error("Could not fetch signing keys: %s", exc)
            raise IdentityProviderUnavailableError() from exc
        except jwt.PyJWTError as exc:
            raise InvalidCredentialError(f"Unknown signing key: {exc}") from exc

        try:
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=self.algorithms,
                audience=self._audience,
                issuer=self._issuer,
                leeway=self._leeway,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidCredentialError("Token has expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidCredentialError(f"Token validation failed: {exc}") from exc

        if not claims["sub"]:
            raise InvalidCredentialError("Token has an empty subject")

        return Identity(subject_id=SubjectId(claims["sub"]), email=claims.get("email"))
