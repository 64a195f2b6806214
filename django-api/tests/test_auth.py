"""Tests for the bearer-token gate and the JWT identity provider.

Run with: pytest tests/test_auth.py -v
"""

import time
from types import SimpleNamespace

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from rest_framework.test import APIClient

from directory import models, wiring
from directory.domain import SubjectId
from directory.domain.errors import AuthInvalidError, AuthMissingError, IdentityProviderUnavailableError
from directory.services.auth_service import AuthGate
from directory.services.identity import InvalidCredentialError, JWTIdentityProvider

AUDIENCE = "demo-project"
ISSUER = "https://securetoken.google.com/demo-project"


class TestAuthGate:
    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Basic alice-token", "bearer alice-token"])
    def test_missing_or_malformed_header(self, identity_provider, header):
        with pytest.raises(AuthMissingError):
            AuthGate(identity_provider).authenticate(header)
        assert identity_provider.calls == []

    def test_rejected_token(self, identity_provider):
        with pytest.raises(AuthInvalidError):
            AuthGate(identity_provider).authenticate("Bearer forged")

    def test_valid_token_returns_identity(self, identity_provider, alice):
        assert AuthGate(identity_provider).authenticate("Bearer alice-token") == alice
        assert identity_provider.calls == ["alice-token"]


@pytest.fixture(scope="module")
def signing_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def provider(signing_key):
    key_client = SimpleNamespace(get_signing_key_from_jwt=lambda token: SimpleNamespace(key=signing_key.public_key()))
    return JWTIdentityProvider("https://keys.invalid", AUDIENCE, ISSUER, jwk_client=key_client)


def _token(signing_key, **overrides) -> str:
    now = int(time.time())
    claims = {
        "sub": "firebase-uid",
        "email": "dana@example.com",
        "aud": AUDIENCE,
        "iss": ISSUER,
        "iat": now,
        "exp": now + 3600,
    }
    claims.update(overrides)
    return jwt.encode({k: v for k, v in claims.items() if v is not None}, signing_key, algorithm="RS256")


class TestJWTIdentityProvider:
    def test_valid_token(self, provider, signing_key):
        identity = provider.verify(_token(signing_key))
        assert identity.subject_id == SubjectId("firebase-uid")
        assert identity.email == "dana@example.com"

    def test_email_is_optional(self, provider, signing_key):
        assert provider.verify(_token(signing_key, email=None)).email is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"exp": int(time.time()) - 60},
            {"aud": "another-project"},
            {"iss": "https://evil.example.com"},
            {"sub": None},
            {"sub": ""},
        ],
    )
    def test_rejected_claims(self, provider, signing_key, overrides):
        with pytest.raises(InvalidCredentialError):
            provider.verify(_token(signing_key, **overrides))

    def test_wrong_signing_key(self, provider):
        other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        with pytest.raises(InvalidCredentialError):
            provider.verify(_token(other_key))

    def test_garbage_token(self, provider):
        with pytest.raises(InvalidCredentialError):
            provider.verify("not.a.jwt")

    def test_key_endpoint_unreachable(self):
        def unreachable(token):
            raise jwt.PyJWKClientConnectionError("timed out")

        provider = JWTIdentityProvider(
            "https://keys.invalid",
            AUDIENCE,
            ISSUER,
            jwk_client=SimpleNamespace(get_signing_key_from_jwt=unreachable),
        )
        with pytest.raises(IdentityProviderUnavailableError):
            provider.verify("header.payload.signature")


@pytest.mark.django_db
class TestRouteGating:
    ROUTES = [
        ("post", "/api/create", {}),
        ("post", "/api/events", {"title": "t", "description": "d"}),
        ("get", "/api/events", None),
        ("get", "/api/search-events", {"query": "Conf"}),
        ("post", "/api/attend-event", {"eventId": "0b6c3c1e-1f2a-4c5d-9e8f-123456789abc"}),
        ("post", "/api/unattend-event", {"eventId": "0b6c3c1e-1f2a-4c5d-9e8f-123456789abc"}),
    ]

    @pytest.mark.parametrize(("method", "path", "body"), ROUTES)
    def test_missing_credential_rejected_before_store_access(
        self, api_client: APIClient, django_assert_num_queries, method, path, body
    ):
        with django_assert_num_queries(0):
            response = getattr(api_client, method)(path, body)

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized: No token provided", "code": "AUTH_MISSING"}
        assert response["WWW-Authenticate"] == "Bearer"

    @pytest.mark.parametrize(("method", "path", "body"), ROUTES)
    def test_invalid_credential_rejected_before_store_access(
        self, api_client: APIClient, django_assert_num_queries, method, path, body
    ):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer forged")
        with django_assert_num_queries(0):
            response = getattr(api_client, method)(path, body)

        assert response.status_code == 401
        assert response.json()["code"] == "AUTH_INVALID"
        assert not models.Event.objects.exists()
        assert not models.UserProfile.objects.exists()

    def test_identity_provider_outage_is_internal_error(self, api_client: APIClient, monkeypatch):
        class Unavailable:
            def verify(self, token):
                raise IdentityProviderUnavailableError()

        monkeypatch.setattr(wiring, "get_auth_gate", lambda: AuthGate(Unavailable()))
        api_client.credentials(HTTP_AUTHORIZATION="Bearer alice-token")

        response = api_client.get("/api/events")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error", "code": "IDENTITY_UNAVAILABLE"}
