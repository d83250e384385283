"""Tests for the JWT identity provider."""

import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from httpx import AsyncClient, ConnectError, MockTransport, Request, Response
from jose import jwt

from cms.clients.identity import (
    EmailAlreadyExistsError,
    IdentityProviderError,
    InvalidEmailError,
    JwtIdentityProvider,
)
from cms.clients.protocols import IdentityProvider
from cms.errors import InvalidTokenError, ValidationError

SECRET = "test-secret"
ADMIN_URL = "http://identity.test"

type Handler = Callable[[Request], Response]


def make_token(secret: str = SECRET, **claims: Any) -> str:
    payload = {
        "sub": "user-1",
        "email": "jane@example.com",
        "name": "Jane",
        "email_verified": True,
        "exp": datetime.now(tz=UTC) + timedelta(minutes=5),
    }
    payload.update(claims)
    return jwt.encode({k: v for k, v in payload.items() if v is not None}, secret, algorithm="HS256")


def test_satisfies_protocol() -> None:
    assert isinstance(JwtIdentityProvider(SECRET), IdentityProvider)


class TestVerifyIdToken:
    """Test cases for token verification."""

    @pytest.mark.asyncio
    async def test_valid_token(self) -> None:
        claims = await JwtIdentityProvider(SECRET).verify_id_token(make_token())

        assert claims.uid == "user-1"
        assert claims.email == "jane@example.com"
        assert claims.name == "Jane"
        assert claims.email_verified is True
        assert claims.claims["sub"] == "user-1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "token",
        [
            make_token(exp=datetime.now(tz=UTC) - timedelta(minutes=1)),
            make_token(secret="other-secret"),
            make_token(sub=None),
            "not-a-jwt",
        ],
        ids=["expired", "wrong-key", "no-subject", "garbage"],
    )
    async def test_rejected(self, token: str) -> None:
        with pytest.raises(InvalidTokenError, match="Invalid or expired token"):
            await JwtIdentityProvider(SECRET).verify_id_token(token)

    @pytest.mark.asyncio
    async def test_audience_and_issuer(self) -> None:
        provider = JwtIdentityProvider(SECRET, issuer="https://issuer.test", audience="cms")

        claims = await provider.verify_id_token(make_token(iss="https://issuer.test", aud="cms"))
        assert claims.uid == "user-1"

        with pytest.raises(InvalidTokenError):
            await provider.verify_id_token(make_token(iss="https://issuer.test", aud="other"))
        with pytest.raises(InvalidTokenError):
            await provider.verify_id_token(make_token(iss="https://elsewhere.test", aud="cms"))


@pytest.fixture
def admin_api() -> Callable[[Handler], JwtIdentityProvider]:
    """Build a provider whose admin API is served by a handler."""

    def _build(handler: Handler) -> JwtIdentityProvider:
        provider = JwtIdentityProvider(SECRET, admin_url=ADMIN_URL, max_retries=1)
        provider._client = AsyncClient(base_url=ADMIN_URL, transport=MockTransport(handler))
        return provider

    return _build


class TestAdminApi:
    """Test cases for account provisioning."""

    @pytest.mark.asyncio
    async def test_create_account(self, admin_api: Callable[[Handler], JwtIdentityProvider]) -> None:
        seen: list[dict[str, Any]] = []

        def handler(request: Request) -> Response:
            seen.append(json.loads(request.content))
            return Response(201, json={"uid": "new-uid"})

        provider = admin_api(handler)

        assert await provider.create_account("jane@example.com", "s3cret!", "Jane") == "new-uid"
        assert seen == [{"email": "jane@example.com", "password": "s3cret!", "displayName": "Jane"}]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("response", "error"),
        [
            (Response(409), EmailAlreadyExistsError),
            (Response(400, json={"error": {"code": "email-already-exists"}}), EmailAlreadyExistsError),
            (Response(400, json={"error": {"code": "invalid-email"}}), InvalidEmailError),
            (Response(400, json={"error": "weak password"}), ValidationError),
            (Response(500, json={"error": "boom"}), IdentityProviderError),
            (Response(201, json={}), IdentityProviderError),
        ],
    )
    async def test_create_account_errors(
        self,
        admin_api: Callable[[Handler], JwtIdentityProvider],
        response: Response,
        error: type[Exception],
    ) -> None:
        provider = admin_api(lambda request: response)

        with pytest.raises(error):
            await provider.create_account("jane@example.com", "s3cret!", "Jane")

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(
        self,
        admin_api: Callable[[Handler], JwtIdentityProvider],
    ) -> None:
        responses = [Response(503), Response(201, json={"uid": "new-uid"})]
        provider = admin_api(lambda request: responses.pop(0))
        provider.max_retries = 2

        assert await provider.create_account("jane@example.com", "s3cret!", "Jane") == "new-uid"
        assert responses == []

    @pytest.mark.asyncio
    async def test_delete_missing_account_is_ignored(
        self,
        admin_api: Callable[[Handler], JwtIdentityProvider],
    ) -> None:
        paths: list[str] = []

        def handler(request: Request) -> Response:
            paths.append(request.url.path)
            return Response(404)

        await admin_api(handler).delete_account("gone")

        assert paths == ["/accounts/gone"]

    @pytest.mark.asyncio
    async def test_unreachable(self, admin_api: Callable[[Handler], JwtIdentityProvider]) -> None:
        def handler(request: Request) -> Response:
            raise ConnectError("refused", request=request)

        with pytest.raises(IdentityProviderError):
            await admin_api(handler).delete_account("uid")

    @pytest.mark.asyncio
    async def test_not_configured(self) -> None:
        with pytest.raises(IdentityProviderError, match="not configured"):
            await JwtIdentityProvider(SECRET).create_account("jane@example.com", "s3cret!", "Jane")


@pytest.mark.asyncio
async def test_admin_token_header() -> None:
    configured = JwtIdentityProvider(SECRET, admin_url=ADMIN_URL, admin_token="abc")
    anonymous = JwtIdentityProvider(SECRET, admin_url=ADMIN_URL)

    assert configured._client is not None
    assert configured._client.headers["Authorization"] == "Bearer abc"
    assert anonymous._client is not None
    assert "Authorization" not in anonymous._client.headers

    await configured.aclose()
    await anonymous.aclose()
