"""Identity provider client.

Verifies ID tokens with python-jose and provisions sign-in accounts through
the provider's admin HTTP API.
"""

from logging import getLogger
from typing import Any, Self

from httpx import AsyncClient, HTTPStatusError, Response, TransportError
from jose import JWTError, jwt
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)

from cms.clients.protocols import IdentityClaims
from cms.configs import Settings, file_logger
from cms.decorators.with_retry import with_retry
from cms.errors import ConflictError, InternalError, InvalidTokenError, ValidationError

logger = file_logger(getLogger(__name__))


class IdentityProviderError(InternalError):
    """Raised when the identity provider cannot complete a request."""

    def __init__(self, detail: str = "Identity provider request failed") -> None:
        super().__init__(detail)


class EmailAlreadyExistsError(ConflictError):
    """Raised when the provider already has an account for an email."""

    def __init__(self) -> None:
        super().__init__("Email address is already in use")


class InvalidEmailError(ValidationError):
    """Raised when the provider rejects an email address."""

    def __init__(self) -> None:
        super().__init__("Invalid email address")


class JwtIdentityProvider:
    """
    Identity provider backed by signed JWT ID tokens.

    Args:
        secret_key: Key used to verify token signatures
        algorithm: Signature algorithm
        issuer: Expected ``iss`` claim, unchecked when None
        audience: Expected ``aud`` claim, unchecked when None
        admin_url: Base URL of the provider's account admin API
        admin_token: Bearer token for the admin API
        timeout: HTTP timeout in seconds
        max_retries: Attempts per admin call on transport errors
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
        audience: str | None = None,
        admin_url: str | None = None,
        admin_token: str = "",
        timeout: float = 10.0,
        max_retries: int = 3,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.admin_url = admin_url
        self.max_retries = max_retries
        self._client: AsyncClient | None = None
        if admin_url:
            headers = {"Authorization": f"Bearer {admin_token}"} if admin_token else {}
            self._client = AsyncClient(base_url=admin_url, headers=headers, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Build the provider from application settings."""
        return cls(
            secret_key=settings.IDENTITY_SECRET_KEY.get_secret_value(),
            algorithm=settings.IDENTITY_ALGORITHM,
            issuer=settings.IDENTITY_ISSUER,
            audience=settings.IDENTITY_AUDIENCE,
            admin_url=settings.IDENTITY_ADMIN_URL,
            admin_token=settings.IDENTITY_ADMIN_TOKEN.get_secret_value(),
            timeout=settings.IDENTITY_TIMEOUT,
            max_retries=settings.IDENTITY_MAX_RETRIES,
        )

    async def verify_id_token(self, token: str) -> IdentityClaims:
        """
        Verify an ID token and extract its claims.

        Args:
            token: Encoded JWT

        Returns:
            IdentityClaims: Subject id and claims

        Raises:
            InvalidTokenError: If the signature, expiry, issuer or audience
                check fails, or the token has no subject
        """
        options = {"verify_aud": self.audience is not None, "require_sub": True}
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options=options,
            )
        except JWTError as e:
            logger.info(f"Rejected ID token: {e}")
            raise InvalidTokenError from e

        uid = payload.get("sub")
        if not isinstance(uid, str) or not uid:
            raise InvalidTokenError

        return IdentityClaims(
            uid=uid,
            email=payload.get("email"),
            name=payload.get("name"),
            email_verified=bool(payload.get("email_verified", False)),
            claims=payload,
        )

    async def create_account(self, email: str, password: str, display_name: str) -> str:
        """
        Provision a sign-in account.

        Args:
            email: Account email
            password: Initial password
            display_name: Display name

        Returns:
            str: Subject id of the new account

        Raises:
            EmailAlreadyExistsError: If the email is already registered
            InvalidEmailError: If the provider rejects the email
            IdentityProviderError: For any other provider failure
        """
        response = await self._request(
            "POST",
            "/accounts",
            json={"email": email, "password": password, "displayName": display_name},
        )

        if response.status_code == HTTP_409_CONFLICT:
            raise EmailAlreadyExistsError
        if response.status_code == HTTP_400_BAD_REQUEST:
            code = _error_code(response)
            if code == "email-already-exists":
                raise EmailAlreadyExistsError
            if code == "invalid-email":
                raise InvalidEmailError
            raise ValidationError(_error_message(response) or "Invalid account details")

        self._raise_for_status(response)
        uid = response.json().get("uid")
        if not uid:
            raise IdentityProviderError("Identity provider returned no account id")

        logger.info(f"Provisioned identity account {uid}")
        return uid

    async def delete_account(self, uid: str) -> None:
        """
        Remove a sign-in account; a missing account is not an error.

        Args:
            uid: Subject id
        """
        response = await self._request("DELETE", f"/accounts/{uid}")
        if response.status_code == HTTP_404_NOT_FOUND:
            return
        self._raise_for_status(response)
        logger.info(f"Deleted identity account {uid}")

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Response:
        if self._client is None:
            raise IdentityProviderError("Identity provider admin API is not configured")

        client = self._client

        @with_retry(max_retries=self.max_retries)
        async def send() -> Response:
            return await client.request(method, url, **kwargs)

        try:
            return await send()
        except TransportError as e:
            logger.exception(f"Identity provider unreachable for {method} {url}")
            raise IdentityProviderError from e

    @staticmethod
    def _raise_for_status(response: Response) -> None:
        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            logger.error(
                f"Identity provider returned {response.status_code}: {_error_message(response)}",
            )
            raise IdentityProviderError from e


def _error_body(response: Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_code(response: Response) -> str | None:
    error = _error_body(response).get("error")
    if isinstance(error, dict):
        return error.get("code")
    return _error_body(response).get("code")


def _error_message(response: Response) -> str | None:
    error = _error_body(response).get("error")
    if isinstance(error, dict):
        return error.get("message")
    return error if isinstance(error, str) else None
