"""Authentication and authorization errors."""

from logging import getLogger

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from cms.configs import file_logger
from cms.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class AuthenticationError(BaseAppError):
    """Raised when the caller cannot be identified."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class MissingCredentialsError(AuthenticationError):
    """Raised when the Authorization header is absent or malformed."""

    def __init__(self) -> None:
        super().__init__("Missing or invalid authorization header")


class InvalidTokenError(AuthenticationError):
    """Raised when the identity provider rejects a token."""

    def __init__(self, detail: str = "Invalid or expired token") -> None:
        super().__init__(detail)


class AuthorizationError(BaseAppError):
    """Raised when an identified caller may not perform an action."""

    def __init__(
        self,
        detail: str = "Insufficient permissions",
        status_code: int = HTTP_403_FORBIDDEN,
    ) -> None:
        super().__init__(detail, status_code)


class InactiveAccountError(AuthorizationError):
    """Raised when a deactivated user makes a request."""

    def __init__(self) -> None:
        super().__init__("Account is inactive")


auth_exception_handler = create_exception_handler(logger)
