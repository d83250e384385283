from logging import getLogger

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from cms.configs import file_logger
from cms.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class InternalError(BaseAppError):
    """Base exception for datastore and provider failures."""

    def __init__(
        self,
        detail: str = "Internal server error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DatabaseError(InternalError):
    """Base exception for database errors."""

    def __init__(self, detail: str = "Database error") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class DatabaseConnectionError(DatabaseError):
    """Exception raised when database connection fails."""

    def __init__(self, detail: str = "Failed to connect to the database") -> None:
        super().__init__(detail)


class DatabaseInitializationError(DatabaseError):
    """Exception raised when database initialization fails."""

    def __init__(self, detail: str = "Failed to initialize database") -> None:
        super().__init__(detail)


class TransactionError(DatabaseError):
    """Exception raised when a transaction fails."""

    def __init__(self, detail: str = "Transaction failed") -> None:
        super().__init__(detail)


class ConflictError(BaseAppError):
    """Exception raised when a unique value is already taken."""

    def __init__(
        self,
        detail: str = "A record with this value already exists",
    ) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class NotFoundError(BaseAppError):
    """Exception raised when a record is not found."""

    def __init__(self, detail: str = "Record not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


database_exception_handler = create_exception_handler(logger)
