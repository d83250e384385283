from cms.errors.auth import (
    AuthenticationError,
    AuthorizationError,
    InactiveAccountError,
    InvalidTokenError,
    MissingCredentialsError,
    auth_exception_handler,
)
from cms.errors.base import BaseAppError, create_exception_handler
from cms.errors.database import (
    ConflictError,
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    InternalError,
    NotFoundError,
    TransactionError,
    database_exception_handler,
)
from cms.errors.validation import (
    ValidationError,
    validation_error_handler,
    validation_exception_handler,
)

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "BaseAppError",
    "ConflictError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "InactiveAccountError",
    "InternalError",
    "InvalidTokenError",
    "MissingCredentialsError",
    "NotFoundError",
    "TransactionError",
    "ValidationError",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "validation_error_handler",
    "validation_exception_handler",
]
