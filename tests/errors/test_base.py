# tests/errors/test_base.py
"""Tests for cms/errors/base.py module."""

from unittest.mock import MagicMock

import orjson
import pytest

from cms.errors import (
    AuthenticationError,
    AuthorizationError,
    BaseAppError,
    ConflictError,
    DatabaseConnectionError,
    InactiveAccountError,
    MissingCredentialsError,
    NotFoundError,
    ValidationError,
    create_exception_handler,
)


def mock_request(path: str = "/posts") -> MagicMock:
    request = MagicMock()
    request.client.host = "192.168.1.1"
    request.url.path = path
    return request


class TestBaseAppError:
    """Tests for BaseAppError exception."""

    def test_default_values(self) -> None:
        error = BaseAppError()
        assert error.detail == "Internal server error"
        assert error.status_code == 500

    def test_str_representation(self) -> None:
        assert str(BaseAppError("Test error")) == "Test error"

    @pytest.mark.parametrize(
        ("error", "status_code", "detail"),
        [
            (AuthenticationError(), 401, "Authentication failed"),
            (MissingCredentialsError(), 401, "Missing or invalid authorization header"),
            (AuthorizationError(), 403, "Insufficient permissions"),
            (InactiveAccountError(), 403, "Account is inactive"),
            (ValidationError("Category not found"), 400, "Category not found"),
            (ConflictError(), 400, "A record with this value already exists"),
            (NotFoundError("Post not found"), 404, "Post not found"),
            (DatabaseConnectionError(), 500, "Failed to connect to the database"),
        ],
    )
    def test_subclass_defaults(self, error: BaseAppError, status_code: int, detail: str) -> None:
        assert error.status_code == status_code
        assert error.detail == detail


class TestCreateExceptionHandler:
    """Tests for create_exception_handler factory function."""

    @pytest.mark.asyncio
    async def test_handler_with_app_error(self) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(mock_request(), NotFoundError("Post not found"))

        assert response.status_code == 404
        assert orjson.loads(response.body) == {"error": "Post not found"}
        logger.warning.assert_called_once_with(
            "Post not found for ip: 192.168.1.1 for endpoint /posts",
        )

    @pytest.mark.asyncio
    async def test_handler_includes_extra_attributes(self) -> None:
        """Test that public attributes set on the error are merged into the body."""
        handler = create_exception_handler(MagicMock())
        error = ValidationError("Invalid category")
        error.field = "categoryId"
        error._internal = "hidden"

        response = await handler(mock_request(), error)

        assert orjson.loads(response.body) == {"error": "Invalid category", "field": "categoryId"}

    @pytest.mark.asyncio
    async def test_handler_with_generic_exception(self) -> None:
        handler = create_exception_handler(MagicMock())

        response = await handler(mock_request(), RuntimeError("boom"))

        assert response.status_code == 500
        assert orjson.loads(response.body) == {"error": "Internal server error"}
