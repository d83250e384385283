"""Custom validation error handling for FastAPI."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from cms.configs import file_logger
from cms.errors.base import BaseAppError, create_exception_handler
from cms.utils.helpers import host

logger = file_logger(getLogger(__name__))


class ValidationError(BaseAppError):
    """Raised when a request is well formed but semantically invalid."""

    def __init__(self, detail: str = "Validation error") -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)


def _field_name(loc: tuple | list) -> str:
    # Skip the 'body' / 'query' / 'path' prefix
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic request validation errors.

    Missing fields are summarised as ``Missing required fields: a, b``;
    any other failure names the first offending field.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with status 400 and formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)

    formatted_errors = []
    for error in exec_error.errors():
        formatted_error = {
            "field": _field_name(error.get("loc", ("body",))),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        if "ctx" in error:
            formatted_error["context"] = {
                key: str(value) if isinstance(value, Exception) else value
                for key, value in error["ctx"].items()
            }
        formatted_errors.append(formatted_error)

    missing = [err["field"] for err in formatted_errors if err["type"] == "missing"]
    if formatted_errors and len(missing) == len(formatted_errors):
        message = f"Missing required fields: {', '.join(missing)}"
    elif formatted_errors:
        first = formatted_errors[0]
        message = f"Invalid value for {first['field']}: {first['message']}"
    else:
        message = "Validation error"

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"error": message, "errors": formatted_errors},
    )


validation_error_handler = create_exception_handler(logger)
