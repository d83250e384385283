"""Shared schema helpers."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic_core import PydanticCustomError


class ResponseModel(BaseModel):
    """Base for response bodies read straight off database rows."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class MessageResponse(BaseModel):
    """Acknowledgement returned by delete-style endpoints."""

    message: str
    id: str


def require_text(value: Any) -> Any:
    """
    Treat blank strings as absent.

    Raised with the ``missing`` error type so the validation handler reports
    the field alongside any fields that were left out entirely.
    """
    if isinstance(value, str) and not value.strip():
        raise PydanticCustomError("missing", "Field required")
    return value
