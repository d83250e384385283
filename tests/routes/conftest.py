# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from cms.models import CategoryDB


@pytest.fixture
async def travel(create_category: Callable[..., Awaitable[CategoryDB]]) -> CategoryDB:
    return await create_category("Travel")


@pytest.fixture
def post_body(travel: CategoryDB) -> Callable[..., dict[str, Any]]:
    """Build a valid post request body in the Travel category."""

    def _body(title: str = "Bali on a Budget", **overrides: Any) -> dict[str, Any]:
        body: dict[str, Any] = {
            "title": title,
            "description": "Travel the island without breaking the bank.",
            "content": "Rice terraces, beaches and temples on a shoestring.",
            "categoryId": str(travel.id),
            "tags": ["bali", "budget"],
        }
        body.update(overrides)
        return body

    return _body
