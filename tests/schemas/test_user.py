"""Tests for cms/schemas/user.py."""

import pytest
from pydantic import ValidationError

from cms.rbac import Role
from cms.schemas.user import UserCreate, UserUpdate

VALID = {
    "email": "jane@example.com",
    "displayName": "Jane Doe",
    "role": "author",
    "password": "s3cret!",
}


class TestUserCreate:
    """Tests for UserCreate schema validation."""

    def test_valid(self) -> None:
        user = UserCreate.model_validate(VALID)

        assert user.role is Role.AUTHOR
        assert user.password.get_secret_value() == "s3cret!"
        assert "s3cret!" not in repr(user)

    def test_short_password(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            UserCreate.model_validate({**VALID, "password": "12345"})

        error = exc_info.value.errors()[0]
        assert error["type"] == "password_too_short"
        assert error["msg"] == "Password must be at least 6 characters"

    @pytest.mark.parametrize("email", ["not-an-email", "jane@", "@example.com"])
    def test_invalid_email(self, email: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            UserCreate.model_validate({**VALID, "email": email})
        assert exc_info.value.errors()[0]["loc"] == ("email",)

    def test_unknown_role(self) -> None:
        with pytest.raises(ValidationError):
            UserCreate.model_validate({**VALID, "role": "owner"})


class TestUserUpdate:
    """Tests for UserUpdate schema validation."""

    def test_admin_fields(self) -> None:
        update = UserUpdate.model_validate({"role": "editor", "bio": "Hi"})

        assert UserUpdate.ADMIN_FIELDS & update.model_dump(exclude_unset=True).keys() == {"role"}

    def test_profile_only(self) -> None:
        update = UserUpdate.model_validate({"displayName": "Ada"})

        assert not UserUpdate.ADMIN_FIELDS & update.model_dump(exclude_unset=True).keys()
