"""Database models for the application."""

from cms.models.category import CategoryDB
from cms.models.post import PostDB
from cms.models.user import UserDB

__all__ = ["CategoryDB", "PostDB", "UserDB"]
