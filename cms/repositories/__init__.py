"""Repository layer for database operations."""

from cms.repositories.base import BaseRepository
from cms.repositories.category import CategoryRepository
from cms.repositories.post import PostRepository
from cms.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "PostRepository",
    "UserRepository",
]
