"""Request and response schemas."""

from cms.schemas.auth import CurrentUser, EnsureUserRequest, EnsureUserResponse
from cms.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from cms.schemas.common import MessageResponse, ResponseModel
from cms.schemas.pagination import Page, PaginationMeta
from cms.schemas.post import FeaturedImage, PostCreate, PostResponse, PostStatus, PostUpdate
from cms.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = [
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "CurrentUser",
    "EnsureUserRequest",
    "EnsureUserResponse",
    "FeaturedImage",
    "MessageResponse",
    "Page",
    "PaginationMeta",
    "PostCreate",
    "PostResponse",
    "PostStatus",
    "PostUpdate",
    "ResponseModel",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
