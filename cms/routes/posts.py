# cms/routes/posts.py

"""
Post Routes.

Provides the paginated post listing and CRUD endpoints for posts.

Summary
-------
Endpoints include:
  - List posts (with filters)
  - Create post
  - Get post by id
  - Update post
  - Delete post

Authorization
-------------
Every endpoint authenticates the bearer token, rejects inactive accounts
and gates the role before touching the database. Authors only see and edit
their own posts; deleting requires editor or admin.

Rate Limiting
-------------
All endpoints define explicit limits and include `429` response examples.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from cms.auth import (
    PostCreateUserDep,
    PostDeleteUserDep,
    PostListUserDep,
    PostReadUserDep,
    PostUpdateUserDep,
)
from cms.configs import file_logger
from cms.dependencies import PostLifecycleDep, PostListQueryDep, PostRepoDep
from cms.managers import limiter
from cms.rbac.permissions import Role
from cms.schemas import MessageResponse, Page, PostCreate, PostResponse, PostUpdate
from cms.services.pagination import to_page

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

RATE_LIMIT_429 = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"error": "Rate limit exceeded"}}},
}
AUTH_401 = {
    "description": "Missing or invalid credentials",
    "content": {
        "application/json": {"example": {"error": "Missing or invalid authorization header"}},
    },
}
FORBIDDEN_403 = {
    "description": "Inactive account or insufficient role",
    "content": {"application/json": {"example": {"error": "Insufficient permissions"}}},
}
NOT_FOUND_404 = {
    "description": "Not found",
    "content": {"application/json": {"example": {"error": "Post not found"}}},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=Page[PostResponse],
    summary="List posts",
    description=(
        "Paginated post listing ordered by last update. Filters: status, category, "
        "author and free-text search. Authors only see their own posts."
    ),
    responses={401: AUTH_401, 403: FORBIDDEN_403, 429: RATE_LIMIT_429},
    operation_id="posts_list",
)
@limiter.limit("60/minute")
async def list_posts(
    request: Request,
    response: Response,
    user: PostListUserDep,
    query: PostListQueryDep,
    repo: PostRepoDep,
) -> Page[PostResponse]:
    """
    List posts visible to the caller.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    user : CurrentUser
        Authorized caller.
    query : PostListQuery
        Page parameters and filters.
    repo : PostRepository
        Repository dependency.

    Returns
    -------
    Page[PostResponse]
        Items plus the pagination block.
    """
    author = user.uid if user.role is Role.AUTHOR else query.author

    rows, total = await repo.list_posts(
        offset=query.params.offset,
        limit=query.params.limit,
        status=query.status,
        category=query.category,
        author=author,
        search=query.search,
    )
    return to_page(rows, total, query.params, PostResponse)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a post",
    description="Create a post authored by the caller. Slug, excerpt, reading time and SEO are derived.",
    responses={
        400: {
            "description": "Missing fields, duplicate title or unknown category",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Missing required fields: title, description, content, categoryId",
                    },
                },
            },
        },
        401: AUTH_401,
        403: FORBIDDEN_403,
        429: RATE_LIMIT_429,
    },
    operation_id="posts_create",
)
@limiter.limit("20/minute")
async def create_post(
    request: Request,
    response: Response,
    user: PostCreateUserDep,
    post: Annotated[
        PostCreate,
        Body(
            examples={
                "basic": {
                    "summary": "Draft post",
                    "value": {
                        "title": "Bali on a Budget",
                        "description": "How to enjoy Bali without overspending",
                        "content": "Bali is wonderful...",
                        "categoryId": "123e4567-e89b-12d3-a456-426614174000",
                        "tags": ["bali", "budget"],
                    },
                },
            },
        ),
    ],
    lifecycle: PostLifecycleDep,
) -> PostResponse:
    """
    Create a new post.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    user : CurrentUser
        Authorized caller, recorded as author.
    post : PostCreate
        Post input payload.
    lifecycle : PostLifecycleManager
        Lifecycle service.

    Returns
    -------
    PostResponse
        Created post data.
    """
    db_post = await lifecycle.create(post, user)
    return PostResponse.model_validate(db_post)


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get post by ID",
    responses={401: AUTH_401, 403: FORBIDDEN_403, 404: NOT_FOUND_404, 429: RATE_LIMIT_429},
    operation_id="posts_get",
)
@limiter.limit("120/minute")
async def get_post(
    request: Request,
    response: Response,
    post_id: str,
    user: PostReadUserDep,
    lifecycle: PostLifecycleDep,
) -> PostResponse:
    """
    Get a post by ID.

    Parameters
    ----------
    post_id : str
        Post identifier.
    user : CurrentUser
        Authorized caller; authors may only read their own posts.
    lifecycle : PostLifecycleManager
        Lifecycle service.

    Returns
    -------
    PostResponse
        Post data.
    """
    db_post = await lifecycle.get(post_id, user)
    return PostResponse.model_validate(db_post)


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update a post",
    description=(
        "Partially update a post. Slug is recomputed when the title changes, reading "
        "time when the content changes; entering published stamps the publish date."
    ),
    responses={
        400: {
            "description": "Duplicate title or unknown category",
            "content": {"application/json": {"example": {"error": "Category not found"}}},
        },
        401: AUTH_401,
        403: FORBIDDEN_403,
        404: NOT_FOUND_404,
        429: RATE_LIMIT_429,
    },
    operation_id="posts_update",
)
@limiter.limit("30/minute")
async def update_post(
    request: Request,
    response: Response,
    post_id: str,
    user: PostUpdateUserDep,
    post: PostUpdate,
    lifecycle: PostLifecycleDep,
) -> PostResponse:
    """
    Update a post.

    Parameters
    ----------
    post_id : str
        Post identifier.
    user : CurrentUser
        Authorized caller; authors may only update their own posts.
    post : PostUpdate
        Fields to change.
    lifecycle : PostLifecycleManager
        Lifecycle service.

    Returns
    -------
    PostResponse
        Updated post data.
    """
    db_post = await lifecycle.update(post_id, post, user)
    return PostResponse.model_validate(db_post)


@router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a post",
    description="Delete a post and reverse its category and author counters.",
    responses={401: AUTH_401, 403: FORBIDDEN_403, 404: NOT_FOUND_404, 429: RATE_LIMIT_429},
    operation_id="posts_delete",
)
@limiter.limit("20/minute")
async def delete_post(
    request: Request,
    response: Response,
    post_id: str,
    user: PostDeleteUserDep,
    lifecycle: PostLifecycleDep,
) -> MessageResponse:
    """
    Delete a post.

    Parameters
    ----------
    post_id : str
        Post identifier.
    user : CurrentUser
        Editor or admin.
    lifecycle : PostLifecycleManager
        Lifecycle service.

    Returns
    -------
    MessageResponse
        Confirmation with the deleted id.
    """
    deleted_id = await lifecycle.delete(post_id, user)
    return MessageResponse(message="Post deleted successfully", id=str(deleted_id))
