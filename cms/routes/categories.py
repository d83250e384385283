# cms/routes/categories.py

"""
Category Routes.

Listing and CRUD endpoints for categories. Writes enforce slug uniqueness
and parent integrity; deletion is blocked while posts or child categories
reference the category.
"""

from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from cms.auth import (
    CategoryCreateUserDep,
    CategoryDeleteUserDep,
    CategoryListUserDep,
    CategoryReadUserDep,
    CategoryUpdateUserDep,
)
from cms.configs import file_logger
from cms.dependencies import CategoryListQueryDep, CategoryRepoDep, CategoryServiceDep
from cms.managers import limiter
from cms.routes.posts import AUTH_401, FORBIDDEN_403, RATE_LIMIT_429
from cms.schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    MessageResponse,
    Page,
)
from cms.services.pagination import to_page

router = APIRouter(prefix="/categories", tags=["🗂️ Categories"])

logger = file_logger(getLogger(__name__))

NOT_FOUND_404 = {
    "description": "Not found",
    "content": {"application/json": {"example": {"error": "Category not found"}}},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=Page[CategoryResponse],
    summary="List categories",
    description="Paginated category listing. Filters: status, featured, search; sort by name, posts, views or creation.",
    responses={401: AUTH_401, 403: FORBIDDEN_403, 429: RATE_LIMIT_429},
    operation_id="categories_list",
)
@limiter.limit("60/minute")
async def list_categories(
    request: Request,
    response: Response,
    user: CategoryListUserDep,
    query: CategoryListQueryDep,
    repo: CategoryRepoDep,
) -> Page[CategoryResponse]:
    """List categories with filters and sorting."""
    rows, total = await repo.list_categories(
        offset=query.params.offset,
        limit=query.params.limit,
        status=query.status,
        featured=query.featured,
        search=query.search,
        sort=query.sort,
    )
    return to_page(rows, total, query.params, CategoryResponse)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a category",
    responses={
        400: {
            "description": "Duplicate name, bad colour or missing parent",
            "content": {
                "application/json": {
                    "example": {
                        "error": "A category with this name already exists. "
                        "Please choose a different name.",
                    },
                },
            },
        },
        401: AUTH_401,
        403: FORBIDDEN_403,
        429: RATE_LIMIT_429,
    },
    operation_id="categories_create",
)
@limiter.limit("20/minute")
async def create_category(
    request: Request,
    response: Response,
    user: CategoryCreateUserDep,
    category: CategoryCreate,
    service: CategoryServiceDep,
) -> CategoryResponse:
    """
    Create a category.

    Parameters
    ----------
    user : CurrentUser
        Editor or admin.
    category : CategoryCreate
        Category input payload.
    service : CategoryService
        Category service.

    Returns
    -------
    CategoryResponse
        Created category data.
    """
    db_category = await service.create(category, user)
    return CategoryResponse.model_validate(db_category)


@router.get(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    summary="Get category by ID",
    responses={401: AUTH_401, 403: FORBIDDEN_403, 404: NOT_FOUND_404, 429: RATE_LIMIT_429},
    operation_id="categories_get",
)
@limiter.limit("120/minute")
async def get_category(
    request: Request,
    response: Response,
    category_id: str,
    user: CategoryReadUserDep,
    service: CategoryServiceDep,
) -> CategoryResponse:
    """Get a category by ID."""
    db_category = await service.get(category_id)
    return CategoryResponse.model_validate(db_category)


@router.put(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    summary="Update a category",
    description="Partially update a category; slug and parent are re-validated when they change.",
    responses={
        400: {
            "description": "Duplicate name, missing parent or circular parent chain",
            "content": {
                "application/json": {
                    "example": {"error": "Cannot create circular category relationship"},
                },
            },
        },
        401: AUTH_401,
        403: FORBIDDEN_403,
        404: NOT_FOUND_404,
        429: RATE_LIMIT_429,
    },
    operation_id="categories_update",
)
@limiter.limit("30/minute")
async def update_category(
    request: Request,
    response: Response,
    category_id: str,
    user: CategoryUpdateUserDep,
    category: CategoryUpdate,
    service: CategoryServiceDep,
) -> CategoryResponse:
    """
    Update a category.

    Parameters
    ----------
    category_id : str
        Category identifier.
    user : CurrentUser
        Editor or admin.
    category : CategoryUpdate
        Fields to change; ``parentId: null`` detaches the parent.
    service : CategoryService
        Category service.

    Returns
    -------
    CategoryResponse
        Updated category data.
    """
    db_category = await service.update(category_id, category, user)
    return CategoryResponse.model_validate(db_category)


@router.delete(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a category",
    responses={
        400: {
            "description": "Category still referenced",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Cannot delete category with existing posts. "
                        "Please move or delete posts first.",
                    },
                },
            },
        },
        401: AUTH_401,
        403: FORBIDDEN_403,
        404: NOT_FOUND_404,
        429: RATE_LIMIT_429,
    },
    operation_id="categories_delete",
)
@limiter.limit("20/minute")
async def delete_category(
    request: Request,
    response: Response,
    category_id: str,
    user: CategoryDeleteUserDep,
    service: CategoryServiceDep,
) -> MessageResponse:
    """Delete an unreferenced category (admin only)."""
    deleted_id = await service.delete(category_id, user)
    return MessageResponse(message="Category deleted successfully", id=str(deleted_id))
