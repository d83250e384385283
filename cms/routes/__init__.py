from cms.routes.auth import router as auth_router
from cms.routes.categories import router as category_router
from cms.routes.posts import router as post_router
from cms.routes.users import router as user_router

__all__ = ["auth_router", "category_router", "post_router", "user_router"]
