# cms/main.py

"""Content-management backend: posts, categories and users behind role-gated APIs."""

from logging import getLogger
from typing import cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR, HTTP_503_SERVICE_UNAVAILABLE

from cms.configs import file_logger, settings
from cms.configs.settings import DEFAULT_ERROR_MESSAGE
from cms.db import ping
from cms.errors import (
    AuthenticationError,
    AuthorizationError,
    BaseAppError,
    ConflictError,
    DatabaseConnectionError,
    DatabaseError,
    NotFoundError,
    ValidationError,
    auth_exception_handler,
    create_exception_handler,
    database_exception_handler,
    validation_error_handler,
    validation_exception_handler,
)
from cms.managers import limiter, rate_limit_exceeded_handler
from cms.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from cms.routes import auth_router, category_router, post_router, user_router
from cms.utils.helpers import host, today_str

logger = file_logger(getLogger(__name__))

app = FastAPI(
    title=settings.APP_NAME,
    description="Content management API for posts, categories and users",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)


async def http_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render framework HTTP errors (404 routes, 405 methods) in the ``{"error": ...}`` shape."""
    http_exc = cast(StarletteHTTPException, exc)
    return ORJSONResponse(
        status_code=http_exc.status_code,
        content={"error": http_exc.detail},
        headers=http_exc.headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Log anything unexpected and answer with a generic 500."""
    logger.exception(f"Unhandled error for ip: {host(request)} at {request.url.path}", exc_info=exc)
    return ORJSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": DEFAULT_ERROR_MESSAGE},
    )


routes = [
    auth_router,
    post_router,
    category_router,
    user_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (AuthenticationError, auth_exception_handler),
    (AuthorizationError, auth_exception_handler),
    (DatabaseError, database_exception_handler),
    (ConflictError, database_exception_handler),
    (NotFoundError, database_exception_handler),
    (ValidationError, validation_error_handler),
    (BaseAppError, create_exception_handler(logger)),
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
    (Exception, unhandled_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01",
                        "database": "connected",
                    },
                },
            },
        },
        503: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "degraded",
                        "timestamp": "2025-01-01",
                        "database": "unavailable",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Version, date and database reachability. 503 when the database
        cannot be reached.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "2025-01-01", "database": "connected"}
    """
    content = {
        "version": app.version,
        "status": "ok",
        "timestamp": today_str(),
        "database": "connected",
    }
    try:
        await ping(request.app.state.services.engine)
    except DatabaseConnectionError:
        content |= {"status": "degraded", "database": "unavailable"}
        return ORJSONResponse(content, status_code=HTTP_503_SERVICE_UNAVAILABLE)

    return ORJSONResponse(content)
