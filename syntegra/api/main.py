"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, syntegra.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from syntegra.api.deps.dependencies import get_service_cache
from syntegra.api.routers.router_utils.error_handling import INVALID_FORM_TITLE
from syntegra.configs import get_settings
from syntegra.core.exceptions import FormValidationError
from syntegra.core.notifications import Toast
from syntegra.models.common import ErrorResponse
from syntegra.observability.logger import configure_logging
from syntegra.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    dashboard_router,
    health_router,
    participants_router,
    questions_router,
    reports_router,
    sessions_router,
    tests_router,
    users_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Starts the background pollers and releases the upstream client on shutdown.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    cache = get_service_cache()
    _ = cache.api_client
    _ = cache.query_cache
    if settings.query.polling_enabled:
        cache.poller.start()
        logger.info("Query pollers started")

    yield

    # Shutdown
    await cache.aclose()
    logger.info("Service cache cleared")


def _validation_response(errors: dict[str, str]) -> JSONResponse:
    message = next(iter(errors.values()), "Data yang dikirim tidak valid")
    body = ErrorResponse(message=message, toast=Toast.error(INVALID_FORM_TITLE, message), errors=errors)
    return JSONResponse(status_code=422, content=body.model_dump(mode="json"))


async def form_validation_handler(request: Request, exc: FormValidationError) -> JSONResponse:
    """Form-level rules raised while FastAPI parses a request body."""
    return _validation_response(exc.errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body and query errors as `{field: message}` with the localized message."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.setdefault(".".join(loc) or "_form", error.get("msg", ""))
    return _validation_response(errors)


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Syntegra Psikotes Portal",
        description="Admin and participant portal over the psikotes REST API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(FormValidationError, form_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(sessions_router, prefix="/api/v1")
    app.include_router(participants_router, prefix="/api/v1")
    app.include_router(tests_router, prefix="/api/v1")
    app.include_router(questions_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(dashboard_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "syntegra.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
