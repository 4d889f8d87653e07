"""
Resource Matching Service - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resource_matching.api import create_api_router
from resource_matching.api.dependencies import map_domain_exception_to_http
from resource_matching.api.v1.health import router as health_router
from resource_matching.core.config import Settings, get_settings
from resource_matching.core.transaction_manager import reset_transaction_manager
from resource_matching.domain.exceptions import DomainException, ErrorKind
from resource_matching.infrastructure.providers.database_provider import (
    get_database_manager,
    reset_database_manager,
)
from resource_matching.infrastructure.providers.matching_provider import (
    get_resolution_stats,
    reset_matching_services,
)
from resource_matching.infrastructure.providers.repository_provider import reset_repositories
from resource_matching.middleware import RequestContextMiddleware, get_request_id


def configure_logging(settings: Settings) -> None:
    """Configure structured logging once per process."""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_FORMAT == "json" or not sys.stdout.isatty()
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.LOG_LEVEL.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=settings.is_production(),
    )


logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    settings = get_settings()
    logger.info(
        "Starting Resource Matching Service",
        version=app.version,
        environment=settings.ENVIRONMENT,
    )

    try:
        db_manager = await get_database_manager()
        db_health = await db_manager.health_check()
        logger.info("Database initialized successfully", status=db_health["status"])
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        if settings.is_production():
            sys.exit(1)

    yield

    logger.info("Shutting down Resource Matching Service")
    try:
        stats = await get_resolution_stats()
        logger.info("Skill resolver totals", skill_resolver=stats.as_dict())

        await reset_repositories()
        await reset_matching_services()
        reset_transaction_manager()
        await reset_database_manager()
        logger.info("Service cleanup completed")
    except Exception as e:
        logger.error("Cleanup error", error=str(e))


def _error_body(request: Request, error: str, message: str) -> dict:
    return {"error": error, "message": message, "request_id": get_request_id(request)}


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error", "message", "request_id"}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            body = _error_body(request, exc.detail["error"], exc.detail.get("message", ""))
        else:
            body = _error_body(request, ErrorKind.INVALID_INPUT.value if exc.status_code < 500
                               else ErrorKind.INTERNAL.value, str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content=_error_body(request, ErrorKind.INVALID_INPUT.value, message),
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        http_exc = map_domain_exception_to_http(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=_error_body(request, http_exc.detail["error"], http_exc.detail["message"]),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception", exception_type=type(exc).__name__)
        return JSONResponse(
            status_code=500,
            content=_error_body(request, ErrorKind.INTERNAL.value, "Internal server error"),
        )


def create_app(settings: Settings = None) -> FastAPI:
    """Create and configure FastAPI application"""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Scores employees against open project roles and keeps a reviewable shortlist",
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        openapi_url="/openapi.json" if not settings.is_production() else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(create_api_router())

    return app


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Setup all middleware during app creation"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    # Added last so it wraps CORS and sees every request first
    app.add_middleware(RequestContextMiddleware)


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "resource_matching.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,  # Use our structured logging
    )
