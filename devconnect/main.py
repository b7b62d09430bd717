"""
DevConnect Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI app
       that owns its own Database, UserService and GithubService.
Who:   uvicorn imports `devconnect.main:app`; tests call create_app() with
       their own Settings.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  Middleware:  RateLimit → RequestID → AccessLog     │
    │  Routes:      /api/users  /api/auth  /api/profile   │
    │               /api/posts  /health                   │
    │  app.state:   settings, database, user_service,     │
    │               github_service                        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration, log banner
    Shutdown: close the GitHub HTTP client, dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from devconnect import __version__
from devconnect.config import Settings, settings as default_settings
from devconnect.database import Database
from devconnect.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    DevConnectError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from devconnect.middleware.logging import RequestLoggingMiddleware
from devconnect.middleware.rate_limit import RateLimitMiddleware
from devconnect.middleware.request_id import RequestIDMiddleware, request_id_var
from devconnect.routes import auth, health, posts, profile, users
from devconnect.services.github_service import GithubService
from devconnect.services.user_service import UserService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] devconnect.access: GET /api/posts 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("DevConnect API starting up...")

    try:
        config.validate_required_for_production()
    except ValueError as e:
        # Keep serving: local development runs with the default secret
        logger.warning("Configuration warning: %s", str(e))

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("API docs: http://%s:%d/docs", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("DevConnect API shutting down...")
    await app.state.github_service.close()
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, msg: str, **extra) -> JSONResponse:
    content = {"error": error, "msg": msg, "request_id": request_id_var.get("")}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def _field_errors(exc: RequestValidationError) -> list:
    """
    Flatten Pydantic errors into [{"field": ..., "msg": ...}].

    Custom validator messages ("Status is required") are returned as written,
    without Pydantic's "Value error, " prefix.
    """
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        ctx_error = (err.get("ctx") or {}).get("error")
        if err.get("type") == "value_error" and ctx_error is not None:
            msg = str(ctx_error)
        elif err.get("type") == "missing" and loc:
            msg = f"{loc[-1].capitalize()} is required"
        else:
            msg = err.get("msg", "Invalid value")
        errors.append({"field": ".".join(loc) or None, "msg": msg})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one error body format.

    Handler table:
        RequestValidationError  → 400 (schema problems, field list)
        ValidationError         → 400 (business rules, e.g. duplicate email)
        ConflictError           → 400
        AuthenticationError     → 401
        AuthorizationError      → 401
        NotFoundError           → 404
        ExternalServiceError    → 503
        DatabaseError           → 500 (generic message, details logged)
        DevConnectError (base)  → 500
        Exception (fallback)    → 500

    Security: handlers NEVER put stack traces, SQL or exception context in the
    response body; those go to the server log only.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = _field_errors(exc)
        logger.info("Request validation failed on %s: %s", request.url.path, errors)
        return _error_response(
            400, "validation_error", errors[0]["msg"] if errors else "Invalid request", errors=errors
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return _error_response(400, "validation_error", exc.message, errors=exc.errors)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _error_response(400, "conflict", exc.message)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        logger.info("Authentication failed on %s: %s %s", request.url.path, exc.message, exc.context)
        return _error_response(401, "authentication_error", exc.message)

    @app.exception_handler(AuthorizationError)
    async def handle_authorization_error(request: Request, exc: AuthorizationError):
        logger.warning("Authorization denied on %s: %s", request.url.path, exc.context)
        return _error_response(401, "authorization_error", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(ExternalServiceError)
    async def handle_external_service_error(request: Request, exc: ExternalServiceError):
        logger.error("External service error: %s | Context: %s", exc.message, exc.context)
        return _error_response(503, "external_service_error", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(DevConnectError)
    async def handle_app_error(request: Request, exc: DevConnectError):
        logger.error("Unhandled application error: %s | Context: %s", exc.message, exc.context)
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return _error_response(500, "internal_server_error", "Server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    github_service: Optional[GithubService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to build the app with (defaults to the environment).
        github_service: Replacement GitHub client (tests pass one backed by
            httpx.MockTransport).

    Returns: Fully configured FastAPI instance. The database engine is created
    here, once, and reaches handlers through `app.state` and dependencies.
    """
    config = config or default_settings

    app = FastAPI(
        title="DevConnect API",
        description="Social network for developers: accounts, profiles, posts, likes and comments.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.database = Database(config)
    app.state.user_service = UserService(config)
    app.state.github_service = github_service or GithubService(config)

    # ── Middleware (last added = first to execute) ─────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=config.rate_limit_requests,
        window_seconds=config.rate_limit_window,
    )

    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(posts.router)
    app.include_router(health.router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {"msg": "API Running"}

    return app


app = create_app()
