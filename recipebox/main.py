"""
RecipeBox Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn recipebox.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware: Request ID → Logging → GZip → CORS     │
    │                                                     │
    │  Routes:                                            │
    │    /login /register           (auth)                │
    │    /api/recipes /api/published /api/trending        │
    │    /api/users /api/saved      (users)               │
    │    / /health                  (service)             │
    │                                                     │
    │  Exception Handlers:                                │
    │    NotFound→404  DuplicateEmail→400                 │
    │    InvalidCredentials→401  StoreUnavailable→503     │
    │    anything else→500                                │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, probe the database (with retries)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from recipebox import __version__
from recipebox.config import settings
from recipebox.database import dispose_engine, ping_database
from recipebox.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    RecipeBoxError,
    StoreUnavailableError,
)
from recipebox.middleware.logging import RequestLoggingMiddleware
from recipebox.middleware.request_id import RequestIDMiddleware, request_id_var
from recipebox.routes import auth, health, recipes, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-05-01T12:00:00 [INFO] recipebox.services.user_service: User registered: …
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("RecipeBox Backend %s starting up...", __version__)

    try:
        await ping_database()
        logger.info("Database reachable")
    except Exception as e:
        # Keep serving so /health can report the outage
        logger.error("Database unreachable after %d attempts: %s",
                     settings.db_connect_max_attempts, str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("RecipeBox Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, exc: RecipeBoxError, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": exc.message,
            "request_id": request_id_var.get(""),
            **extra,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the ErrorResponse shape.

    Handler table:
        NotFoundError            → 404 not_found
        DuplicateEmailError      → 400 duplicate_email
        InvalidCredentialsError  → 401 invalid_credentials
        StoreUnavailableError    → 503 store_unavailable
        RecipeBoxError (base)    → 500 server_error
        Exception (fallback)     → 500 internal_server_error

    Responses never include stack traces or error context; those are logged.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc)

    @app.exception_handler(DuplicateEmailError)
    async def handle_duplicate_email(request: Request, exc: DuplicateEmailError):
        logger.warning("[%s] Email conflict", request_id_var.get(""))
        return _error_response(400, "duplicate_email", exc)

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(request: Request, exc: InvalidCredentialsError):
        return _error_response(401, "invalid_credentials", exc)

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        rid = request_id_var.get("")
        logger.error("[%s] Store unavailable: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(503, "store_unavailable", exc)

    @app.exception_handler(RecipeBoxError)
    async def handle_app_error(request: Request, exc: RecipeBoxError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "Internal Server Error",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers into a FastAPI app."""
    app = FastAPI(
        title="RecipeBox API",
        description=(
            "Accounts, published recipes, saved recipes and trending ranking "
            "for the RecipeBox recipe-sharing app."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(recipes.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


app = create_app()
