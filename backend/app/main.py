"""
HairBook Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance; `app = create_app()` at the bottom serves uvicorn.
Who:   uvicorn (`uvicorn app.main:app`), the `hairbook` console script, tests.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌─────────────────┐ ┌───────┐ ┌──────┐ │
    │  │  Req ID  │→│  Access Logging │→│ GZip  │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └───────┘ └──────┘ │
    │                                                      │
    │  Routes:                                             │
    │  /, /health, /api/register, /api/login,              │
    │  /api/location*, /api/bookings*,                     │
    │  /api/admin/users-locations**                        │
    │       (* bearer token, ** bearer token + admin)      │
    │                                                      │
    │  Exception Handlers:                                 │
    │  Validation/Duplicate/Credentials→400 │ Auth→401     │
    │  Forbidden→403 │ Database/unexpected→500             │
    └──────────────────────────────────────────────────────┘

Application state (built here, read through dependencies):
    app.state.settings         Settings (frozen)
    app.state.database         Database (engine + session factory)
    app.state.password_hasher  PasswordHasher
    app.state.token_service    TokenService

Lifecycle:
    Startup:  logging → config warnings → database ping (failure aborts startup)
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import Settings
from app.database import Database
from app.exceptions import DatabaseError, HairBookError, UnauthorizedError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import admin, auth, bookings, health, location
from app.services.password_service import PasswordHasher
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    Startup sequence:
        1. Setup logging
        2. Log configuration warnings (e.g. fallback JWT secret)
        3. Ping the database; an unreachable database aborts startup

    Shutdown sequence:
        1. Dispose database engine (close all pooled connections)
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("=" * 60)
    logger.info("HairBook Backend %s starting up...", __version__)

    for problem in settings.warnings():
        logger.warning("Configuration warning: %s", problem)

    try:
        await database.ping()
    except Exception as e:
        logger.error("Database connection error: %s", str(e))
        logger.error("Fix DATABASE_URL or start the database, then restart the server.")
        await database.dispose()
        raise
    logger.info("Database connected")

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("HairBook Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str, code: str, details: Optional[dict] = None) -> dict:
    body = {"error": message, "code": code, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy (most specific wins):
        RequestValidationError  → 400 (FastAPI body/type errors)
        UnauthorizedError       → 401 + WWW-Authenticate: Bearer
        DatabaseError           → 500, generic message
        HairBookError (base)    → exc.status_code (400 / 403 / ...)
        Exception (fallback)    → 500

    Exception handlers never expose internal details (stack traces, SQL)
    in the API response. Details are logged server-side.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body is not JSON or a field has the wrong type."""
        fields = [
            ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            for error in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), fields)
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "Invalid or malformed input",
                "validation_error",
                {"fields": [f for f in fields if f]},
            ),
        )

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=401,
            content=_error_body(exc.message, exc.code),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Generic message to the client; details logged server-side."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "An internal error occurred. Please try again later.",
                exc.code,
            ),
        )

    @app.exception_handler(HairBookError)
    async def handle_app_error(request: Request, exc: HairBookError):
        """Client-side errors: the message is safe to show as-is."""
        rid = request_id_var.get("")
        logger.warning("[%s] %s: %s", rid, exc.code, exc.message)
        details = exc.context if exc.code == "validation_error" else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code, details),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for truly unexpected errors (stack trace logged, not returned)."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "An unexpected error occurred. Please try again or contact support.",
                "internal_server_error",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use. Read from the environment when None.

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="HairBook API",
        description=(
            "Backend for the hairdresser booking app: accounts, location "
            "reports, appointment bookings and the admin locations map."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Application State ─────────────────────────────────────────────────
    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.password_hasher = PasswordHasher()
    app.state.token_service = TokenService(settings.jwt_secret, settings.jwt_algorithm)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(location.router)
    app.include_router(bookings.router)
    app.include_router(admin.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `app.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve `app` on the configured host and port."""
    settings: Settings = app.state.settings
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
