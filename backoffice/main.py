"""
Tienda Back Office — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn backoffice.main:app)
       and by the test suite for a fresh app per test.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Req ID → Logging → GZip → CORS        │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /api?path=   │ │ /api/login   │ │ /health     │  │
    │  │ (dispatcher) │ │ /logout      │ │             │  │
    │  │              │ │ /menu        │ │             │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  State: session_store (server-side sessions)        │
    │                                                     │
    │  Exception Handlers:                                │
    │  400 · 401 · 404 · 405 · 409 · 500                  │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from backoffice import __version__
from backoffice.config import settings
from backoffice.database import dispose_engine
from backoffice.exceptions import (
    AuthenticationError,
    BackOfficeError,
    ConflictError,
    DatabaseError,
    MethodNotAllowedError,
    NotFoundError,
    UnknownResourceError,
    ValidationError,
)
from backoffice.middleware.logging import RequestLoggingMiddleware
from backoffice.middleware.request_id import RequestIDMiddleware, request_id_var
from backoffice.routes import api, auth, health
from backoffice.services.session_store import SessionStore

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An internal error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, configuration check.
    Shutdown: dispose the engine so PostgreSQL frees the pooled connections.
    """
    setup_logging()
    logger.info("Tienda Back Office %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: development setups run on the defaults on purpose
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Tienda Back Office shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str, headers: Dict[str, str] = None, **extra: Any) -> JSONResponse:
    content: Dict[str, Any] = {"error": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and error bodies.

    Handler hierarchy:
        ValidationError        → 400
        AuthenticationError    → 401
        NotFoundError          → 404
        UnknownResourceError   → 404 (+ "resource")
        MethodNotAllowedError  → 405 (+ Allow header)
        ConflictError          → 409
        DatabaseError          → 500 generic
        BackOfficeError (base) → 500 generic
        Exception (fallback)   → 500 generic

    Security: 500 bodies never include exception text, SQL, or context.
    Details are logged server-side under the request id.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.info("[%s] Validation error: %s %s", rid, exc.message, exc.errors)
        if exc.errors:
            return _error(400, exc.message, details=exc.errors)
        return _error(400, exc.message)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return _error(401, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(UnknownResourceError)
    async def handle_unknown_resource(request: Request, exc: UnknownResourceError):
        rid = request_id_var.get("")
        logger.warning("[%s] Unknown resource requested: %r", rid, exc.resource)
        return _error(404, exc.message, resource=exc.resource)

    @app.exception_handler(MethodNotAllowedError)
    async def handle_method_not_allowed(request: Request, exc: MethodNotAllowedError):
        return _error(405, exc.message, headers={"Allow": ", ".join(exc.allowed)})

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _error(409, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(BackOfficeError)
    async def handle_backoffice_error(request: Request, exc: BackOfficeError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error(500, GENERIC_SERVER_ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each call builds an independent app with its own session store, which
    is what the tests rely on.
    """
    app = FastAPI(
        title="Tienda Back Office API",
        description="Products and users administration with session-based login.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.session_store = SessionStore(ttl_seconds=settings.session_ttl_seconds)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,     # Session cookie
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # /api/login is registered before /api; paths differ, so order is cosmetic
    app.include_router(auth.router)
    app.include_router(api.router)
    app.include_router(health.router)

    return app


# uvicorn expects `backoffice.main:app` to be importable
app = create_app()
