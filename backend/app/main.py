"""
Notes API — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes app configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app(config, database) returns a configured
       FastAPI instance bound to its own Database handle.
Who:   Called by uvicorn to start the server (uvicorn app.main:app) and by
       tests, which pass settings pointing at an in-memory database.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌──────┐ ┌──────┐ ┌───────┐ │
    │  │ Req ID │→│ Logging │→│ GZip │→│ CORS │→│ Error │ │
    │  └────────┘ └─────────┘ └──────┘ └──────┘ └───────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌──────────────────┐  │
    │  │ /api/notes, /api/note/*  │ │ GET /health      │  │
    │  └──────────────────────────┘ └──────────────────┘  │
    │                                                     │
    │  Exception Handlers (all via translate_error):      │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFound→404 │ Conflict→409 │ anything→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create tables if DB_CREATE_SCHEMA is set
    Shutdown:
    1. Dispose database engine (close all connections)
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
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, settings as default_settings
from app.database import Database
from app.exceptions import NotesAPIError, error_body, translate_error
from app.middleware.errors import UnhandledErrorMiddleware
from app.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware, request_id_var
from app.middleware.logging import RequestLoggingMiddleware
from app.routes import health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s
    The request_id field is filled by RequestIDLogFilter on the handler.
    """
    handler = logging.StreamHandler(sys.stdout)  # Docker captures stdout
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,  # Override any existing logging config
    )

    # These log every operation at INFO and drown out the access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Code before yield runs on startup, code after yield on shutdown."""
    config: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(config.log_level)
    logger.info("Notes API %s starting up...", __version__)

    if config.db_create_schema:
        await database.create_schema()

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)

    yield

    logger.info("Notes API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers that render the failure envelope.

    Handler hierarchy:
        NotesAPIError           → translate_error (404 / 409 / 500)
        RequestValidationError  → 500 (unreadable body: not anticipated here)
        HTTPException           → framework status, detail as message
        Exception (fallback)    → 500; normally rendered first by
                                  UnhandledErrorMiddleware so the response
                                  still carries X-Request-ID

    Security: Handlers NEVER expose internal details (stack traces, SQL,
    driver messages) in the response. Details are logged server-side.
    """

    @app.exception_handler(NotesAPIError)
    async def handle_app_error(request: Request, exc: NotesAPIError):
        rid = request_id_var.get("")
        status_code, body = translate_error(exc)
        if status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.error("[%s] Unreadable request on %s: %s", rid, request.url.path, exc.errors())
        status_code, body = translate_error(exc)
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Unknown routes and wrong methods, in the same envelope as everything else
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        status_code, body = translate_error(exc)
        return JSONResponse(status_code=status_code, content=body)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config:   Settings to use; defaults to the environment-loaded settings
        database: Store handle; defaults to a Database built from config

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    config = config or default_settings
    database = database or Database(config)

    app = FastAPI(
        title="Notes API",
        description="Create, read, update and delete titled notes.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the default app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


# uvicorn expects `app.main:app` to be importable
app = create_app()
