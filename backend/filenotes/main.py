"""
FileNotes: FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance holding its own Settings and NoteStore on app.state.
Who:   Called by the CLI (filenotes.cli), or by uvicorn directly:
           uvicorn filenotes.main:create_app --factory
       in which case Settings come from FILENOTES_* environment variables.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────────┐              │
    │  │  Request ID  │→│  Logging        │              │
    │  └──────────────┘ └─────────────────┘              │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐ │
    │  │ /notes ...   │ │ /write   │ │ /health, /      │ │
    │  └──────────────┘ └──────────┘ └─────────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Conflict→400 │ NotFound→404 │  │
    │  │ FileStorage→500 │ Exception→500              │  │
    │  └──────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the store root (and parents) plus its staging directory
    3. Log startup complete
    Only then does the server start accepting requests.
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from filenotes import __version__
from filenotes.config import Settings
from filenotes.exceptions import (
    ConflictError,
    FileNotesError,
    FileStorageError,
    NotFoundError,
    ValidationError,
)
from filenotes.middleware.logging import RequestLoggingMiddleware
from filenotes.middleware.request_id import RequestIDMiddleware, request_id_var
from filenotes.routes import health, notes, pages
from filenotes.services.note_store import NoteStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] filenotes.access: GET /notes 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # RequestLoggingMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: prepare the store root before the first request is served.

    A failure here aborts startup: a notes server that cannot create its
    directory has nothing to serve.
    """
    settings: Settings = app.state.settings
    store: NoteStore = app.state.note_store

    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("FileNotes %s starting up...", __version__)

    await store.ensure_root()

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("API docs: http://%s:%d/docs", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("FileNotes shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error(status_code: int, error: str, message: str, rid: str, details=None) -> JSONResponse:
    content = {"error": error, "message": message, "request_id": rid}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error envelope.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (missing/empty form fields)
        ConflictError           → 400 Bad Request (note already exists)
        NotFoundError           → 404 Not Found
        FileStorageError        → 500 Internal Server Error
        FileNotesError (base)   → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Filesystem paths and OS errors live in exc.context and are only logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = _request_id(request)
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        details = {"field": exc.field} if exc.field else None
        return _error(400, "validation_error", exc.message, rid, details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = _request_id(request)
        fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
        message = "Missing or invalid fields: " + ", ".join(fields) if fields else "Invalid request"
        logger.warning("[%s] Request validation error: %s", rid, message)
        return _error(400, "validation_error", message, rid, {"fields": fields})

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        rid = _request_id(request)
        logger.info("[%s] Conflict: %s", rid, exc.message)
        return _error(400, "conflict", exc.message, rid)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, "not_found", exc.message, _request_id(request))

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        rid = _request_id(request)
        logger.error("[%s] File storage error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, "server_error", exc.message, rid)

    @app.exception_handler(FileNotesError)
    async def handle_app_error(request: Request, exc: FileNotesError):
        rid = _request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, "server_error", "An internal error occurred.", rid)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        return _error(500, "internal_server_error", "An unexpected error occurred.", rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Startup configuration. When omitted, Settings() reads the
                  FILENOTES_* environment and fails if host, port, or
                  storage_root is missing.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="FileNotes API",
        description="Plain-text notes, one file per note in a flat directory.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.note_store = NoteStore(settings.storage_path)
    app.state.started_at = time.time()

    # Last added runs first: RequestID wraps Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)
    app.include_router(pages.router)

    return app
