"""
ProjectHub Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn projecthub.main:app),
       or through the `projecthub` console script (run()).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐             │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │             │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘             │
    │                                                          │
    │  Routes:                                                 │
    │  ┌───────────┐ ┌────────┐ ┌─────────┐ ┌─────────────┐    │
    │  │ /projects │ │ /auth  │ │ /users  │ │ GET /health │    │
    │  └───────────┘ └────────┘ └─────────┘ └─────────────┘    │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Invalid→400 │ Unauth→401 │ Forbidden→403 │ 404/409 │  │
    │  │ DatabaseError→500 │ Unexpected→500                 │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate security-sensitive configuration (warn, don't exit)
    3. Ensure database indexes (warn if the database is unreachable)

    Shutdown:
    1. Close the database client and its connection pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from projecthub import __version__
from projecthub.config import settings
from projecthub.database import close_client, ensure_indexes, get_database
from projecthub.exceptions import DatabaseError, ProjectHubError, UnauthorizedError
from projecthub.middleware.logging import RequestLoggingMiddleware
from projecthub.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from projecthub.routes import auth, health, projects, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("ProjectHub Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: local development runs on the default secret
        logger.warning("%s", str(e))

    try:
        await ensure_indexes(await get_database())
    except PyMongoError as e:
        logger.error("Could not ensure database indexes: %s", str(e))
        logger.error("Requests will fail until MongoDB at %s is reachable.", settings.mongo_url)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("ProjectHub Backend shutting down...")
    await close_client()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs outside RequestIDMiddleware, after the ContextVar is reset
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def error_response(request: Request, exc: ProjectHubError) -> JSONResponse:
    """
    Shape a ProjectHubError into the standard error body.

    Example:
        {"error": "not_found", "message": "project with ID '...' was not found",
         "details": {...}, "request_id": "1f2e3d4c"}
    """
    rid = _request_id(request)
    content = {
        "error": exc.error_code,
        "message": exc.message,
        "request_id": rid,
    }
    if exc.context:
        content["details"] = exc.context

    headers = {REQUEST_ID_HEADER: rid} if rid else {}
    if isinstance(exc, UnauthorizedError):
        headers["WWW-Authenticate"] = "Bearer"
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        DatabaseError           → 500 (generic message, details logged only)
        ProjectHubError         → its own status_code / error_code
        RequestValidationError  → 400 invalid_input (unparseable body or params)
        HTTPException           → its status (unknown route → 404 "Not found")
        Exception (fallback)    → 500
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = _request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(request, DatabaseError())

    @app.exception_handler(ProjectHubError)
    async def handle_projecthub_error(request: Request, exc: ProjectHubError):
        rid = _request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        reason = first.get("msg", "is invalid")
        return JSONResponse(
            status_code=400,
            content={
                "error": "invalid_input",
                "message": f"Invalid {location or 'request body'}: {reason}",
                "details": {"field": location or "body", "reason": reason},
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            error, message = "not_found", "Not found"
        elif exc.status_code == 405:
            error, message = "method_not_allowed", "Method not allowed"
        else:
            error, message = "http_error", str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": error, "message": message, "request_id": _request_id(request)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers into a FastAPI app."""
    app = FastAPI(
        title="ProjectHub API",
        description=(
            "Share software projects: publish them with their technology stack, "
            "and comment on, like and bookmark other people's projects."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(projects.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console-script entry point: serve the app with uvicorn."""
    uvicorn.run(
        "projecthub.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
