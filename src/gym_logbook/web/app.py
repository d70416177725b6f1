"""FastAPI application for the gym-logbook API."""

import logging
from contextlib import asynccontextmanager

import aiosqlite
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, get_settings
from ..db.engine import init_db
from ..errors import GymLogbookError
from ..logs import configure_logging
from .routers import (
    analytics,
    check_ins,
    exercises,
    progress,
    sequence,
    sessions,
    users,
    workout_logs,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    await init_db(app.state.settings.db_path)
    yield


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="gym-logbook",
        description="Multi-tenant gym logbook with rolling workout sequences",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.exception_handler(GymLogbookError)
    async def app_error(request: Request, exc: GymLogbookError):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_invalid(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400, content={"error": _first_validation_message(exc)}
        )

    @app.exception_handler(aiosqlite.Error)
    async def store_error(request: Request, exc: aiosqlite.Error):
        logger.error(
            "Database error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(status_code=500, content={"error": "Database error"})

    # Include routers
    app.include_router(users.router)
    app.include_router(exercises.router)
    app.include_router(sequence.router)
    app.include_router(progress.router)
    app.include_router(sessions.router)
    app.include_router(workout_logs.router)
    app.include_router(check_ins.router)
    app.include_router(analytics.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
