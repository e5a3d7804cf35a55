"""Exercise Tracker API — FastAPI application entry point.

Invariants:
    - create_app(settings) is the only place routes, middleware and handlers are wired
    - Exactly one exercise router is mounted, chosen by settings.auth_mode
    - Global error handlers map ExerciseTrackerError → structured JSON responses
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Settings passed explicitly and stored on app.state; dependencies read it from there
    - Middleware stages applied in one ordered place (_add_middleware)
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.middleware import AccessLogMiddleware
from app.api.routes import exercises, health, users
from app.config import Settings, get_settings
from app.core.domain_types import AuthMode
from app.infrastructure.database import close_db, init_db
from app.infrastructure.observability import setup_logging
from app.services.credential_service import CredentialService

logger = logging.getLogger(__name__)


def _build_lifespan(settings: Settings):

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.create_schema_on_startup:
            await manager.create_schema()
        logger.info(
            "Exercise tracker API started",
            extra={"auth_mode": settings.auth_mode.value},
        )
        yield
        await close_db()
        logger.info("Exercise tracker API shutting down")

    return lifespan


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    """Apply request-processing stages; later entries wrap earlier ones."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(AccessLogMiddleware)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Exercise Tracker API",
        version="1.0.0",
        lifespan=_build_lifespan(settings),
    )
    app.state.settings = settings
    app.state.credentials = CredentialService(rounds=settings.bcrypt_rounds)

    _add_middleware(app, settings)
    register_error_handlers(app)

    prefix = settings.api_prefix
    app.include_router(health.router, prefix=prefix)
    app.include_router(users.router, prefix=prefix)
    if settings.auth_mode == AuthMode.PATH:
        app.include_router(exercises.path_router, prefix=prefix)
    else:
        app.include_router(exercises.header_router, prefix=prefix)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
