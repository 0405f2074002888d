"""Jot Server - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from sqlmodel import Session

from jot import __version__
from jot.config import Settings
from jot.database import create_db_engine, init_db
from jot.errors import register_error_handlers
from jot.services.device_service import purge_expired
from jot.utils.pages import WEB_DIR

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database and sweep expired device challenges on startup."""
    init_db(app.state.engine)

    if app.state.settings.purge_on_startup:
        with Session(app.state.engine) as session:
            purge_expired(session)

    logger.info("%s %s started", app.state.settings.server_name, __version__)
    yield

    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one settings object and one engine."""
    settings = settings or Settings()
    settings.ensure_dirs()
    settings.ensure_secrets()

    app = FastAPI(
        title="Jot",
        description="Personal note-taking backend with device authorization",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_db_engine(settings)

    register_error_handlers(app)

    # --- Register API routers ---
    from jot.api.auth import router as auth_router
    from jot.api.health import router as health_router
    from jot.api.notes import router as notes_router
    from jot.api.repositories import router as repositories_router

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(repositories_router)
    app.include_router(notes_router)

    app.mount("/static", StaticFiles(directory=str(WEB_DIR)), name="static")

    @app.get("/")
    def root():
        """Server info."""
        return {
            "name": settings.server_name,
            "version": __version__,
            "status": "running",
        }

    return app
