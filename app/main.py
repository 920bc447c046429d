"""
main.py — Application Entry Point
====================================
`create_app()` builds a fully wired app from a Settings object; the
module-level `app` is what uvicorn serves:

  uvicorn app.main:app --reload --port 8000

Tests call create_app() with their own settings (in-memory database,
fake partner emails) so nothing leaks between them.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from app.auth import get_settings
from app.config import Settings, settings as default_settings
from app.database import Database
from app.exceptions import register_exception_handlers
from app.schemas import HealthResponse, SetupStatusResponse
from app.services.google_auth import is_google_configured
from app.routers import auth, couples, calendar, photos, moods, love_notes

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    app.state.db.create_all()

    logger.info("Database tables created/verified")
    logger.info("Google OAuth: %s", "configured" if is_google_configured(settings) else "not configured")
    logger.info("Partner emails: %s", "configured" if settings.emails_configured else "not configured")
    yield
    app.state.db.dispose()
    logger.info("Server shutting down")


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> FastAPI:
    settings = settings or default_settings

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="LoveSync API",
        description="A shared calendar, gallery, moods and notes for two.",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db or Database(settings.database_url)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.environment == "production",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(couples.router)
    app.include_router(calendar.router)
    app.include_router(photos.router)
    app.include_router(moods.router)
    app.include_router(love_notes.router)

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    def health_check(settings: Settings = Depends(get_settings)):
        return HealthResponse(
            status="healthy",
            environment=settings.environment,
            version=VERSION,
            google_connected=is_google_configured(settings),
        )

    @app.get("/api/setup/status", response_model=SetupStatusResponse, tags=["system"])
    def setup_status(settings: Settings = Depends(get_settings)):
        """Which pieces of config are present. Public, so the setup page can call it."""
        return SetupStatusResponse(
            database=bool(settings.database_url),
            google_auth=is_google_configured(settings),
            emails=settings.emails_configured,
        )

    return app


app = create_app()
