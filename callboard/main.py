"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI

from callboard.config import get_settings
from callboard.core.exceptions import register_exception_handlers
from callboard.core.logging import configure_logging
from callboard.core.middleware import setup_middleware
from callboard.infrastructure.database import Database
from callboard.interfaces.api.auth import router as auth_router
from callboard.interfaces.api.calls import router as calls_router
from callboard.interfaces.api.settings import router as settings_router
from callboard.interfaces.api.vapi import router as vapi_router
from callboard.interfaces.webhooks.call_log import router as call_log_router

logger = structlog.get_logger(__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    settings = get_settings()
    database = database or Database(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan — startup and shutdown events."""
        logger.info("Starting Callboard API", env=settings.ENVIRONMENT)

        # Tables are created on startup; there are no migrations
        database.create_all()
        logger.info("Database tables created/verified")

        if not settings.WEBHOOK_API_KEY:
            logger.warning("WEBHOOK_API_KEY is not set; POST /api/logCall will reject every request")
        if settings.ENVIRONMENT == "production" and settings.SESSION_SECRET == "change-me":
            logger.warning("SESSION_SECRET is the default value")

        yield

        database.dispose()
        logger.info("Callboard API stopped")

    app = FastAPI(
        title="Callboard",
        description="API Backend — voice-calling sales dashboard on top of Vapi",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database

    setup_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(settings_router)
    app.include_router(calls_router)
    app.include_router(vapi_router)
    app.include_router(call_log_router)

    @app.get("/")
    def root():
        return {
            "name": "Callboard",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


configure_logging()
app = create_app()
