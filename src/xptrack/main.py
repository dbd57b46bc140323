"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from xptrack.characters.router import router as characters_router
from xptrack.config import get_settings
from xptrack.database import close_db, create_tables, init_db
from xptrack.health.router import router as health_router
from xptrack.middleware import setup_middleware
from xptrack.rankings.router import router as rankings_router
from xptrack.statistics.router import router as statistics_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    if settings.database_url.startswith("sqlite"):
        await create_tables()
    logger.info("startup_complete", environment=settings.environment)

    yield

    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="XP Tracker API",
        description="Character XP progression tracking, metrics and streak leaderboards",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(characters_router)
    app.include_router(statistics_router)
    app.include_router(rankings_router)

    return app


app = create_app()
