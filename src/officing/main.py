"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from officing.checkin.router import router as checkin_router
from officing.config import get_settings
from officing.database import close_db, get_session, init_db
from officing.gamification.router import router as gamification_router
from officing.gamification.seed import seed_catalogs
from officing.health.router import router as health_router
from officing.lottery.router import router as lottery_router
from officing.middleware import setup_middleware
from officing.quests.router import router as quests_router
from officing.redis_client import close_redis, init_redis
from officing.shop.router import router as shop_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    await init_redis(settings.redis_url)

    # Seed titles, quests, prizes and shop items (idempotent)
    try:
        async for db in get_session():
            await seed_catalogs(db)
            break
    except SQLAlchemyError:
        logger.warning("Catalog seeding failed (tables may not exist yet)", exc_info=True)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Officing API",
        description="Backend API for Officing: gamified workplace check-ins",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(checkin_router)
    app.include_router(quests_router)
    app.include_router(lottery_router)
    app.include_router(shop_router)
    app.include_router(gamification_router)

    return app


app = create_app()
