"""
Application lifespan management
Handles initialization and shutdown of services
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from core.config import get_settings
from core.dependencies import set_community_store
from community_store import CommunityStore

logger = logging.getLogger(__name__)


async def initialize_services(database_path: Optional[str] = None) -> CommunityStore:
    """Initialize all application services"""
    settings = get_settings()
    db_path = database_path or settings.DATABASE_PATH

    logger.info(f"Community API starting - Database: {db_path}")

    try:
        store = CommunityStore(
            db_path,
            busy_timeout=settings.DB_BUSY_TIMEOUT,
            recent_ratings_limit=settings.RECENT_RATINGS_LIMIT,
        )
        set_community_store(store)
        logger.info("✅ Community store initialized")
        return store

    except Exception as e:
        logger.error(f"❌ Failed to initialize services: {e}")
        raise


async def shutdown_services() -> None:
    """Shutdown all application services"""
    logger.info("🛑 Community API shutting down...")
    # Connections are per-operation, nothing is held open between requests
    set_community_store(None)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager

    Handles initialization on startup and cleanup on shutdown
    """
    # Startup
    await initialize_services(getattr(app.state, "database_path", None))

    yield

    # Shutdown
    await shutdown_services()
