"""Database initialization utilities."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

# Import models to register with Base.metadata
import plaza.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from plaza.infrastructure.persistence.sqlalchemy.models.base import Base
from plaza_auth.persistence.sqlalchemy import AuthBase
from plaza_config.settings import Settings

logger = logging.getLogger(__name__)

# refresh_tokens lives in its own registry so plaza_auth stays standalone
ALL_METADATA = (Base.metadata, AuthBase.metadata)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the async engine for the configured database URL."""
    return create_async_engine(
        settings.database_url,
        echo=False,
        pool_pre_ping=True,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        for metadata in ALL_METADATA:
            await conn.run_sync(metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop all database tables (USE WITH CAUTION!)."""
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        for metadata in reversed(ALL_METADATA):
            await conn.run_sync(metadata.drop_all)

    logger.info("Database tables dropped successfully")
