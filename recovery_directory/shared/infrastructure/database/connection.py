# 📄 File: recovery_directory/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to the PostgreSQL database that stores facilities,
# claims, users, taxonomies and featured locations.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine lifecycle with connection pooling, a retrying health
# check, and the declarative Base shared by every module's ORM models.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine, DeclarativeBase)
# - asyncpg (PostgreSQL async driver)
# - recovery_directory.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - shared.infrastructure.database.session (session factory)
# - All module ORM models (Base)
# - main.py lifespan, api.v1.health

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from recovery_directory.shared.config.settings import get_settings

logger = logging.getLogger(__name__)

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class DatabaseConnectionManager:
    """
    Manages PostgreSQL database connections with connection pooling
    and a retrying health check.
    """

    def __init__(self):
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")
        self._retry_attempts = 3
        self._retry_delay = 1.0

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build SQLAlchemy engine parameters from settings."""
        settings = get_settings()
        params: Dict[str, Any] = {
            "url": settings.database_url,
            "echo": settings.DEBUG and settings.is_development,
            "pool_pre_ping": True,
        }
        if settings.database_url.startswith("postgresql+asyncpg"):
            params.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=settings.DB_POOL_RECYCLE,
                connect_args={
                    "server_settings": {"application_name": "recovery_directory"},
                    "command_timeout": 60,
                },
            )
        return params

    async def initialize(self) -> None:
        """Create the engine and verify connectivity."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(**self._build_connection_params())

        status = await self.health_check()
        if status["status"] != "healthy":
            await self._engine.dispose()
            self._engine = None
            raise ConnectionError(status.get("error", "Database unreachable"))

        logger.info("Database connection pool initialized successfully")

    async def health_check(self) -> dict:
        """Run SELECT 1 with exponential backoff between attempts."""
        if self._engine is None:
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        for attempt in range(self._retry_attempts):
            try:
                async with self._engine.connect() as conn:
                    await conn.execute(self._health_check_query)
                return {
                    "status": "healthy",
                    "timestamp": datetime.now(timezone.utc).isoformat()
                }
            except Exception as e:
                logger.warning(
                    f"Database health check failed (attempt {attempt + 1}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts - 1:
                    await asyncio.sleep(self._retry_delay * (2 ** attempt))

        logger.error("Database health check failed after all retry attempts")
        return {
            "status": "unhealthy",
            "error": "Database health check failed after all retry attempts",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    async def close(self) -> None:
        """Dispose the engine and all pooled connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return
        await self._engine.dispose()
        self._engine = None
        logger.info("Database connection pool closed successfully")

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None


# Global database connection manager instance
db_manager = DatabaseConnectionManager()


async def init_database() -> None:
    """Initialize the global database connection manager."""
    try:
        await db_manager.initialize()
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}", exc_info=True)
        raise


async def close_database() -> None:
    await db_manager.close()


def get_database_engine() -> AsyncEngine:
    """
    Get the database engine instance.

    Raises:
        RuntimeError: If database is not initialized
    """
    if not db_manager.is_initialized:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return db_manager.engine


async def database_health_check() -> dict:
    return await db_manager.health_check()
