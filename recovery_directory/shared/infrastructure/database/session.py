# 📄 File: recovery_directory/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Gives every request its own conversation with the database, and makes sure
# that either all of a request's changes are saved or none of them are.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session factory plus the FastAPI dependency get_db_session.
# One session per request: commit on success, rollback on any exception. This is
# what makes claim + facility ownership writes a single transaction.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - shared.infrastructure.database.connection (engine)
# - shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - All repository implementations via Depends(get_db_session)
# - main.py lifespan (initialize_sessions)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from recovery_directory.shared.core.exceptions import DatabaseError, RecoveryDirectoryException
from recovery_directory.shared.infrastructure.database.connection import get_database_engine

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    def __init__(self):
        self._session_factory: Optional[async_sessionmaker] = None

    def initialize(self) -> None:
        """Bind the session factory to the initialized engine."""
        self._session_factory = async_sessionmaker(
            get_database_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )
        logger.info("Database session factory initialized successfully")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session that commits on success and rolls back on failure.

        Domain exceptions pass through untouched so the API layer can map them;
        raw SQLAlchemy errors are wrapped in DatabaseError.
        """
        if self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        session: AsyncSession = self._session_factory()
        try:
            yield session
            await session.commit()
        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise DatabaseError(f"Database operation failed: {e}") from e
        except RecoveryDirectoryException:
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            logger.exception("Unexpected error occurred, transaction rolled back")
            raise
        finally:
            await session.close()

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None


# Global session manager instance
session_manager = DatabaseSessionManager()


def initialize_sessions() -> None:
    """Initialize the global database session manager."""
    session_manager.initialize()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a request-scoped database session.

    Usage:
        async def handler(db: AsyncSession = Depends(get_db_session)): ...
    """
    async with session_manager.get_session() as session:
        yield session

