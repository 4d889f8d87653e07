"""
SQLModel database engine and session management.

This module provides SQLAlchemy/SQLModel database initialization, connection pooling,
and async session management for PostgreSQL.
"""

from typing import Optional, AsyncGenerator, Dict, Any
from contextlib import asynccontextmanager
import structlog
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.sql import text

from resource_matching.core.config import Settings

logger = structlog.get_logger(__name__)


class SQLModelDatabaseManager:
    """
    SQLModel database manager with async session support.

    Provides SQLAlchemy engine and session management for the application.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Optional[AsyncEngine] = None
        self.async_session_factory: Optional[async_sessionmaker] = None
        self._initialized = False

    def _build_database_url(self) -> str:
        """
        Build SQLAlchemy async database URL from settings.

        Converts PostgreSQL URL to SQLAlchemy async format.
        """
        url = str(self.settings.get_postgres_url())
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    async def initialize(self) -> None:
        """
        Initialize SQLModel engine and session factory and verify connectivity.
        """
        if self._initialized:
            logger.warning("SQLModel database manager already initialized")
            return

        try:
            database_url = self._build_database_url()

            self.engine = create_async_engine(
                database_url,
                pool_size=self.settings.DATABASE_POOL_SIZE,
                max_overflow=self.settings.DATABASE_MAX_OVERFLOW,
                pool_timeout=self.settings.DATABASE_POOL_TIMEOUT,
                pool_recycle=self.settings.DATABASE_POOL_RECYCLE,
                pool_pre_ping=True,
                echo=False,
                connect_args={
                    "server_settings": {
                        "application_name": "resource-matching",
                    }
                }
            )

            self.async_session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,  # Keep objects usable after commit
                autoflush=True,
            )

            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            self._initialized = True
            logger.info(
                "SQLModel database manager initialized successfully",
                database_url=database_url.split("@")[0].rsplit(":", 1)[0] + ":***@"
            )

        except Exception as e:
            logger.error("Failed to initialize SQLModel database manager", error=str(e))
            raise

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get async database session with automatic commit and cleanup.

        The session commits when the block exits normally and rolls back when it
        exits with an error or is cancelled.

        Usage:
            async with db_manager.get_session() as session:
                result = await session.execute(select(EmployeeTable))
        """
        if not self.async_session_factory:
            raise RuntimeError("Database manager not initialized")

        session = self.async_session_factory()
        try:
            yield session
            await session.commit()
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform health check on SQLModel database connection.

        Returns health status information for monitoring.
        """
        if not self.engine:
            return {
                "status": "unhealthy",
                "error": "Database manager not initialized"
            }

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1 as health_check"))

            pool = self.engine.pool
            return {
                "status": "healthy",
                "pool_size": pool.size(),
                "checked_in": pool.checkedin(),
                "checked_out": pool.checkedout(),
                "overflow": pool.overflow()
            }

        except Exception as e:
            logger.error("SQLModel database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }

    async def shutdown(self) -> None:
        """
        Shutdown SQLModel database manager and close connections.
        """
        if self.engine:
            try:
                await self.engine.dispose()
                logger.info("SQLModel database manager shut down successfully")
            except Exception as e:
                logger.error("Error during SQLModel database shutdown", error=str(e))
            finally:
                self.engine = None
                self.async_session_factory = None
                self._initialized = False


# Global SQLModel database manager instance
_sqlmodel_db_manager: Optional[SQLModelDatabaseManager] = None


def get_sqlmodel_db_manager(settings: Optional[Settings] = None) -> SQLModelDatabaseManager:
    """
    Get global SQLModel database manager instance.

    Creates the instance on first call with provided settings.
    Subsequent calls return the existing instance.
    """
    global _sqlmodel_db_manager

    if _sqlmodel_db_manager is None:
        if settings is None:
            from resource_matching.core.config import get_settings
            settings = get_settings()
        _sqlmodel_db_manager = SQLModelDatabaseManager(settings)

    return _sqlmodel_db_manager


async def init_sqlmodel_database(settings: Optional[Settings] = None) -> SQLModelDatabaseManager:
    """
    Initialize global SQLModel database manager.

    Call this during application startup to set up the database connection.
    """
    db_manager = get_sqlmodel_db_manager(settings)
    await db_manager.initialize()
    return db_manager


async def shutdown_sqlmodel_database() -> None:
    """
    Shutdown global SQLModel database manager.

    Call this during application shutdown to clean up connections.
    """
    global _sqlmodel_db_manager
    if _sqlmodel_db_manager:
        await _sqlmodel_db_manager.shutdown()
        _sqlmodel_db_manager = None
