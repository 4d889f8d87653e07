"""
SQLModel transaction management.

Provides explicit transaction boundaries for repository operations that must
be atomic across several statements (the result-set replacement of a matching
run). A transaction commits when its block exits normally and rolls back on
any error or cancellation.
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import text

from resource_matching.database.sqlmodel_engine import SQLModelDatabaseManager, get_sqlmodel_db_manager

logger = structlog.get_logger(__name__)

_ISOLATION_LEVELS = {"READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE"}


class SQLModelTransactionManager:
    """
    SQLAlchemy-based transaction manager for multi-tenant applications.
    """

    def __init__(self, db_manager: Optional[SQLModelDatabaseManager] = None):
        self._db_manager = db_manager
        self.transaction_stats = {
            "total_transactions": 0,
            "successful_commits": 0,
            "rollbacks": 0,
        }

    @property
    def db_manager(self) -> SQLModelDatabaseManager:
        return self._db_manager or get_sqlmodel_db_manager()

    def _generate_transaction_id(self) -> str:
        """Generate unique transaction ID."""
        return f"txn_{uuid.uuid4().hex[:12]}"

    @asynccontextmanager
    async def transaction(
        self,
        isolation_level: Optional[str] = None,
    ) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for transaction handling.

        Args:
            isolation_level: Optional isolation level override

        Usage:
            async with transaction_manager.transaction() as session:
                await session.execute(delete(MatchResultTable).where(...))
                session.add_all(rows)
                # Committed on success, rolled back on error or cancellation
        """
        factory = self.db_manager.async_session_factory
        if factory is None:
            raise RuntimeError("Database manager not initialized")

        transaction_id = self._generate_transaction_id()
        started = time.perf_counter()
        session = factory()
        self.transaction_stats["total_transactions"] += 1

        try:
            if isolation_level:
                level = isolation_level.upper()
                if level not in _ISOLATION_LEVELS:
                    raise ValueError(f"Unsupported isolation level: {isolation_level}")
                await session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {level}"))

            yield session

            await session.commit()
            self.transaction_stats["successful_commits"] += 1
            logger.debug(
                "Transaction committed",
                transaction_id=transaction_id,
                duration_ms=int((time.perf_counter() - started) * 1000),
            )
        except BaseException as e:
            await session.rollback()
            self.transaction_stats["rollbacks"] += 1
            logger.info(
                "Transaction rolled back",
                transaction_id=transaction_id,
                error_type=type(e).__name__,
            )
            raise
        finally:
            await session.close()

    def get_transaction_stats(self) -> Dict[str, Any]:
        """Get transaction statistics."""
        return dict(self.transaction_stats)


# Global transaction manager instance
_transaction_manager: Optional[SQLModelTransactionManager] = None


def get_transaction_manager() -> SQLModelTransactionManager:
    """
    Get the global transaction manager instance.

    Returns:
        The global SQLModelTransactionManager instance
    """
    global _transaction_manager

    if _transaction_manager is None:
        _transaction_manager = SQLModelTransactionManager()

    return _transaction_manager


def reset_transaction_manager() -> None:
    """Reset the global transaction manager (useful for tests)."""
    global _transaction_manager
    _transaction_manager = None
