"""Database manager provider for hexagonal adapters."""

from __future__ import annotations

import asyncio
from typing import Optional

from resource_matching.database.sqlmodel_engine import (
    SQLModelDatabaseManager,
    init_sqlmodel_database,
    shutdown_sqlmodel_database,
)

_database_manager: Optional[SQLModelDatabaseManager] = None
_lock = asyncio.Lock()


async def get_database_manager() -> SQLModelDatabaseManager:
    """Return the initialized SQLModel database manager."""
    global _database_manager

    if _database_manager is not None:
        return _database_manager

    async with _lock:
        if _database_manager is not None:
            return _database_manager

        _database_manager = await init_sqlmodel_database()
        return _database_manager


async def reset_database_manager() -> None:
    global _database_manager
    async with _lock:
        if _database_manager is not None:
            await shutdown_sqlmodel_database()
        _database_manager = None


__all__ = ["get_database_manager", "reset_database_manager"]
