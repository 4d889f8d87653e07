"""
Database module for the resource matching service.

Async SQLModel engine management and the mapping of SQLAlchemy failures onto
domain exceptions.
"""

from .error_handling import handle_database_errors, map_sqlalchemy_error
from .sqlmodel_engine import (
    SQLModelDatabaseManager,
    get_sqlmodel_db_manager,
    init_sqlmodel_database,
    shutdown_sqlmodel_database,
)

__all__ = [
    "SQLModelDatabaseManager",
    "get_sqlmodel_db_manager",
    "init_sqlmodel_database",
    "shutdown_sqlmodel_database",
    "handle_database_errors",
    "map_sqlalchemy_error",
]
