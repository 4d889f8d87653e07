"""Repository implementations using PostgreSQL and domain mappers."""

from .postgres_assignment_repository import PostgresAssignmentRepository
from .postgres_catalog_repository import PostgresCatalogRepository
from .postgres_match_result_repository import PostgresMatchResultRepository
from .postgres_skill_repository import PostgresEmployeeSkillRepository, PostgresSkillRepository

__all__ = [
    "PostgresAssignmentRepository",
    "PostgresCatalogRepository",
    "PostgresEmployeeSkillRepository",
    "PostgresMatchResultRepository",
    "PostgresSkillRepository",
]
