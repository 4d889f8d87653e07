"""PostgreSQL implementations of ISkillRepository and IEmployeeSkillRepository."""

from __future__ import annotations

from typing import Optional, Set

import structlog
from sqlalchemy import Select, exists, func, literal
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from resource_matching.database.error_handling import handle_database_errors
from resource_matching.database.sqlmodel_engine import (
    SQLModelDatabaseManager,
    get_sqlmodel_db_manager,
)
from resource_matching.domain.entities.employee import EmployeeSkill
from resource_matching.domain.entities.skill import Skill
from resource_matching.domain.repositories.skill_repository import (
    IEmployeeSkillRepository,
    ISkillRepository,
)
from resource_matching.domain.value_objects import EmployeeId, SkillId, TenantId
from resource_matching.infrastructure.persistence.mappers.catalog_mapper import (
    EmployeeSkillMapper,
    SkillMapper,
)
from resource_matching.infrastructure.persistence.models.skill_table import (
    EmployeeSkillTable,
    SkillTable,
)

logger = structlog.get_logger(__name__)


def _needle(name: str) -> str:
    return name.strip().lower()


def first_by_name_statement(name: str) -> Select:
    return select(SkillTable).where(func.lower(SkillTable.name) == _needle(name))


def first_by_known_name_statement(name: str) -> Select:
    return select(SkillTable).where(func.lower(SkillTable.known_name) == _needle(name))


def first_name_containing_statement(name: str) -> Select:
    return select(SkillTable).where(
        func.lower(SkillTable.name).contains(_needle(name), autoescape=True)
    )


def first_known_name_containing_statement(name: str) -> Select:
    return select(SkillTable).where(
        func.lower(SkillTable.known_name).contains(_needle(name), autoescape=True)
    )


def first_by_synonym_statement(name: str) -> Select:
    synonyms = func.unnest(SkillTable.synonyms).table_valued("synonym").render_derived()
    return select(SkillTable).where(
        exists(
            select(literal(1))
            .select_from(synonyms)
            .where(func.lower(synonyms.c.synonym) == _needle(name))
        )
    )


class PostgresSkillRepository(ISkillRepository):
    """Lookups against the global master skill table."""

    def __init__(self, db_manager: Optional[SQLModelDatabaseManager] = None):
        self._db_manager = db_manager

    def _get_db_manager(self) -> SQLModelDatabaseManager:
        """Get database manager (lazy initialization)."""
        if self._db_manager is None:
            self._db_manager = get_sqlmodel_db_manager()
        return self._db_manager

    async def _first(self, stmt: Select) -> Optional[Skill]:
        async with self._get_db_manager().get_session() as session:
            result = await session.execute(stmt.order_by(SkillTable.id).limit(1))
            row = result.scalars().first()
        return SkillMapper.to_domain(row) if row else None

    @handle_database_errors(context={"repository": "skill", "operation": "get_by_id"})
    async def get_by_id(self, skill_id: SkillId) -> Optional[Skill]:
        return await self._first(select(SkillTable).where(SkillTable.id == skill_id.value))

    @handle_database_errors(context={"repository": "skill", "operation": "find_first_by_name"})
    async def find_first_by_name(self, name: str) -> Optional[Skill]:
        return await self._first(first_by_name_statement(name))

    @handle_database_errors(context={"repository": "skill", "operation": "find_first_by_known_name"})
    async def find_first_by_known_name(self, name: str) -> Optional[Skill]:
        return await self._first(first_by_known_name_statement(name))

    @handle_database_errors(context={"repository": "skill", "operation": "find_first_name_containing"})
    async def find_first_name_containing(self, name: str) -> Optional[Skill]:
        return await self._first(first_name_containing_statement(name))

    @handle_database_errors(
        context={"repository": "skill", "operation": "find_first_known_name_containing"}
    )
    async def find_first_known_name_containing(self, name: str) -> Optional[Skill]:
        return await self._first(first_known_name_containing_statement(name))

    @handle_database_errors(context={"repository": "skill", "operation": "find_first_by_synonym"})
    async def find_first_by_synonym(self, name: str) -> Optional[Skill]:
        return await self._first(first_by_synonym_statement(name))


class PostgresEmployeeSkillRepository(IEmployeeSkillRepository):
    """Tenant-scoped employee skill links."""

    def __init__(self, db_manager: Optional[SQLModelDatabaseManager] = None):
        self._db_manager = db_manager

    def _get_db_manager(self) -> SQLModelDatabaseManager:
        """Get database manager (lazy initialization)."""
        if self._db_manager is None:
            self._db_manager = get_sqlmodel_db_manager()
        return self._db_manager

    @handle_database_errors(context={"repository": "employee_skill", "operation": "list_skill_ids"})
    async def list_skill_ids(self, tenant_id: TenantId, employee_id: EmployeeId) -> Set[int]:
        async with self._get_db_manager().get_session() as session:
            stmt = select(EmployeeSkillTable.skill_id).where(
                EmployeeSkillTable.tenant_id == tenant_id.value,
                EmployeeSkillTable.employee_id == employee_id.value,
            )
            result = await session.execute(stmt)
            return set(result.scalars().all())

    @handle_database_errors(context={"repository": "employee_skill", "operation": "add"})
    async def add(self, tenant_id: TenantId, employee_skill: EmployeeSkill) -> bool:
        try:
            async with self._get_db_manager().get_session() as session:
                stmt = select(EmployeeSkillTable.id).where(
                    EmployeeSkillTable.tenant_id == tenant_id.value,
                    EmployeeSkillTable.employee_id == employee_skill.employee_id.value,
                    EmployeeSkillTable.skill_id == employee_skill.skill_id.value,
                )
                result = await session.execute(stmt)
                if result.scalars().first() is not None:
                    return False

                session.add(EmployeeSkillMapper.to_table(employee_skill, tenant_id))
                await session.flush()
        except IntegrityError:
            # A concurrent ingest inserted the same pair first
            logger.info(
                "Employee skill already linked",
                employee_id=employee_skill.employee_id.value,
                skill_id=employee_skill.skill_id.value,
            )
            return False

        return True


__all__ = [
    "PostgresSkillRepository",
    "PostgresEmployeeSkillRepository",
    "first_by_name_statement",
    "first_by_known_name_statement",
    "first_name_containing_statement",
    "first_known_name_containing_statement",
    "first_by_synonym_statement",
]
