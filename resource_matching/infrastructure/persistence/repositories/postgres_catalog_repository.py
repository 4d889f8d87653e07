"""PostgreSQL implementation of ICatalogRepository."""

from __future__ import annotations

import math
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

import structlog
from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from resource_matching.database.error_handling import handle_database_errors
from resource_matching.database.sqlmodel_engine import (
    SQLModelDatabaseManager,
    get_sqlmodel_db_manager,
)
from resource_matching.domain.entities.employee import DAYS_PER_YEAR, Employee
from resource_matching.domain.entities.matching import CandidateFilters
from resource_matching.domain.entities.project import RoleWithProject
from resource_matching.domain.repositories.catalog_repository import ICatalogRepository
from resource_matching.domain.value_objects import EmployeeId, RoleId, TenantId
from resource_matching.infrastructure.persistence.mappers.catalog_mapper import (
    EmployeeMapper,
    ProjectMapper,
)
from resource_matching.infrastructure.persistence.models.employee_table import (
    EmployeeSoftSkillTable,
    EmployeeTable,
)
from resource_matching.infrastructure.persistence.models.project_table import (
    ProjectRoleTable,
    ProjectTable,
)
from resource_matching.infrastructure.persistence.models.skill_table import EmployeeSkillTable

logger = structlog.get_logger(__name__)


def hire_date_cutoff(as_of: date, min_years: int) -> date:
    """Latest hire date that still yields ``min_years`` whole years of tenure on ``as_of``."""
    return as_of - timedelta(days=math.ceil(min_years * DAYS_PER_YEAR))


def role_with_project_statement(role_id: RoleId, tenant_id: TenantId) -> Select:
    return (
        select(ProjectRoleTable, ProjectTable)
        .join(ProjectTable, ProjectTable.id == ProjectRoleTable.project_id)
        .where(
            ProjectRoleTable.id == role_id.value,
            ProjectRoleTable.tenant_id == tenant_id.value,
            ProjectTable.tenant_id == tenant_id.value,
        )
    )


def candidate_employees_statement(
    tenant_id: TenantId,
    filters: CandidateFilters,
    as_of: date,
) -> Select:
    stmt = select(EmployeeTable).where(
        EmployeeTable.tenant_id == tenant_id.value,
        EmployeeTable.is_active == True,  # noqa: E712
    )

    if filters.department_id is not None:
        stmt = stmt.where(EmployeeTable.department_id == filters.department_id)

    if filters.min_experience_years:
        # Unknown hire dates mean zero years, which never meets a positive minimum
        stmt = stmt.where(
            EmployeeTable.hire_date.is_not(None),
            EmployeeTable.hire_date <= hire_date_cutoff(as_of, filters.min_experience_years),
        )

    return stmt.order_by(EmployeeTable.id)


class PostgresCatalogRepository(ICatalogRepository):
    """PostgreSQL adapter implementation of ICatalogRepository."""

    def __init__(self, db_manager: Optional[SQLModelDatabaseManager] = None):
        self._db_manager = db_manager

    def _get_db_manager(self) -> SQLModelDatabaseManager:
        """Get database manager (lazy initialization)."""
        if self._db_manager is None:
            self._db_manager = get_sqlmodel_db_manager()
        return self._db_manager

    @handle_database_errors(context={"repository": "catalog", "operation": "get_role_with_project"})
    async def get_role_with_project(
        self,
        role_id: RoleId,
        tenant_id: TenantId
    ) -> Optional[RoleWithProject]:
        async with self._get_db_manager().get_session() as session:
            result = await session.execute(role_with_project_statement(role_id, tenant_id))
            row = result.first()

        if row is None:
            return None

        role_row, project_row = row
        return RoleWithProject(
            role=ProjectMapper.role_to_domain(role_row),
            project=ProjectMapper.to_domain(project_row),
        )

    @handle_database_errors(context={"repository": "catalog", "operation": "list_candidate_employees"})
    async def list_candidate_employees(
        self,
        tenant_id: TenantId,
        filters: CandidateFilters,
        as_of: date
    ) -> List[Employee]:
        async with self._get_db_manager().get_session() as session:
            result = await session.execute(candidate_employees_statement(tenant_id, filters, as_of))
            rows = result.scalars().all()
            employees = await self._hydrate(session, tenant_id, rows)

        logger.debug(
            "Loaded candidate employees",
            tenant_id=str(tenant_id),
            department_id=filters.department_id,
            min_experience_years=filters.min_experience_years,
            count=len(employees),
        )
        return employees

    @handle_database_errors(context={"repository": "catalog", "operation": "get_employee"})
    async def get_employee(
        self,
        employee_id: EmployeeId,
        tenant_id: TenantId
    ) -> Optional[Employee]:
        employees = await self._load_employees([employee_id.value], tenant_id)
        return employees[0] if employees else None

    async def _load_employees(self, ids: List[int], tenant_id: TenantId) -> List[Employee]:
        async with self._get_db_manager().get_session() as session:
            stmt = (
                select(EmployeeTable)
                .where(
                    EmployeeTable.tenant_id == tenant_id.value,
                    EmployeeTable.id.in_(ids),
                )
                .order_by(EmployeeTable.id)
            )
            result = await session.execute(stmt)
            return await self._hydrate(session, tenant_id, result.scalars().all())

    async def _hydrate(
        self,
        session: AsyncSession,
        tenant_id: TenantId,
        rows: Sequence[EmployeeTable],
    ) -> List[Employee]:
        """Attach skill and soft-skill rows with two batched queries."""
        if not rows:
            return []

        ids = [row.id for row in rows]

        skills_result = await session.execute(
            select(EmployeeSkillTable)
            .where(
                EmployeeSkillTable.tenant_id == tenant_id.value,
                EmployeeSkillTable.employee_id.in_(ids),
            )
            .order_by(EmployeeSkillTable.employee_id, EmployeeSkillTable.skill_id)
        )
        skills_by_employee: Dict[int, List[EmployeeSkillTable]] = defaultdict(list)
        for skill_row in skills_result.scalars().all():
            skills_by_employee[skill_row.employee_id].append(skill_row)

        soft_result = await session.execute(
            select(EmployeeSoftSkillTable.employee_id, EmployeeSoftSkillTable.soft_skill_id)
            .where(
                EmployeeSoftSkillTable.tenant_id == tenant_id.value,
                EmployeeSoftSkillTable.employee_id.in_(ids),
            )
        )
        soft_by_employee: Dict[int, List[int]] = defaultdict(list)
        for employee_id, soft_skill_id in soft_result.all():
            soft_by_employee[employee_id].append(soft_skill_id)

        return [
            EmployeeMapper.to_domain(
                row,
                skills=skills_by_employee.get(row.id, []),
                soft_skill_ids=soft_by_employee.get(row.id, []),
            )
            for row in rows
        ]


__all__ = [
    "PostgresCatalogRepository",
    "candidate_employees_statement",
    "hire_date_cutoff",
    "role_with_project_statement",
]
