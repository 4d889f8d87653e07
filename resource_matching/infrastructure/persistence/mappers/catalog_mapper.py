"""
Mappers between catalog persistence models and domain entities.

The catalog is read-only for the matcher, so only the employee-skill link has a
domain-to-table direction.
"""

from __future__ import annotations

from typing import Iterable, Optional

from resource_matching.domain.entities.employee import Employee, EmployeeSkill, Seniority
from resource_matching.domain.entities.project import (
    Project,
    ProjectRole,
    RoleStatus,
    WorkMode,
)
from resource_matching.domain.entities.skill import Skill, SkillSource
from resource_matching.domain.value_objects import (
    AllocationPercentage,
    EmployeeId,
    ProjectId,
    RoleId,
    SkillId,
    TenantId,
)
from resource_matching.infrastructure.persistence.models.employee_table import EmployeeTable
from resource_matching.infrastructure.persistence.models.project_table import (
    ProjectRoleTable,
    ProjectTable,
)
from resource_matching.infrastructure.persistence.models.skill_table import (
    EmployeeSkillTable,
    SkillTable,
)


class SkillMapper:
    """Maps SkillTable rows to Skill entities."""

    @staticmethod
    def to_domain(table: SkillTable) -> Skill:
        return Skill(
            id=SkillId(table.id),
            name=table.name,
            known_name=table.known_name,
            synonyms=list(table.synonyms or []),
        )


class EmployeeSkillMapper:
    """Maps between EmployeeSkill entities and EmployeeSkillTable rows."""

    @staticmethod
    def to_domain(table: EmployeeSkillTable) -> EmployeeSkill:
        return EmployeeSkill(
            employee_id=EmployeeId(table.employee_id),
            skill_id=SkillId(table.skill_id),
            proficiency=float(table.proficiency or 0.0),
            is_certified=bool(table.is_certified),
            source=SkillSource(table.source),
        )

    @staticmethod
    def to_table(entity: EmployeeSkill, tenant_id: TenantId) -> EmployeeSkillTable:
        return EmployeeSkillTable(
            tenant_id=tenant_id.value,
            employee_id=entity.employee_id.value,
            skill_id=entity.skill_id.value,
            proficiency=entity.proficiency,
            is_certified=entity.is_certified,
            source=entity.source.value,
        )


class EmployeeMapper:
    """Assembles Employee entities from the employee row and its skill rows."""

    @staticmethod
    def to_domain(
        table: EmployeeTable,
        skills: Iterable[EmployeeSkillTable] = (),
        soft_skill_ids: Iterable[int] = (),
    ) -> Employee:
        return Employee(
            id=EmployeeId(table.id),
            tenant_id=TenantId(table.tenant_id),
            hire_date=table.hire_date,
            department_id=table.department_id,
            seniority=Seniority.parse(table.seniority),
            is_active=bool(table.is_active),
            skills=[EmployeeSkillMapper.to_domain(row) for row in skills],
            soft_skill_ids=frozenset(soft_skill_ids),
        )


class ProjectMapper:
    """Maps project and role rows to domain entities."""

    @staticmethod
    def to_domain(table: ProjectTable) -> Project:
        return Project(
            id=ProjectId(table.id),
            tenant_id=TenantId(table.tenant_id),
            start_date=table.start_date,
            end_date=table.end_date,
            status=table.status,
        )

    @staticmethod
    def role_to_domain(table: ProjectRoleTable) -> ProjectRole:
        return ProjectRole(
            id=RoleId(table.id),
            project_id=ProjectId(table.project_id),
            tenant_id=TenantId(table.tenant_id),
            title=table.title,
            allocation_percentage=AllocationPercentage(table.allocation_percentage),
            seniority=Seniority.parse(table.seniority),
            required_skill_ids=frozenset(table.required_skill_ids or []),
            preferred_soft_skill_ids=frozenset(table.preferred_soft_skill_ids or []),
            required_certifications=list(table.required_certifications or []),
            required_languages=list(table.required_languages or []),
            min_experience_years=table.min_experience_years,
            preferred_experience_years=table.preferred_experience_years,
            work_mode=ProjectMapper._work_mode(table.work_mode),
            location=table.location,
            is_critical=bool(table.is_critical),
            is_urgent=bool(table.is_urgent),
            status=RoleStatus(table.status),
        )

    @staticmethod
    def _work_mode(value: Optional[str]) -> Optional[WorkMode]:
        if value is None or not value.strip():
            return None
        return WorkMode(value.strip().upper())


__all__ = [
    "SkillMapper",
    "EmployeeSkillMapper",
    "EmployeeMapper",
    "ProjectMapper",
]
