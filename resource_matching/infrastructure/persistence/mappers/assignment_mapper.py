"""Mapper between Assignment entities and AssignmentTable rows."""

from __future__ import annotations

from resource_matching.domain.entities.assignment import Assignment
from resource_matching.domain.value_objects import (
    AllocationPercentage,
    AssignmentId,
    EmployeeId,
    RoleId,
    TenantId,
)
from resource_matching.infrastructure.persistence.models.assignment_table import AssignmentTable


class AssignmentMapper:
    """Maps between Assignment domain entities and AssignmentTable persistence models."""

    @staticmethod
    def to_domain(table: AssignmentTable) -> Assignment:
        return Assignment(
            id=AssignmentId(table.id) if table.id is not None else None,
            employee_id=EmployeeId(table.employee_id),
            tenant_id=TenantId(table.tenant_id),
            role_id=RoleId(table.role_id) if table.role_id else None,
            allocation_percentage=AllocationPercentage(table.allocation_percentage),
            start_date=table.start_date,
            end_date=table.end_date,
            is_active=bool(table.is_active),
            created_at=table.created_at,
            updated_at=table.updated_at,
        )

    @staticmethod
    def to_table(entity: Assignment) -> AssignmentTable:
        return AssignmentTable(
            id=entity.id.value if entity.id else None,
            tenant_id=entity.tenant_id.value,
            employee_id=entity.employee_id.value,
            role_id=entity.role_id.value if entity.role_id else None,
            allocation_percentage=entity.allocation,
            start_date=entity.start_date,
            end_date=entity.end_date,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def update_table_from_domain(table: AssignmentTable, entity: Assignment) -> AssignmentTable:
        """Copy mutable ledger fields; identity and ownership never change."""
        table.role_id = entity.role_id.value if entity.role_id else None
        table.allocation_percentage = entity.allocation
        table.start_date = entity.start_date
        table.end_date = entity.end_date
        table.is_active = entity.is_active
        table.updated_at = entity.updated_at
        return table


__all__ = ["AssignmentMapper"]
