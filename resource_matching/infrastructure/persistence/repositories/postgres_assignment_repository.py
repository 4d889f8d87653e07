"""PostgreSQL implementation of IAssignmentRepository using AssignmentMapper."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import Select, or_
from sqlmodel import select

from resource_matching.database.error_handling import handle_database_errors
from resource_matching.database.sqlmodel_engine import (
    SQLModelDatabaseManager,
    get_sqlmodel_db_manager,
)
from resource_matching.domain.entities.assignment import Assignment
from resource_matching.domain.exceptions import AssignmentNotFoundError
from resource_matching.domain.repositories.assignment_repository import IAssignmentRepository
from resource_matching.domain.value_objects import (
    AssignmentId,
    DateInterval,
    EmployeeId,
    TenantId,
)
from resource_matching.infrastructure.persistence.mappers.assignment_mapper import AssignmentMapper
from resource_matching.infrastructure.persistence.models.assignment_table import AssignmentTable


def active_overlapping_statement(
    tenant_id: TenantId,
    employee_ids: List[int],
    interval: DateInterval,
) -> Select:
    """Active assignments whose ``[start, end)`` intersects ``interval``; NULL ends are open."""
    stmt = select(AssignmentTable).where(
        AssignmentTable.tenant_id == tenant_id.value,
        AssignmentTable.employee_id.in_(employee_ids),
        AssignmentTable.is_active == True,  # noqa: E712
        or_(
            AssignmentTable.end_date.is_(None),
            AssignmentTable.end_date > interval.start,
        ),
    )
    if interval.end is not None:
        stmt = stmt.where(AssignmentTable.start_date < interval.end)
    return stmt.order_by(AssignmentTable.employee_id, AssignmentTable.start_date, AssignmentTable.id)


class PostgresAssignmentRepository(IAssignmentRepository):
    """PostgreSQL adapter implementation of IAssignmentRepository."""

    def __init__(self, db_manager: Optional[SQLModelDatabaseManager] = None):
        self._db_manager = db_manager

    def _get_db_manager(self) -> SQLModelDatabaseManager:
        """Get database manager (lazy initialization)."""
        if self._db_manager is None:
            self._db_manager = get_sqlmodel_db_manager()
        return self._db_manager

    @handle_database_errors(context={"repository": "assignment", "operation": "list_active_overlapping"})
    async def list_active_overlapping(
        self,
        tenant_id: TenantId,
        employee_ids: Iterable[EmployeeId],
        interval: DateInterval
    ) -> Dict[int, List[Assignment]]:
        ids = sorted({employee_id.value for employee_id in employee_ids})
        if not ids:
            return {}

        async with self._get_db_manager().get_session() as session:
            result = await session.execute(active_overlapping_statement(tenant_id, ids, interval))
            rows = result.scalars().all()

        by_employee: Dict[int, List[Assignment]] = defaultdict(list)
        for row in rows:
            by_employee[row.employee_id].append(AssignmentMapper.to_domain(row))
        return dict(by_employee)

    @handle_database_errors(context={"repository": "assignment", "operation": "list_for_employee"})
    async def list_for_employee(
        self,
        tenant_id: TenantId,
        employee_id: EmployeeId,
        include_inactive: bool = False
    ) -> List[Assignment]:
        async with self._get_db_manager().get_session() as session:
            stmt = select(AssignmentTable).where(
                AssignmentTable.tenant_id == tenant_id.value,
                AssignmentTable.employee_id == employee_id.value,
            )
            if not include_inactive:
                stmt = stmt.where(AssignmentTable.is_active == True)  # noqa: E712

            stmt = stmt.order_by(AssignmentTable.start_date, AssignmentTable.id)
            result = await session.execute(stmt)
            rows = result.scalars().all()

        return [AssignmentMapper.to_domain(row) for row in rows]

    @handle_database_errors(context={"repository": "assignment", "operation": "get_by_id"})
    async def get_by_id(
        self,
        assignment_id: AssignmentId,
        tenant_id: TenantId
    ) -> Optional[Assignment]:
        async with self._get_db_manager().get_session() as session:
            stmt = select(AssignmentTable).where(
                AssignmentTable.id == assignment_id.value,
                AssignmentTable.tenant_id == tenant_id.value,
            )
            result = await session.execute(stmt)
            row = result.scalars().first()

        return AssignmentMapper.to_domain(row) if row else None

    @handle_database_errors(context={"repository": "assignment", "operation": "save"})
    async def save(self, assignment: Assignment) -> Assignment:
        async with self._get_db_manager().get_session() as session:
            if assignment.id is None:
                row = AssignmentMapper.to_table(assignment)
                session.add(row)
                await session.flush()
                await session.refresh(row)
                return AssignmentMapper.to_domain(row)

            stmt = select(AssignmentTable).where(
                AssignmentTable.id == assignment.id.value,
                AssignmentTable.tenant_id == assignment.tenant_id.value,
            )
            result = await session.execute(stmt)
            existing = result.scalars().first()
            if existing is None:
                raise AssignmentNotFoundError(
                    "Assignment not found",
                    details={"assignment_id": assignment.id.value},
                )

            AssignmentMapper.update_table_from_domain(existing, assignment)
            await session.flush()
            return AssignmentMapper.to_domain(existing)


__all__ = ["PostgresAssignmentRepository", "active_overlapping_statement"]
