"""Application service for the assignment ledger."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

import structlog

from resource_matching.domain.entities.assignment import Assignment
from resource_matching.domain.exceptions import (
    AssignmentNotFoundError,
    EmployeeNotFoundError,
    RoleNotFoundError,
    ValidationError,
)
from resource_matching.domain.value_objects import (
    AllocationPercentage,
    AssignmentId,
    EmployeeId,
    RoleId,
    TenantId,
)

if TYPE_CHECKING:
    from resource_matching.application.dependencies.assignment_dependencies import (
        AssignmentDependencies,
    )


class AssignmentApplicationService:
    """Books, rebooks and releases employee capacity.

    Over-allocation is a soft invariant: writes that push an employee above
    100% are accepted and logged, and the matcher reports them as risks.
    """

    def __init__(self, dependencies: AssignmentDependencies) -> None:
        self._deps = dependencies
        self._logger = structlog.get_logger(__name__)

    async def create_assignment(
        self,
        tenant_id: str,
        employee_id: int,
        allocation_percentage: int,
        start_date: date,
        end_date: Optional[date] = None,
        role_id: Optional[str] = None,
    ) -> Assignment:
        """Create an assignment for an employee of the tenant.

        Raises:
            EmployeeNotFoundError: If the employee is not visible to the tenant
            RoleNotFoundError: If a role is given and is not visible to the tenant
            ValidationError: If the allocation or the dates are invalid
        """
        tenant = TenantId(tenant_id)
        try:
            employee_vo = EmployeeId(employee_id)
            role_vo = RoleId(role_id) if role_id is not None else None
            assignment = Assignment(
                employee_id=employee_vo,
                tenant_id=tenant,
                allocation_percentage=AllocationPercentage(allocation_percentage),
                start_date=start_date,
                end_date=end_date,
                role_id=role_vo,
            )
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc

        await self._require_employee(employee_vo, tenant)
        if role_vo is not None:
            loaded = await self._deps.catalog_repository.get_role_with_project(role_vo, tenant)
            if loaded is None:
                raise RoleNotFoundError(f"Project role {role_id} not found")

        await self._warn_if_over_allocated(assignment)
        saved = await self._deps.assignment_repository.save(assignment)

        self._logger.info(
            "Assignment created",
            assignment_id=saved.id.value if saved.id else None,
            employee_id=employee_vo.value,
            tenant_id=str(tenant),
            allocation=saved.allocation,
        )
        return saved

    async def update_assignment(
        self,
        assignment_id: int,
        tenant_id: str,
        allocation_percentage: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        clear_end_date: bool = False,
        is_active: Optional[bool] = None,
    ) -> Assignment:
        """Change allocation, dates or active flag of an existing assignment.

        Raises:
            AssignmentNotFoundError: If the assignment is not visible to the tenant
            ValidationError: If the resulting assignment is invalid
        """
        tenant = TenantId(tenant_id)
        assignment = await self._require_assignment(assignment_id, tenant)

        try:
            allocation = (
                AllocationPercentage(allocation_percentage)
                if allocation_percentage is not None
                else assignment.allocation_percentage
            )
            new_end = None if clear_end_date else (end_date or assignment.end_date)
            updated = Assignment(
                id=assignment.id,
                employee_id=assignment.employee_id,
                tenant_id=assignment.tenant_id,
                role_id=assignment.role_id,
                allocation_percentage=allocation,
                start_date=start_date or assignment.start_date,
                end_date=new_end,
                is_active=assignment.is_active if is_active is None else is_active,
                created_at=assignment.created_at,
                updated_at=datetime.utcnow(),
            )
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc

        if updated.is_active:
            await self._warn_if_over_allocated(updated)
        saved = await self._deps.assignment_repository.save(updated)

        self._logger.info(
            "Assignment updated",
            assignment_id=assignment.id.value if assignment.id else None,
            tenant_id=str(tenant),
            allocation=saved.allocation,
            is_active=saved.is_active,
        )
        return saved

    async def deactivate_assignment(self, assignment_id: int, tenant_id: str) -> Assignment:
        """Soft delete an assignment; it no longer books capacity."""
        tenant = TenantId(tenant_id)
        assignment = await self._require_assignment(assignment_id, tenant)
        assignment.deactivate()
        saved = await self._deps.assignment_repository.save(assignment)

        self._logger.info(
            "Assignment deactivated",
            assignment_id=assignment_id,
            tenant_id=str(tenant),
        )
        return saved

    async def list_assignments(
        self,
        employee_id: int,
        tenant_id: str,
        include_inactive: bool = False,
    ) -> List[Assignment]:
        tenant = TenantId(tenant_id)
        try:
            employee_vo = EmployeeId(employee_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc

        await self._require_employee(employee_vo, tenant)
        return await self._deps.assignment_repository.list_for_employee(
            tenant, employee_vo, include_inactive=include_inactive
        )

    async def _require_employee(self, employee_id: EmployeeId, tenant: TenantId) -> None:
        employee = await self._deps.catalog_repository.get_employee(employee_id, tenant)
        if employee is None:
            raise EmployeeNotFoundError(f"Employee {employee_id} not found")

    async def _require_assignment(self, assignment_id: int, tenant: TenantId) -> Assignment:
        try:
            assignment_vo = AssignmentId(assignment_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc

        assignment = await self._deps.assignment_repository.get_by_id(assignment_vo, tenant)
        if assignment is None:
            raise AssignmentNotFoundError(f"Assignment {assignment_id} not found")
        return assignment

    async def _warn_if_over_allocated(self, assignment: Assignment) -> None:
        existing = await self._deps.assignment_repository.list_active_overlapping(
            assignment.tenant_id, [assignment.employee_id], assignment.interval
        )
        others = [
            booked for booked in existing.get(assignment.employee_id.value, [])
            if assignment.id is None or booked.id != assignment.id
        ]
        calculator = self._deps.availability_calculator
        if calculator.is_over_allocated([*others, assignment], assignment.interval):
            self._logger.warning(
                "Employee over-allocated",
                employee_id=assignment.employee_id.value,
                tenant_id=str(assignment.tenant_id),
                booked=calculator.booked(others, assignment.interval),
                requested=assignment.allocation,
            )


__all__ = ["AssignmentApplicationService"]
