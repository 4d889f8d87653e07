"""Domain repository contract for the assignment ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from resource_matching.domain.entities.assignment import Assignment
from resource_matching.domain.value_objects import (
    AssignmentId,
    DateInterval,
    EmployeeId,
    TenantId,
)


class IAssignmentRepository(ABC):
    """Append/update store of employee allocations."""

    @abstractmethod
    async def list_active_overlapping(
        self,
        tenant_id: TenantId,
        employee_ids: Iterable[EmployeeId],
        interval: DateInterval
    ) -> Dict[int, List[Assignment]]:
        """Active assignments overlapping ``interval``, keyed by employee id."""
        raise NotImplementedError

    @abstractmethod
    async def list_for_employee(
        self,
        tenant_id: TenantId,
        employee_id: EmployeeId,
        include_inactive: bool = False
    ) -> List[Assignment]:
        """List an employee's assignments ordered by start date."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(
        self,
        assignment_id: AssignmentId,
        tenant_id: TenantId
    ) -> Optional[Assignment]:
        """Load an assignment within tenant scope."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, assignment: Assignment) -> Assignment:
        """Insert a new assignment or update an existing one; returns it with its id."""
        raise NotImplementedError


__all__ = ["IAssignmentRepository"]
