"""Allocation ledger entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from resource_matching.domain.value_objects import (
    AllocationPercentage,
    AssignmentId,
    DateInterval,
    EmployeeId,
    RoleId,
    TenantId,
)


@dataclass
class Assignment:
    """Booking of part of an employee's capacity over a period.

    ``role_id`` is None for administrative allocations (training, leave, ...).
    ``id`` is None until the ledger has stored the assignment.
    """

    employee_id: EmployeeId
    tenant_id: TenantId
    allocation_percentage: AllocationPercentage
    start_date: date
    end_date: Optional[date] = None
    role_id: Optional[RoleId] = None
    is_active: bool = True
    id: Optional[AssignmentId] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("Assignment end date must not be before its start date")

    @property
    def interval(self) -> DateInterval:
        return DateInterval(start=self.start_date, end=self.end_date)

    @property
    def allocation(self) -> int:
        return self.allocation_percentage.value

    def deactivate(self) -> None:
        """Soft delete: inactive assignments no longer book capacity."""
        self.is_active = False
        self.updated_at = datetime.utcnow()


__all__ = ["Assignment"]
