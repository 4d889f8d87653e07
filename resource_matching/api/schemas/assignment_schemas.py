"""
Assignment Schemas

Request and response models for the allocation ledger.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from resource_matching.domain.entities.assignment import Assignment


class AssignmentCreate(BaseModel):
    employee_id: int = Field(..., gt=0)
    allocation_percentage: int = Field(..., description="Share of capacity, 1..100")
    start_date: date
    end_date: Optional[date] = Field(None, description="Exclusive end; omitted means open-ended")
    role_id: Optional[UUID] = Field(None, description="Role the allocation staffs, if any")


class AssignmentUpdate(BaseModel):
    allocation_percentage: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    clear_end_date: bool = Field(False, description="Make the assignment open-ended")
    is_active: Optional[bool] = None


class AssignmentResponse(BaseModel):
    id: int
    employee_id: int
    role_id: Optional[UUID] = None
    allocation_percentage: int
    start_date: date
    end_date: Optional[date] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, assignment: Assignment) -> "AssignmentResponse":
        return cls(
            id=assignment.id.value,
            employee_id=assignment.employee_id.value,
            role_id=assignment.role_id.value if assignment.role_id else None,
            allocation_percentage=assignment.allocation,
            start_date=assignment.start_date,
            end_date=assignment.end_date,
            is_active=assignment.is_active,
            created_at=assignment.created_at,
            updated_at=assignment.updated_at,
        )
