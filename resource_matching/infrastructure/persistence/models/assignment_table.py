"""SQLModel table for the assignment ledger."""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, Column, Date, ForeignKey, Index, Integer
from sqlalchemy.dialects.postgresql import UUID as PostgreSQLUUID
from sqlmodel import Field

from resource_matching.infrastructure.persistence.models.base import (
    TimestampedModel,
    create_tenant_id_column,
)


class AssignmentTable(TimestampedModel, table=True):
    """Allocation of part of an employee's capacity over a date range."""
    __tablename__ = "assignments"

    tenant_id: UUID = Field(
        sa_column=create_tenant_id_column(),
        description="Tenant identifier for multi-tenant isolation"
    )

    __table_args__ = (
        Index("idx_assignments_tenant_employee_active", "tenant_id", "employee_id", "is_active"),
        Index("idx_assignments_dates", "start_date", "end_date"),
        CheckConstraint(
            "allocation_percentage BETWEEN 1 AND 100",
            name="ck_assignments_allocation",
        ),
        CheckConstraint(
            "end_date IS NULL OR start_date <= end_date",
            name="ck_assignments_date_order",
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    employee_id: int = Field(
        sa_column=Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
    )
    role_id: Optional[UUID] = Field(
        default=None,
        sa_column=Column(
            PostgreSQLUUID(as_uuid=True),
            ForeignKey("project_roles.id", ondelete="SET NULL"),
            nullable=True,
        ),
        description="Null for administrative allocations"
    )
    allocation_percentage: int = Field(
        sa_column=Column(Integer, nullable=False),
    )
    start_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )
    end_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Null for ongoing assignments"
    )
    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
    )


__all__ = ["AssignmentTable"]
