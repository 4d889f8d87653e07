"""SQLModel tables for the narrow employee projection read by the matcher."""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, Column, Date, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlmodel import Field

from resource_matching.infrastructure.persistence.models.base import (
    TimestampedModel,
    create_tenant_id_column,
)


class EmployeeTable(TimestampedModel, table=True):
    """Employee row; deactivation is a soft delete through ``is_active``."""
    __tablename__ = "employees"

    tenant_id: UUID = Field(
        sa_column=create_tenant_id_column(),
        description="Tenant identifier for multi-tenant isolation"
    )

    __table_args__ = (
        Index("idx_employees_tenant_active", "tenant_id", "is_active"),
        Index("idx_employees_tenant_department", "tenant_id", "department_id"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    hire_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
    )
    department_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
    )
    seniority: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
        description="JUNIOR, MIDDLE, SENIOR, LEAD or PRINCIPAL"
    )
    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
    )


class EmployeeSoftSkillTable(TimestampedModel, table=True):
    """Soft skills assessed for an employee."""
    __tablename__ = "employee_soft_skills"

    tenant_id: UUID = Field(
        sa_column=create_tenant_id_column(),
        description="Tenant identifier for multi-tenant isolation"
    )

    __table_args__ = (
        UniqueConstraint("employee_id", "soft_skill_id", name="uq_employee_soft_skills"),
        Index("idx_employee_soft_skills_tenant_employee", "tenant_id", "employee_id"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    employee_id: int = Field(
        sa_column=Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
    )
    soft_skill_id: int = Field(
        sa_column=Column(Integer, nullable=False),
    )


__all__ = ["EmployeeTable", "EmployeeSoftSkillTable"]
