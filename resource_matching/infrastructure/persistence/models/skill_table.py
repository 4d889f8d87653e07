"""
SQLModel tables for the master skill list and employee skill links.

The skill master table is shared by all tenants; employee skill links are
tenant-owned and unique per ``(employee_id, skill_id)``.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import Boolean, Column, Float, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import ARRAY
from sqlmodel import Field

from resource_matching.infrastructure.persistence.models.base import (
    TimestampedModel,
    create_tenant_id_column,
)


class SkillTable(TimestampedModel, table=True):
    """Canonical skill. Names are not unique; ids are."""
    __tablename__ = "skills"

    __table_args__ = (
        Index("idx_skills_name", "name"),
        Index("idx_skills_known_name", "known_name"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Canonical display name"
    )
    known_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Alternative well-known name"
    )
    synonyms: List[str] = Field(
        default_factory=list,
        sa_column=Column(ARRAY(String), nullable=False, default=list),
        description="Synonyms matched case-insensitively"
    )


class EmployeeSkillTable(TimestampedModel, table=True):
    """Link between an employee and a canonical skill."""
    __tablename__ = "employee_skills"

    tenant_id: UUID = Field(
        sa_column=create_tenant_id_column(),
        description="Tenant identifier for multi-tenant isolation"
    )

    __table_args__ = (
        UniqueConstraint("employee_id", "skill_id", name="uq_employee_skills_employee_skill"),
        Index("idx_employee_skills_tenant_employee", "tenant_id", "employee_id"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    employee_id: int = Field(
        sa_column=Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
    )
    skill_id: int = Field(
        sa_column=Column(Integer, ForeignKey("skills.id", ondelete="RESTRICT"), nullable=False),
    )
    proficiency: float = Field(
        default=0.0,
        sa_column=Column(Float, nullable=False, default=0.0),
        description="Proficiency on a 0..1 scale"
    )
    is_certified: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
    )
    source: str = Field(
        default="manual",
        sa_column=Column(String(20), nullable=False, default="manual"),
        description="cv_extracted, manual or imported"
    )


__all__ = ["SkillTable", "EmployeeSkillTable"]
