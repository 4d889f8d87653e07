"""SQLModel tables for projects and the roles opened on them."""

from datetime import date
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID as PostgreSQLUUID
from sqlmodel import Field

from resource_matching.infrastructure.persistence.models.base import (
    TimestampedModel,
    create_tenant_id_column,
)


class ProjectTable(TimestampedModel, table=True):
    __tablename__ = "projects"

    tenant_id: UUID = Field(
        sa_column=create_tenant_id_column(),
        description="Tenant identifier for multi-tenant isolation"
    )

    __table_args__ = (
        CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR start_date <= end_date",
            name="ck_projects_date_order",
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(
        default="",
        sa_column=Column(String(255), nullable=False, default=""),
    )
    start_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
    )
    end_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
    )
    status: Optional[str] = Field(
        default=None,
        sa_column=Column(String(30), nullable=True),
    )


class ProjectRoleTable(TimestampedModel, table=True):
    """Staffing role with the requirements the matcher scores against."""
    __tablename__ = "project_roles"

    tenant_id: UUID = Field(
        sa_column=create_tenant_id_column(),
        description="Tenant identifier for multi-tenant isolation"
    )

    __table_args__ = (
        Index("idx_project_roles_tenant_project", "tenant_id", "project_id"),
        Index("idx_project_roles_tenant_status", "tenant_id", "status"),
        CheckConstraint(
            "allocation_percentage BETWEEN 1 AND 100",
            name="ck_project_roles_allocation",
        ),
    )

    id: UUID = Field(
        default_factory=uuid4,
        sa_column=Column(PostgreSQLUUID(as_uuid=True), primary_key=True),
    )
    project_id: int = Field(
        sa_column=Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
    )
    title: str = Field(
        sa_column=Column(String(255), nullable=False),
    )
    seniority: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
    )
    allocation_percentage: int = Field(
        default=100,
        sa_column=Column(Integer, nullable=False, default=100),
    )
    required_skill_ids: List[int] = Field(
        default_factory=list,
        sa_column=Column(ARRAY(Integer), nullable=False, default=list),
        description="Canonical ids of required hard skills"
    )
    preferred_soft_skill_ids: List[int] = Field(
        default_factory=list,
        sa_column=Column(ARRAY(Integer), nullable=False, default=list),
    )
    required_certifications: List[str] = Field(
        default_factory=list,
        sa_column=Column(ARRAY(String), nullable=False, default=list),
    )
    required_languages: List[str] = Field(
        default_factory=list,
        sa_column=Column(ARRAY(String), nullable=False, default=list),
    )
    min_experience_years: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
    )
    preferred_experience_years: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
    )
    work_mode: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
    )
    location: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )
    is_critical: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
    )
    is_urgent: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
    )
    status: str = Field(
        default="OPEN",
        sa_column=Column(String(20), nullable=False, default="OPEN"),
    )


__all__ = ["ProjectTable", "ProjectRoleTable"]
