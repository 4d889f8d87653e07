"""
SQLModel table for matching result sets.

One row per ``(role_id, employee_id)``; a matching run replaces all rows of a
role inside a single transaction.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID as PostgreSQLUUID
from sqlmodel import Field

from resource_matching.infrastructure.persistence.models.base import (
    BaseModel,
    create_tenant_id_column,
)


class MatchResultTable(BaseModel, table=True):
    """Persisted score of one employee against one role."""
    __tablename__ = "match_results"

    tenant_id: UUID = Field(
        sa_column=create_tenant_id_column(),
        description="Tenant identifier for multi-tenant isolation"
    )

    __table_args__ = (
        UniqueConstraint("role_id", "employee_id", name="uq_match_results_role_employee"),
        Index("idx_match_results_tenant_role_score", "tenant_id", "role_id", "total_score"),
        Index("idx_match_results_tenant_role_shortlist", "tenant_id", "role_id", "is_shortlisted"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        sa_column=Column(PostgreSQLUUID(as_uuid=True), primary_key=True),
    )
    role_id: UUID = Field(
        sa_column=Column(
            PostgreSQLUUID(as_uuid=True),
            ForeignKey("project_roles.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    employee_id: int = Field(
        sa_column=Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
    )

    # Scores
    total_score: int = Field(sa_column=Column(SmallInteger, nullable=False))
    skills_match: int = Field(sa_column=Column(SmallInteger, nullable=False))
    availability_match: int = Field(sa_column=Column(SmallInteger, nullable=False))
    experience_match: int = Field(sa_column=Column(SmallInteger, nullable=False))
    preference_match: int = Field(sa_column=Column(SmallInteger, nullable=False))

    # Explanations
    reasoning: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONB, nullable=False, default={}),
        description="strengths, weaknesses and overall label"
    )
    risks: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, default=[]),
        description="List of {type, level, description}"
    )
    growth: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONB, nullable=False, default={}),
        description="skill_development, career_advancement and score"
    )
    suggested_allocation: float = Field(
        default=0.0,
        sa_column=Column(Float, nullable=False, default=0.0),
    )

    # Review
    is_shortlisted: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
    )
    reviewed_by: Optional[UUID] = Field(
        default=None,
        sa_column=Column(PostgreSQLUUID(as_uuid=True), nullable=True),
    )
    reviewed_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
    )
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
    )


__all__ = ["MatchResultTable"]
