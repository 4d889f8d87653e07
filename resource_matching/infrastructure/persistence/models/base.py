"""
SQLModel base classes shared by all persistence tables.

Every tenant-owned table defines its own ``tenant_id`` column through
``create_tenant_id_column`` so each table gets a distinct Column instance.
"""

from datetime import datetime

from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import UUID as PostgreSQLUUID
from sqlmodel import Field, SQLModel


class BaseModel(SQLModel):
    """Base SQLModel with common configuration."""

    model_config = {
        "arbitrary_types_allowed": True,
        "populate_by_name": True,
    }


class TimestampedModel(BaseModel):
    """Base model with creation and update timestamps."""

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        nullable=False,
        description="Record creation timestamp"
    )
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        nullable=False,
        description="Record last update timestamp"
    )


def create_tenant_id_column() -> Column:
    """Create a unique tenant_id Column instance for each table."""
    return Column(
        PostgreSQLUUID(as_uuid=True),
        nullable=False,
        index=True
    )


__all__ = ["BaseModel", "TimestampedModel", "create_tenant_id_column"]
