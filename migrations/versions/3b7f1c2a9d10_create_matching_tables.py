"""create matching tables

Revision ID: 3b7f1c2a9d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3b7f1c2a9d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "skills",
        *_timestamps(),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("known_name", sa.String(length=255), nullable=True),
        sa.Column("synonyms", postgresql.ARRAY(sa.String()), nullable=False, server_default="{}"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_skills_name", "skills", ["name"], unique=False)
    op.create_index("idx_skills_known_name", "skills", ["known_name"], unique=False)

    op.create_table(
        "employees",
        *_timestamps(),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("hire_date", sa.Date(), nullable=True),
        sa.Column("department_id", sa.Integer(), nullable=True),
        sa.Column("seniority", sa.String(length=20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_employees_tenant_id"), "employees", ["tenant_id"], unique=False)
    op.create_index("idx_employees_tenant_active", "employees", ["tenant_id", "is_active"], unique=False)
    op.create_index("idx_employees_tenant_department", "employees", ["tenant_id", "department_id"], unique=False)

    op.create_table(
        "employee_skills",
        *_timestamps(),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("skill_id", sa.Integer(), nullable=False),
        sa.Column("proficiency", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_certified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("source", sa.String(length=20), nullable=False, server_default="manual"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["skill_id"], ["skills.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_id", "skill_id", name="uq_employee_skills_employee_skill"),
    )
    op.create_index(op.f("ix_employee_skills_tenant_id"), "employee_skills", ["tenant_id"], unique=False)
    op.create_index(
        "idx_employee_skills_tenant_employee", "employee_skills", ["tenant_id", "employee_id"], unique=False
    )

    op.create_table(
        "employee_soft_skills",
        *_timestamps(),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("soft_skill_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_id", "soft_skill_id", name="uq_employee_soft_skills"),
    )
    op.create_index(op.f("ix_employee_soft_skills_tenant_id"), "employee_soft_skills", ["tenant_id"], unique=False)
    op.create_index(
        "idx_employee_soft_skills_tenant_employee",
        "employee_soft_skills",
        ["tenant_id", "employee_id"],
        unique=False,
    )

    op.create_table(
        "projects",
        *_timestamps(),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=30), nullable=True),
        sa.CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR start_date <= end_date",
            name="ck_projects_date_order",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_projects_tenant_id"), "projects", ["tenant_id"], unique=False)

    op.create_table(
        "project_roles",
        *_timestamps(),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("seniority", sa.String(length=20), nullable=True),
        sa.Column("allocation_percentage", sa.Integer(), nullable=False, server_default=sa.text("100")),
        sa.Column("required_skill_ids", postgresql.ARRAY(sa.Integer()), nullable=False, server_default="{}"),
        sa.Column("preferred_soft_skill_ids", postgresql.ARRAY(sa.Integer()), nullable=False, server_default="{}"),
        sa.Column("required_certifications", postgresql.ARRAY(sa.String()), nullable=False, server_default="{}"),
        sa.Column("required_languages", postgresql.ARRAY(sa.String()), nullable=False, server_default="{}"),
        sa.Column("min_experience_years", sa.Integer(), nullable=True),
        sa.Column("preferred_experience_years", sa.Integer(), nullable=True),
        sa.Column("work_mode", sa.String(length=20), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("is_critical", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_urgent", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="OPEN"),
        sa.CheckConstraint("allocation_percentage BETWEEN 1 AND 100", name="ck_project_roles_allocation"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_project_roles_tenant_id"), "project_roles", ["tenant_id"], unique=False)
    op.create_index("idx_project_roles_tenant_project", "project_roles", ["tenant_id", "project_id"], unique=False)
    op.create_index("idx_project_roles_tenant_status", "project_roles", ["tenant_id", "status"], unique=False)

    op.create_table(
        "assignments",
        *_timestamps(),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("role_id", sa.UUID(), nullable=True),
        sa.Column("allocation_percentage", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.CheckConstraint("allocation_percentage BETWEEN 1 AND 100", name="ck_assignments_allocation"),
        sa.CheckConstraint("end_date IS NULL OR start_date <= end_date", name="ck_assignments_date_order"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["project_roles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_assignments_tenant_id"), "assignments", ["tenant_id"], unique=False)
    op.create_index(
        "idx_assignments_tenant_employee_active",
        "assignments",
        ["tenant_id", "employee_id", "is_active"],
        unique=False,
    )
    op.create_index("idx_assignments_dates", "assignments", ["start_date", "end_date"], unique=False)

    op.create_table(
        "match_results",
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("role_id", sa.UUID(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("total_score", sa.SmallInteger(), nullable=False),
        sa.Column("skills_match", sa.SmallInteger(), nullable=False),
        sa.Column("availability_match", sa.SmallInteger(), nullable=False),
        sa.Column("experience_match", sa.SmallInteger(), nullable=False),
        sa.Column("preference_match", sa.SmallInteger(), nullable=False),
        sa.Column("reasoning", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("risks", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("growth", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("suggested_allocation", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_shortlisted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("reviewed_by", sa.UUID(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["project_roles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("role_id", "employee_id", name="uq_match_results_role_employee"),
    )
    op.create_index(op.f("ix_match_results_tenant_id"), "match_results", ["tenant_id"], unique=False)
    op.create_index(
        "idx_match_results_tenant_role_score",
        "match_results",
        ["tenant_id", "role_id", "total_score"],
        unique=False,
    )
    op.create_index(
        "idx_match_results_tenant_role_shortlist",
        "match_results",
        ["tenant_id", "role_id", "is_shortlisted"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("match_results")
    op.drop_table("assignments")
    op.drop_table("project_roles")
    op.drop_table("projects")
    op.drop_table("employee_soft_skills")
    op.drop_table("employee_skills")
    op.drop_table("employees")
    op.drop_table("skills")
