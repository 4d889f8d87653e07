"""
Infrastructure persistence models module.

This module contains database table definitions following hexagonal architecture,
separated from domain models and business logic.
"""

from resource_matching.infrastructure.persistence.models.assignment_table import AssignmentTable
from resource_matching.infrastructure.persistence.models.employee_table import (
    EmployeeSoftSkillTable,
    EmployeeTable,
)
from resource_matching.infrastructure.persistence.models.match_result_table import MatchResultTable
from resource_matching.infrastructure.persistence.models.project_table import (
    ProjectRoleTable,
    ProjectTable,
)
from resource_matching.infrastructure.persistence.models.skill_table import (
    EmployeeSkillTable,
    SkillTable,
)

__all__ = [
    # Catalog
    "EmployeeTable",
    "EmployeeSoftSkillTable",
    "EmployeeSkillTable",
    "SkillTable",
    "ProjectTable",
    "ProjectRoleTable",
    # Ledger
    "AssignmentTable",
    # Results
    "MatchResultTable",
]
