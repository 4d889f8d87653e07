"""
Mappers for converting between domain entities and persistence models.

This module provides all mapper classes that handle conversion between pure
domain entities and SQLModel persistence models, following hexagonal
architecture principles.
"""

from resource_matching.infrastructure.persistence.mappers.assignment_mapper import AssignmentMapper
from resource_matching.infrastructure.persistence.mappers.catalog_mapper import (
    EmployeeMapper,
    EmployeeSkillMapper,
    ProjectMapper,
    SkillMapper,
)
from resource_matching.infrastructure.persistence.mappers.match_result_mapper import (
    MatchResultMapper,
)

__all__ = [
    "AssignmentMapper",
    "EmployeeMapper",
    "EmployeeSkillMapper",
    "MatchResultMapper",
    "ProjectMapper",
    "SkillMapper",
]
