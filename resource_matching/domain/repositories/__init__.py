"""Domain repository abstractions."""

from .assignment_repository import IAssignmentRepository
from .catalog_repository import ICatalogRepository
from .match_result_repository import IMatchResultRepository
from .skill_repository import IEmployeeSkillRepository, ISkillRepository

__all__ = [
    "IAssignmentRepository",
    "ICatalogRepository",
    "IEmployeeSkillRepository",
    "IMatchResultRepository",
    "ISkillRepository",
]
