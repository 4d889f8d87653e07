"""Application service dependencies."""

from .assignment_dependencies import AssignmentDependencies
from .matching_dependencies import MatchingDependencies
from .skill_ingest_dependencies import SkillIngestDependencies

__all__ = [
    "AssignmentDependencies",
    "MatchingDependencies",
    "SkillIngestDependencies",
]
