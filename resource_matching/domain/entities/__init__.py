"""Domain entities exposed for application layer use."""

from .assignment import Assignment
from .employee import Employee, EmployeeSkill, Seniority
from .match_result import (
    CandidateEvaluation,
    GrowthAssessment,
    MatchReasoning,
    MatchResult,
    OverallAssessment,
    RiskFactor,
    RiskLevel,
    RiskType,
    SubScores,
)
from .matching import CandidateFilters, MatchingPolicy, MatchingSummary, RankedMatch
from .project import Project, ProjectRole, RoleStatus, RoleWithProject, WorkMode
from .skill import Skill, SkillSource

__all__ = [
    # Ledger
    "Assignment",
    # Catalog
    "Employee",
    "EmployeeSkill",
    "Seniority",
    "Project",
    "ProjectRole",
    "RoleStatus",
    "RoleWithProject",
    "WorkMode",
    "Skill",
    "SkillSource",
    # Matching
    "CandidateEvaluation",
    "CandidateFilters",
    "GrowthAssessment",
    "MatchReasoning",
    "MatchResult",
    "MatchingPolicy",
    "MatchingSummary",
    "OverallAssessment",
    "RankedMatch",
    "RiskFactor",
    "RiskLevel",
    "RiskType",
    "SubScores",
]
