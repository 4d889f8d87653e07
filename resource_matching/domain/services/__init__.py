"""Domain services package."""

from .availability_service import AvailabilityCalculator
from .matching_service import IMatchingService, MatchingService
from .skill_resolver import (
    ResolutionLevel,
    ResolutionOutcome,
    ResolutionStats,
    SkillResolution,
    SkillResolver,
)
from .sub_scores import availability_match, experience_match, preference_match, skills_match

__all__ = [
    "AvailabilityCalculator",
    "IMatchingService",
    "MatchingService",
    "ResolutionLevel",
    "ResolutionOutcome",
    "ResolutionStats",
    "SkillResolution",
    "SkillResolver",
    "availability_match",
    "experience_match",
    "preference_match",
    "skills_match",
]
