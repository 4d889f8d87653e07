"""Inputs and outputs of a matching run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from resource_matching.domain.entities.employee import Employee
from resource_matching.domain.entities.match_result import MatchResult
from resource_matching.domain.value_objects import RoleId


@dataclass(frozen=True)
class CandidateFilters:
    """Optional narrowing of the candidate pool."""

    department_id: Optional[int] = None
    min_experience_years: Optional[int] = None

    def __post_init__(self):
        if self.min_experience_years is not None and self.min_experience_years < 0:
            raise ValueError("min_experience_years must not be negative")
        if self.department_id is not None and self.department_id <= 0:
            raise ValueError("department_id must be a positive integer")


@dataclass(frozen=True)
class MatchingPolicy:
    """Knobs of a matching run. Weights are fixed and live with SubScores."""

    min_score_threshold: int = 30
    max_persisted_results: int = 20
    top_inline_results: int = 10
    auto_shortlist_score: int = 70
    max_parallelism: int = 16
    conflict_max_retries: int = 3
    conflict_retry_delay_seconds: float = 0.05

    def __post_init__(self):
        if not 0 <= self.min_score_threshold <= 100:
            raise ValueError("min_score_threshold must be between 0 and 100")
        if self.max_persisted_results < 1:
            raise ValueError("max_persisted_results must be at least 1")
        if not 0 <= self.top_inline_results <= self.max_persisted_results:
            raise ValueError("top_inline_results must be between 0 and max_persisted_results")
        if self.max_parallelism < 1:
            raise ValueError("max_parallelism must be at least 1")
        if self.conflict_max_retries < 0:
            raise ValueError("conflict_max_retries must not be negative")

    def qualifies(self, total_score: int) -> bool:
        return total_score > self.min_score_threshold

    def auto_shortlists(self, total_score: int) -> bool:
        return total_score >= self.auto_shortlist_score


@dataclass
class RankedMatch:
    """A persisted match joined with the employee it scores."""

    result: MatchResult
    employee: Employee


@dataclass
class MatchingSummary:
    """What a matching run reports back to its caller."""

    role_id: RoleId
    total_candidates: int
    qualified_matches: int
    persisted_matches: int = 0
    top_matches: List[RankedMatch] = field(default_factory=list)
    skipped_candidates: int = 0
    duration_ms: int = 0


__all__ = ["CandidateFilters", "MatchingPolicy", "RankedMatch", "MatchingSummary"]
