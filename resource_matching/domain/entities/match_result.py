"""Pure domain representation of persisted matching results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from resource_matching.domain.value_objects import (
    EmployeeId,
    MatchResultId,
    RoleId,
    TenantId,
    UserId,
)

SKILLS_WEIGHT = 4
AVAILABILITY_WEIGHT = 3
EXPERIENCE_WEIGHT = 2
PREFERENCE_WEIGHT = 1
WEIGHT_DENOMINATOR = 10


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative values."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


class RiskType(str, Enum):
    AVAILABILITY = "availability"
    SKILLS = "skills"
    EXPERIENCE = "experience"


class RiskLevel(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"


class OverallAssessment(str, Enum):
    """Label derived from the mean of the four sub-scores."""

    EXCELLENT = "excellent"
    GOOD = "good"
    PARTIAL = "partial"
    LIMITED = "limited"

    @classmethod
    def from_average(cls, average: float) -> "OverallAssessment":
        if average >= 80:
            return cls.EXCELLENT
        if average >= 60:
            return cls.GOOD
        if average >= 40:
            return cls.PARTIAL
        return cls.LIMITED


@dataclass(frozen=True)
class SubScores:
    """The four independently auditable sub-scores, each 0..100."""

    skills: int
    availability: int
    experience: int
    preference: int

    def __post_init__(self):
        for name in ("skills", "availability", "experience", "preference"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 100:
                raise ValueError(f"{name} sub-score must be an integer between 0 and 100")

    @property
    def total(self) -> int:
        """round(0.4*s + 0.3*a + 0.2*e + 0.1*p) computed in exact integer arithmetic."""
        weighted = (
            SKILLS_WEIGHT * self.skills
            + AVAILABILITY_WEIGHT * self.availability
            + EXPERIENCE_WEIGHT * self.experience
            + PREFERENCE_WEIGHT * self.preference
        )
        return (weighted + WEIGHT_DENOMINATOR // 2) // WEIGHT_DENOMINATOR

    @property
    def average(self) -> float:
        return (self.skills + self.availability + self.experience + self.preference) / 4


@dataclass(frozen=True)
class MatchReasoning:
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    overall: OverallAssessment = OverallAssessment.LIMITED


@dataclass(frozen=True)
class RiskFactor:
    type: RiskType
    level: RiskLevel
    description: str


@dataclass(frozen=True)
class GrowthAssessment:
    skill_development: bool = False
    career_advancement: bool = False
    score: int = 0


@dataclass(frozen=True)
class CandidateEvaluation:
    """Scorer output for one employee, before it becomes part of a result set."""

    employee_id: EmployeeId
    sub_scores: SubScores
    reasoning: MatchReasoning
    risks: List[RiskFactor]
    growth: GrowthAssessment
    suggested_allocation: float
    available_allocation: int

    @property
    def total_score(self) -> int:
        return self.sub_scores.total


@dataclass
class MatchResult:
    """Persisted score of one employee against one role."""

    id: MatchResultId
    tenant_id: TenantId
    role_id: RoleId
    employee_id: EmployeeId
    total_score: int
    sub_scores: SubScores
    reasoning: MatchReasoning
    risks: List[RiskFactor] = field(default_factory=list)
    growth: GrowthAssessment = field(default_factory=GrowthAssessment)
    suggested_allocation: float = 0.0
    is_shortlisted: bool = False
    reviewed_by: Optional[UserId] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if self.total_score != self.sub_scores.total:
            raise ValueError("Total score must equal the weighted sum of the sub-scores")

    @classmethod
    def from_evaluation(
        cls,
        evaluation: CandidateEvaluation,
        *,
        result_id: MatchResultId,
        tenant_id: TenantId,
        role_id: RoleId,
        shortlisted: bool,
        created_at: Optional[datetime] = None,
    ) -> "MatchResult":
        return cls(
            id=result_id,
            tenant_id=tenant_id,
            role_id=role_id,
            employee_id=evaluation.employee_id,
            total_score=evaluation.total_score,
            sub_scores=evaluation.sub_scores,
            reasoning=evaluation.reasoning,
            risks=list(evaluation.risks),
            growth=evaluation.growth,
            suggested_allocation=evaluation.suggested_allocation,
            is_shortlisted=shortlisted,
            created_at=created_at or datetime.utcnow(),
        )

    def set_shortlist(self, flag: bool, reviewer: UserId, reviewed_at: Optional[datetime] = None) -> None:
        """Toggle the shortlist flag and stamp reviewer metadata."""
        self.is_shortlisted = flag
        self.reviewed_by = reviewer
        self.reviewed_at = reviewed_at or datetime.utcnow()

    def scoring_fingerprint(self) -> Dict[str, Any]:
        """Everything a re-run must reproduce; excludes ids and timestamps."""
        return {
            "role_id": str(self.role_id),
            "employee_id": self.employee_id.value,
            "total_score": self.total_score,
            "skills": self.sub_scores.skills,
            "availability": self.sub_scores.availability,
            "experience": self.sub_scores.experience,
            "preference": self.sub_scores.preference,
            "strengths": list(self.reasoning.strengths),
            "weaknesses": list(self.reasoning.weaknesses),
            "overall": self.reasoning.overall.value,
            "risks": [(r.type.value, r.level.value, r.description) for r in self.risks],
            "growth": (
                self.growth.skill_development,
                self.growth.career_advancement,
                self.growth.score,
            ),
            "suggested_allocation": self.suggested_allocation,
            "is_shortlisted": self.is_shortlisted,
        }


__all__ = [
    "round_half_up",
    "RiskType",
    "RiskLevel",
    "OverallAssessment",
    "SubScores",
    "MatchReasoning",
    "RiskFactor",
    "GrowthAssessment",
    "CandidateEvaluation",
    "MatchResult",
]
