"""
Matching Schemas

Request and response models for matching runs, result listings and shortlist
review.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from resource_matching.domain.entities.match_result import MatchResult
from resource_matching.domain.entities.matching import MatchingSummary, RankedMatch


class MatchingRunRequest(BaseModel):
    """Optional narrowing of the candidate pool for a run"""

    department_id: Optional[int] = Field(None, gt=0, description="Only employees of this department")
    min_experience_years: Optional[int] = Field(
        None, ge=0, description="Only employees with at least this many whole years of tenure"
    )


class SubScoresResponse(BaseModel):
    skills: int = Field(..., ge=0, le=100)
    availability: int = Field(..., ge=0, le=100)
    experience: int = Field(..., ge=0, le=100)
    preference: int = Field(..., ge=0, le=100)


class ReasoningResponse(BaseModel):
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    overall: str


class RiskResponse(BaseModel):
    type: str
    level: str
    description: str


class GrowthResponse(BaseModel):
    skill_development: bool
    career_advancement: bool
    score: int


class MatchResultResponse(BaseModel):
    """Persisted score of one employee against one role"""

    id: UUID
    role_id: UUID
    employee_id: int
    total_score: int = Field(..., ge=0, le=100)
    sub_scores: SubScoresResponse
    reasoning: ReasoningResponse
    risks: List[RiskResponse] = Field(default_factory=list)
    growth: GrowthResponse
    suggested_allocation: float
    is_shortlisted: bool
    reviewed_by: Optional[UUID] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, result: MatchResult) -> "MatchResultResponse":
        return cls(
            id=result.id.value,
            role_id=result.role_id.value,
            employee_id=result.employee_id.value,
            total_score=result.total_score,
            sub_scores=SubScoresResponse(
                skills=result.sub_scores.skills,
                availability=result.sub_scores.availability,
                experience=result.sub_scores.experience,
                preference=result.sub_scores.preference,
            ),
            reasoning=ReasoningResponse(
                strengths=list(result.reasoning.strengths),
                weaknesses=list(result.reasoning.weaknesses),
                overall=result.reasoning.overall.value,
            ),
            risks=[
                RiskResponse(type=risk.type.value, level=risk.level.value, description=risk.description)
                for risk in result.risks
            ],
            growth=GrowthResponse(
                skill_development=result.growth.skill_development,
                career_advancement=result.growth.career_advancement,
                score=result.growth.score,
            ),
            suggested_allocation=result.suggested_allocation,
            is_shortlisted=result.is_shortlisted,
            reviewed_by=result.reviewed_by.value if result.reviewed_by else None,
            reviewed_at=result.reviewed_at,
            created_at=result.created_at,
        )


class EmployeeSummaryResponse(BaseModel):
    """Catalog fields joined onto inline top matches"""

    id: int
    department_id: Optional[int] = None
    seniority: Optional[str] = None
    hire_date: Optional[date] = None
    skill_ids: List[int] = Field(default_factory=list)


class RankedMatchResponse(BaseModel):
    result: MatchResultResponse
    employee: EmployeeSummaryResponse

    @classmethod
    def from_domain(cls, match: RankedMatch) -> "RankedMatchResponse":
        employee = match.employee
        return cls(
            result=MatchResultResponse.from_domain(match.result),
            employee=EmployeeSummaryResponse(
                id=employee.id.value,
                department_id=employee.department_id,
                seniority=employee.seniority.value if employee.seniority else None,
                hire_date=employee.hire_date,
                skill_ids=sorted(employee.skill_ids),
            ),
        )


class MatchingSummaryResponse(BaseModel):
    """Outcome of a matching run"""

    role_id: UUID
    total_candidates: int = Field(..., description="Candidates considered")
    qualified_matches: int = Field(..., description="Candidates scoring above the threshold")
    persisted_matches: int = Field(..., description="Results written for the role")
    skipped_candidates: int = Field(0, description="Candidates that could not be scored")
    duration_ms: int
    top_matches: List[RankedMatchResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, summary: MatchingSummary) -> "MatchingSummaryResponse":
        return cls(
            role_id=summary.role_id.value,
            total_candidates=summary.total_candidates,
            qualified_matches=summary.qualified_matches,
            persisted_matches=summary.persisted_matches,
            skipped_candidates=summary.skipped_candidates,
            duration_ms=summary.duration_ms,
            top_matches=[RankedMatchResponse.from_domain(match) for match in summary.top_matches],
        )


class ShortlistRequest(BaseModel):
    is_shortlisted: bool = Field(..., description="New shortlist flag")


class AvailabilityResponse(BaseModel):
    employee_id: int
    start_date: date
    end_date: Optional[date] = None
    available_percentage: int = Field(..., ge=0, le=100)
