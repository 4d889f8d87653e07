"""Domain service for employee-role match scoring business logic."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List

from resource_matching.domain.entities.employee import Employee
from resource_matching.domain.entities.match_result import (
    CandidateEvaluation,
    GrowthAssessment,
    MatchReasoning,
    OverallAssessment,
    RiskFactor,
    RiskLevel,
    RiskType,
    SubScores,
)
from resource_matching.domain.entities.project import ProjectRole
from resource_matching.domain.exceptions import ScoringError
from resource_matching.domain.services.sub_scores import (
    availability_match,
    experience_match,
    preference_match,
    skills_match,
)

STRENGTH_THRESHOLD = 80
WEAKNESS_THRESHOLD = 50
SKILLS_RISK_THRESHOLD = 70
SKILLS_HIGH_RISK_THRESHOLD = 40
AVAILABILITY_HIGH_RISK_THRESHOLD = 50
CRITICAL_EXPERIENCE_THRESHOLD = 60

SKILL_DEVELOPMENT_RANGE = (60, 90)
SKILL_DEVELOPMENT_POINTS = 30
CAREER_ADVANCEMENT_POINTS = 40

PARTIAL_ALLOCATION_FACTOR = 0.75


class IMatchingService(ABC):
    """Domain service interface for scoring employees against project roles."""

    @abstractmethod
    def evaluate(
        self,
        employee: Employee,
        role: ProjectRole,
        available_allocation: int,
        as_of: date
    ) -> CandidateEvaluation:
        """Score one employee against one role given their free capacity."""
        pass

    @abstractmethod
    def rank(self, evaluations: List[CandidateEvaluation]) -> List[CandidateEvaluation]:
        """Order evaluations best first, deterministically."""
        pass


class MatchingService(IMatchingService):
    """Concrete match scorer combining the four sub-scores with fixed weights."""

    def evaluate(
        self,
        employee: Employee,
        role: ProjectRole,
        available_allocation: int,
        as_of: date
    ) -> CandidateEvaluation:
        """Compute sub-scores, reasoning, risks, growth and a suggested allocation.

        Raises:
            ScoringError: If the employee or role data cannot be scored
        """
        try:
            sub_scores = SubScores(
                skills=skills_match(role, employee),
                availability=availability_match(role.allocation, available_allocation),
                experience=experience_match(role, employee, as_of),
                preference=preference_match(role),
            )
        except (ArithmeticError, AttributeError, TypeError, ValueError) as exc:
            raise ScoringError(f"Cannot score employee {employee.id}: {exc}") from exc

        return CandidateEvaluation(
            employee_id=employee.id,
            sub_scores=sub_scores,
            reasoning=self._generate_reasoning(sub_scores),
            risks=self._identify_risks(sub_scores, role),
            growth=self._assess_growth(sub_scores, employee, role, as_of),
            suggested_allocation=self._suggest_allocation(
                sub_scores, role.allocation, available_allocation
            ),
            available_allocation=available_allocation,
        )

    def rank(self, evaluations: List[CandidateEvaluation]) -> List[CandidateEvaluation]:
        """Sort by total score descending; ties broken by employee id ascending."""
        return sorted(
            evaluations,
            key=lambda evaluation: (-evaluation.total_score, evaluation.employee_id.value),
        )

    def _generate_reasoning(self, scores: SubScores) -> MatchReasoning:
        strengths = []
        if scores.skills >= STRENGTH_THRESHOLD:
            strengths.append("Excellent skills match")
        if scores.availability >= STRENGTH_THRESHOLD:
            strengths.append("High availability")
        if scores.experience >= STRENGTH_THRESHOLD:
            strengths.append("Strong experience level")

        weaknesses = []
        if scores.skills < WEAKNESS_THRESHOLD:
            weaknesses.append("Skills gap identified")
        if scores.availability < WEAKNESS_THRESHOLD:
            weaknesses.append("Limited availability")

        return MatchReasoning(
            strengths=strengths,
            weaknesses=weaknesses,
            overall=OverallAssessment.from_average(scores.average),
        )

    def _identify_risks(self, scores: SubScores, role: ProjectRole) -> List[RiskFactor]:
        risks = []

        if scores.availability < 100:
            risks.append(RiskFactor(
                type=RiskType.AVAILABILITY,
                level=(
                    RiskLevel.HIGH
                    if scores.availability < AVAILABILITY_HIGH_RISK_THRESHOLD
                    else RiskLevel.MEDIUM
                ),
                description="Employee may be overallocated",
            ))

        if scores.skills < SKILLS_RISK_THRESHOLD:
            risks.append(RiskFactor(
                type=RiskType.SKILLS,
                level=(
                    RiskLevel.HIGH
                    if scores.skills < SKILLS_HIGH_RISK_THRESHOLD
                    else RiskLevel.MEDIUM
                ),
                description="Skills gap may require training",
            ))

        if role.is_critical and scores.experience < CRITICAL_EXPERIENCE_THRESHOLD:
            risks.append(RiskFactor(
                type=RiskType.EXPERIENCE,
                level=RiskLevel.HIGH,
                description="Critical role requires more experience",
            ))

        return risks

    def _assess_growth(
        self,
        scores: SubScores,
        employee: Employee,
        role: ProjectRole,
        as_of: date
    ) -> GrowthAssessment:
        low, high = SKILL_DEVELOPMENT_RANGE
        skill_development = low <= scores.skills < high

        # A role without a seniority target offers no advancement signal
        career_advancement = (
            role.seniority is not None
            and role.seniority.ordinal == employee.effective_seniority(as_of).ordinal + 1
        )

        score = 0
        if skill_development:
            score += SKILL_DEVELOPMENT_POINTS
        if career_advancement:
            score += CAREER_ADVANCEMENT_POINTS

        return GrowthAssessment(
            skill_development=skill_development,
            career_advancement=career_advancement,
            score=score,
        )

    def _suggest_allocation(
        self,
        scores: SubScores,
        required_allocation: int,
        available_allocation: int
    ) -> float:
        available = max(0, available_allocation)
        if available >= required_allocation:
            return float(required_allocation)
        if scores.skills >= 80 and scores.experience >= 70:
            return float(min(available, required_allocation))
        return round(min(available, required_allocation * PARTIAL_ALLOCATION_FACTOR), 2)


__all__ = ["IMatchingService", "MatchingService"]
