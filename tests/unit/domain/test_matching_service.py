"""
Unit tests for the MatchingService scorer.

Covers:
- Weighted totals in integer arithmetic
- Strengths, weaknesses and the overall label
- Risk identification
- Growth assessment
- Suggested allocation
- Deterministic ranking
"""

import pytest
from hypothesis import given, strategies as st

from resource_matching.domain.entities.employee import Seniority
from resource_matching.domain.entities.match_result import (
    OverallAssessment,
    RiskLevel,
    RiskType,
    SubScores,
)
from resource_matching.domain.exceptions import ScoringError
from resource_matching.domain.services.matching_service import MatchingService
from tests.fixtures.matching_fixtures import AS_OF, EmployeeTestBuilder, RoleTestBuilder


@pytest.fixture
def scorer() -> MatchingService:
    return MatchingService()


# ============================================================================
# SubScores
# ============================================================================

class TestSubScores:

    def test_total_uses_fixed_weights(self):
        assert SubScores(skills=100, availability=100, experience=100, preference=50).total == 95

    def test_total_rounds_half_up(self):
        # 0.4*25 + 0.3*15 = 14.5; banker's rounding would give 14
        assert SubScores(skills=25, availability=15, experience=0, preference=0).total == 15

    @pytest.mark.parametrize("bad", [-1, 101])
    def test_rejects_out_of_range_values(self, bad):
        with pytest.raises(ValueError):
            SubScores(skills=bad, availability=0, experience=0, preference=0)

    def test_rejects_non_integer_values(self):
        with pytest.raises(ValueError):
            SubScores(skills=50.5, availability=0, experience=0, preference=0)

    @given(
        skills=st.integers(0, 100),
        availability=st.integers(0, 100),
        experience=st.integers(0, 100),
        preference=st.integers(0, 100),
    )
    def test_total_matches_weighted_sum(self, skills, availability, experience, preference):
        total = SubScores(skills, availability, experience, preference).total
        weighted = 4 * skills + 3 * availability + 2 * experience + preference

        assert 0 <= total <= 100
        assert abs(total * 10 - weighted) <= 5


# ============================================================================
# evaluate
# ============================================================================

class TestEvaluate:

    def test_strong_candidate(self, scorer):
        role = (
            RoleTestBuilder()
            .with_required_skills(1, 2)
            .with_seniority(Seniority.SENIOR)
            .with_experience(min_years=3, preferred_years=5)
            .build_role()
        )
        employee = (
            EmployeeTestBuilder()
            .with_skills(1, 2)
            .with_years(6)
            .with_seniority(Seniority.SENIOR)
            .build()
        )

        evaluation = scorer.evaluate(employee, role, available_allocation=100, as_of=AS_OF)

        assert evaluation.sub_scores == SubScores(
            skills=100, availability=100, experience=100, preference=50
        )
        assert evaluation.total_score == 95
        assert evaluation.reasoning.strengths == [
            "Excellent skills match",
            "High availability",
            "Strong experience level",
        ]
        assert evaluation.reasoning.weaknesses == []
        assert evaluation.reasoning.overall is OverallAssessment.EXCELLENT
        assert evaluation.risks == []
        assert evaluation.growth.skill_development is False
        assert evaluation.growth.career_advancement is False
        assert evaluation.growth.score == 0
        assert evaluation.suggested_allocation == 100.0
        assert evaluation.available_allocation == 100

    def test_partial_candidate(self, scorer):
        role = RoleTestBuilder().with_required_skills(1, 2, 3, 4).build_role()
        employee = EmployeeTestBuilder().with_skills(1, 2, 3).build()

        evaluation = scorer.evaluate(employee, role, available_allocation=60, as_of=AS_OF)

        assert evaluation.sub_scores == SubScores(
            skills=75, availability=50, experience=50, preference=50
        )
        assert evaluation.total_score == 60
        assert evaluation.reasoning.strengths == []
        assert evaluation.reasoning.weaknesses == []
        assert evaluation.reasoning.overall is OverallAssessment.PARTIAL
        assert [(risk.type, risk.level) for risk in evaluation.risks] == [
            (RiskType.AVAILABILITY, RiskLevel.MEDIUM),
        ]
        assert evaluation.growth.skill_development is True
        assert evaluation.growth.score == 30
        assert evaluation.suggested_allocation == 60.0

    def test_weak_candidate_on_critical_role(self, scorer):
        role = RoleTestBuilder().with_required_skills(1).critical().build_role()
        employee = EmployeeTestBuilder().with_skills(2).build()

        evaluation = scorer.evaluate(employee, role, available_allocation=0, as_of=AS_OF)

        assert evaluation.total_score == 15
        assert evaluation.reasoning.weaknesses == ["Skills gap identified", "Limited availability"]
        assert evaluation.reasoning.overall is OverallAssessment.LIMITED
        assert [(risk.type, risk.level) for risk in evaluation.risks] == [
            (RiskType.AVAILABILITY, RiskLevel.HIGH),
            (RiskType.SKILLS, RiskLevel.HIGH),
            (RiskType.EXPERIENCE, RiskLevel.HIGH),
        ]
        assert evaluation.suggested_allocation == 0

    def test_skills_risk_is_medium_between_40_and_70(self, scorer):
        role = RoleTestBuilder().with_required_skills(1, 2).build_role()
        employee = EmployeeTestBuilder().with_skills(1).build()

        evaluation = scorer.evaluate(employee, role, available_allocation=100, as_of=AS_OF)

        assert [(risk.type, risk.level) for risk in evaluation.risks] == [
            (RiskType.SKILLS, RiskLevel.MEDIUM),
        ]

    def test_career_advancement_when_role_is_one_level_up(self, scorer):
        role = RoleTestBuilder().with_seniority(Seniority.LEAD).build_role()
        employee = EmployeeTestBuilder().with_seniority(Seniority.SENIOR).build()

        evaluation = scorer.evaluate(employee, role, available_allocation=100, as_of=AS_OF)

        assert evaluation.growth.career_advancement is True
        assert evaluation.growth.score == 40

    def test_no_career_advancement_without_role_seniority(self, scorer):
        role = RoleTestBuilder().with_seniority(None).build_role()
        employee = EmployeeTestBuilder().with_seniority(Seniority.JUNIOR).build()

        evaluation = scorer.evaluate(employee, role, available_allocation=100, as_of=AS_OF)

        assert evaluation.growth.career_advancement is False

    def test_strong_candidate_gets_all_free_capacity(self, scorer):
        role = (
            RoleTestBuilder()
            .with_required_skills(1)
            .with_experience(min_years=2)
            .build_role()
        )
        employee = EmployeeTestBuilder().with_skills(1).with_years(4).build()

        evaluation = scorer.evaluate(employee, role, available_allocation=40, as_of=AS_OF)

        assert evaluation.sub_scores.experience == 80
        assert evaluation.suggested_allocation == 40.0

    def test_other_candidates_get_three_quarters_of_requirement(self, scorer):
        role = RoleTestBuilder().with_required_skills(1, 2).with_allocation(50).build_role()
        employee = EmployeeTestBuilder().with_skills(1).build()

        evaluation = scorer.evaluate(employee, role, available_allocation=45, as_of=AS_OF)

        assert evaluation.suggested_allocation == 37.5


# ============================================================================
# rank
# ============================================================================

class TestRank:

    def test_orders_by_total_then_employee_id(self, scorer):
        role = RoleTestBuilder().with_required_skills(1).build_role()
        evaluations = [
            scorer.evaluate(EmployeeTestBuilder(5).with_skills(1).build(), role, 100, AS_OF),
            scorer.evaluate(EmployeeTestBuilder(3).build(), role, 100, AS_OF),
            scorer.evaluate(EmployeeTestBuilder(2).with_skills(1).build(), role, 100, AS_OF),
        ]

        ranked = scorer.rank(evaluations)

        assert [evaluation.employee_id.value for evaluation in ranked] == [2, 5, 3]


class TestEvaluateFailures:

    def test_unscorable_input_raises_scoring_error(self, scorer):
        role = RoleTestBuilder().with_required_skills(1).build_role()
        employee = EmployeeTestBuilder(7).with_skills(1).build()

        with pytest.raises(ScoringError) as exc_info:
            scorer.evaluate(employee, role, None, AS_OF)

        assert isinstance(exc_info.value.__cause__, TypeError)
