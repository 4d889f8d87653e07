"""
Unit tests for MatchingApplicationService.

Covers:
- Threshold, truncation and inline limits of a matching run
- Automatic shortlisting
- Skipping candidates whose scoring fails
- Idempotent re-runs
- Conflict retries on the result-set lock
- Tenant scoping of roles, results and employees
- Shortlist review and availability queries
- Run completion logging
- Re-runs after the assignment ledger changes
"""

from datetime import date, timedelta

import pytest
from structlog.testing import capture_logs

from resource_matching.application.assignment_service import AssignmentApplicationService
from resource_matching.application.matching_service import MatchingApplicationService
from resource_matching.domain.entities.matching import CandidateFilters, MatchingPolicy
from resource_matching.domain.exceptions import (
    ConcurrencyError,
    EmployeeNotFoundError,
    MatchResultNotFoundError,
    RoleNotFoundError,
    ScoringError,
    TransientError,
    ValidationError,
)
from resource_matching.domain.services.matching_service import MatchingService
from resource_matching.domain.value_objects import RoleId, TenantId, UserId
from tests.fixtures.matching_fixtures import (
    AS_OF,
    REVIEWER_ID,
    ROLE_ID,
    TENANT_A,
    TENANT_B,
    AssignmentTestBuilder,
    EmployeeTestBuilder,
    RoleTestBuilder,
)
from tests.mocks.mock_repositories import MockCatalogRepository


def book(assignment_repository, employee_id: int, allocation: int) -> None:
    """Book part of an employee's capacity from before AS_OF onwards."""
    assignment_repository.seed(
        AssignmentTestBuilder(employee_id)
        .with_allocation(allocation)
        .between(AS_OF - timedelta(days=30))
        .build()
    )


@pytest.fixture
def service(matching_dependencies) -> MatchingApplicationService:
    return MatchingApplicationService(matching_dependencies)


class FailingMatchingService(MatchingService):
    """Scorer that cannot score selected employees."""

    def __init__(self, failing_ids):
        self.failing_ids = set(failing_ids)

    def evaluate(self, employee, role, available_allocation, as_of):
        if employee.id.value in self.failing_ids:
            raise ScoringError(f"Cannot score employee {employee.id}")
        return super().evaluate(employee, role, available_allocation, as_of)


class LeakyCatalogRepository(MockCatalogRepository):
    """Catalog that ignores tenant scope when loading roles."""

    async def get_role_with_project(self, role_id, tenant_id):
        return self.roles.get(str(role_id))


# ============================================================================
# run_matching
# ============================================================================

class TestRunMatching:

    async def test_threshold_is_strictly_greater_than_30(
        self, service, catalog_repository, assignment_repository, match_result_repository
    ):
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1, 2, 3, 4).build())
        catalog_repository.add_employees(
            EmployeeTestBuilder(1).with_skills(1).build(),
            EmployeeTestBuilder(2).with_skills(1).build(),
        )
        # skills 25, availability 15 -> total 30; availability 19 -> total 31
        book(assignment_repository, 1, 85)
        book(assignment_repository, 2, 81)

        summary = await service.run_matching(ROLE_ID, TENANT_A)

        assert summary.total_candidates == 2
        assert summary.qualified_matches == 1
        stored = match_result_repository.result_sets[(TENANT_A, ROLE_ID)]
        assert [(result.employee_id.value, result.total_score) for result in stored] == [(2, 31)]

    async def test_persists_twenty_and_returns_ten_inline(
        self, service, catalog_repository, match_result_repository
    ):
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1).build())
        catalog_repository.add_employees(
            *(EmployeeTestBuilder(employee_id).with_skills(1).build() for employee_id in range(25, 0, -1))
        )

        summary = await service.run_matching(ROLE_ID, TENANT_A)

        assert summary.total_candidates == 25
        assert summary.qualified_matches == 25
        assert summary.persisted_matches == 20
        assert len(summary.top_matches) == 10
        # Equal scores rank by employee id
        assert [match.employee.id.value for match in summary.top_matches] == list(range(1, 11))
        stored = match_result_repository.result_sets[(TENANT_A, ROLE_ID)]
        assert [result.employee_id.value for result in stored] == list(range(1, 21))
        assert all(result.total_score == 85 for result in stored)

    async def test_auto_shortlists_from_70(
        self, service, catalog_repository, assignment_repository, match_result_repository
    ):
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1).build())
        catalog_repository.add_employees(
            EmployeeTestBuilder(1).with_skills(1).build(),
            EmployeeTestBuilder(2).with_skills(1).build(),
        )
        book(assignment_repository, 1, 51)
        book(assignment_repository, 2, 54)

        await service.run_matching(ROLE_ID, TENANT_A)

        stored = {
            result.employee_id.value: result
            for result in match_result_repository.result_sets[(TENANT_A, ROLE_ID)]
        }
        assert stored[1].total_score == 70
        assert stored[1].is_shortlisted is True
        assert stored[2].total_score == 69
        assert stored[2].is_shortlisted is False

    async def test_results_carry_run_context(
        self, service, catalog_repository, match_result_repository
    ):
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1).build())
        catalog_repository.add_employees(EmployeeTestBuilder(1).with_skills(1).build())

        summary = await service.run_matching(ROLE_ID, TENANT_A)

        result = summary.top_matches[0].result
        assert str(result.tenant_id) == TENANT_A
        assert str(result.role_id) == ROLE_ID
        assert result.sub_scores.total == result.total_score
        assert result.created_at.year == 2025

    async def test_ended_project_without_start_still_runs(
        self, service, catalog_repository, match_result_repository
    ):
        catalog_repository.add_role(
            RoleTestBuilder()
            .with_project_dates(None, AS_OF - timedelta(days=10))
            .with_required_skills(1)
            .build()
        )
        catalog_repository.add_employees(EmployeeTestBuilder(1).with_skills(1).build())

        summary = await service.run_matching(ROLE_ID, TENANT_A)

        assert summary.qualified_matches == 1
        [stored] = match_result_repository.result_sets[(TENANT_A, ROLE_ID)]
        assert stored.employee_id.value == 1

    async def test_completion_log_carries_run_metrics_only(
        self, service, catalog_repository
    ):
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1).build())
        catalog_repository.add_employees(
            EmployeeTestBuilder(1).with_skills(1).build(),
            EmployeeTestBuilder(2).build(),
        )

        with capture_logs() as logs:
            await service.run_matching(ROLE_ID, TENANT_A)

        [completed] = [log for log in logs if log["event"] == "Matching run completed"]
        assert completed["log_level"] == "info"
        assert completed["candidates_evaluated"] == 2
        assert completed["qualified_count"] == 2
        assert completed["threshold"] == 30
        assert isinstance(completed["duration_ms"], int)
        assert completed["skill_resolver"] == {
            "validated": 0,
            "fallback": 0,
            "id_discarded": 0,
            "unresolved": 0,
        }
        for log in logs:
            assert not {"name", "email", "employee_name", "unresolved_names"} & set(log)

    async def test_failed_candidate_is_skipped(
        self, matching_dependencies, catalog_repository, match_result_repository
    ):
        matching_dependencies.matching_service = FailingMatchingService(failing_ids=[2])
        service = MatchingApplicationService(matching_dependencies)
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1).build())
        catalog_repository.add_employees(
            *(EmployeeTestBuilder(employee_id).with_skills(1).build() for employee_id in (1, 2, 3))
        )

        summary = await service.run_matching(ROLE_ID, TENANT_A)

        assert summary.total_candidates == 3
        assert summary.skipped_candidates == 1
        assert summary.persisted_matches == 2
        stored = match_result_repository.result_sets[(TENANT_A, ROLE_ID)]
        assert [result.employee_id.value for result in stored] == [1, 3]

    async def test_rerun_reproduces_the_result_set(
        self, service, catalog_repository, assignment_repository, match_result_repository
    ):
        catalog_repository.add_role(
            RoleTestBuilder().with_required_skills(1, 2).critical().build()
        )
        catalog_repository.add_employees(
            EmployeeTestBuilder(1).with_skills(1, 2).with_years(4).build(),
            EmployeeTestBuilder(2).with_skills(1).with_years(1).build(),
            EmployeeTestBuilder(3).with_skills(2).build(),
        )
        book(assignment_repository, 2, 40)

        await service.run_matching(ROLE_ID, TENANT_A)
        first = [
            result.scoring_fingerprint()
            for result in await match_result_repository.list_for_role(
                TenantId(TENANT_A), RoleId(ROLE_ID)
            )
        ]
        await service.run_matching(ROLE_ID, TENANT_A)
        second = [
            result.scoring_fingerprint()
            for result in await match_result_repository.list_for_role(
                TenantId(TENANT_A), RoleId(ROLE_ID)
            )
        ]

        assert first
        assert first == second

    async def test_empty_pool_clears_previous_results(
        self, service, catalog_repository, match_result_repository
    ):
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1).build())
        catalog_repository.add_employees(EmployeeTestBuilder(1).with_skills(1).build())
        await service.run_matching(ROLE_ID, TENANT_A)

        catalog_repository.employees.clear()
        summary = await service.run_matching(ROLE_ID, TENANT_A)

        assert summary.total_candidates == 0
        assert summary.top_matches == []
        assert match_result_repository.result_sets[(TENANT_A, ROLE_ID)] == []

    async def test_filters_are_passed_to_the_catalog(self, service, catalog_repository):
        catalog_repository.add_role(RoleTestBuilder().build())
        catalog_repository.add_employees(
            EmployeeTestBuilder(1).with_department(7).with_years(5).build(),
            EmployeeTestBuilder(2).with_department(7).with_years(1).build(),
            EmployeeTestBuilder(3).with_department(8).with_years(9).build(),
        )
        filters = CandidateFilters(department_id=7, min_experience_years=3)

        summary = await service.run_matching(ROLE_ID, TENANT_A, filters)

        assert summary.total_candidates == 1
        assert ("list_candidate_employees", TENANT_A, filters) in catalog_repository.call_log

    async def test_other_tenants_employees_are_not_candidates(self, service, catalog_repository):
        catalog_repository.add_role(RoleTestBuilder().build())
        catalog_repository.add_employees(
            EmployeeTestBuilder(1).build(),
            EmployeeTestBuilder(2).with_tenant(TENANT_B).build(),
            EmployeeTestBuilder(3).inactive().build(),
        )

        summary = await service.run_matching(ROLE_ID, TENANT_A)

        assert summary.total_candidates == 1

    async def test_unknown_role_is_not_found(self, service, match_result_repository):
        with pytest.raises(RoleNotFoundError):
            await service.run_matching(ROLE_ID, TENANT_A)

        assert match_result_repository.call_log == []

    async def test_role_of_another_tenant_is_not_found(self, service, catalog_repository):
        catalog_repository.add_role(RoleTestBuilder().with_tenant(TENANT_B).build())

        with pytest.raises(RoleNotFoundError):
            await service.run_matching(ROLE_ID, TENANT_A)

    async def test_foreign_role_is_rejected_even_if_the_catalog_leaks_it(
        self, matching_dependencies
    ):
        leaky = LeakyCatalogRepository()
        leaky.add_role(RoleTestBuilder().with_project_tenant(TENANT_B).build())
        matching_dependencies.catalog_repository = leaky
        service = MatchingApplicationService(matching_dependencies)

        with pytest.raises(RoleNotFoundError):
            await service.run_matching(ROLE_ID, TENANT_A)

    async def test_malformed_role_id_is_invalid_input(self, service):
        with pytest.raises(ValidationError):
            await service.run_matching("role-42", TENANT_A)

    async def test_catalog_failure_aborts_before_writing(
        self, service, catalog_repository, match_result_repository
    ):
        catalog_repository.add_role(RoleTestBuilder().build())
        catalog_repository.should_fail_on_list = True

        with pytest.raises(TransientError):
            await service.run_matching(ROLE_ID, TENANT_A)

        assert match_result_repository.result_sets == {}


# ============================================================================
# Conflict retries
# ============================================================================

class TestConflictRetries:

    async def test_retries_until_the_lock_is_free(
        self, service, catalog_repository, match_result_repository
    ):
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1).build())
        catalog_repository.add_employees(EmployeeTestBuilder(1).with_skills(1).build())
        match_result_repository.conflicts_remaining = 2

        summary = await service.run_matching(ROLE_ID, TENANT_A)

        assert summary.persisted_matches == 1
        replace_calls = [c for c in match_result_repository.call_log if c[0] == "replace_for_role"]
        assert len(replace_calls) == 3

    async def test_gives_up_after_the_retry_budget(
        self, matching_dependencies, catalog_repository, match_result_repository
    ):
        matching_dependencies.policy = MatchingPolicy(
            conflict_max_retries=1, conflict_retry_delay_seconds=0
        )
        service = MatchingApplicationService(matching_dependencies)
        catalog_repository.add_role(RoleTestBuilder().build())
        match_result_repository.conflicts_remaining = 5

        with pytest.raises(ConcurrencyError):
            await service.run_matching(ROLE_ID, TENANT_A)

        replace_calls = [c for c in match_result_repository.call_log if c[0] == "replace_for_role"]
        assert len(replace_calls) == 2


# ============================================================================
# get_matches / set_shortlist
# ============================================================================

class TestReview:

    async def _run(self, service, catalog_repository, assignment_repository):
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1).build())
        catalog_repository.add_employees(
            EmployeeTestBuilder(1).with_skills(1).build(),
            EmployeeTestBuilder(2).with_skills(1).build(),
        )
        book(assignment_repository, 2, 54)
        return await service.run_matching(ROLE_ID, TENANT_A)

    async def test_get_matches_sorted_by_score(
        self, service, catalog_repository, assignment_repository
    ):
        await self._run(service, catalog_repository, assignment_repository)

        matches = await service.get_matches(ROLE_ID, TENANT_A)

        assert [match.employee_id.value for match in matches] == [1, 2]

    async def test_get_matches_shortlisted_only(
        self, service, catalog_repository, assignment_repository
    ):
        await self._run(service, catalog_repository, assignment_repository)

        matches = await service.get_matches(ROLE_ID, TENANT_A, shortlisted_only=True)

        assert [match.employee_id.value for match in matches] == [1]

    async def test_get_matches_for_foreign_role_is_not_found(
        self, service, catalog_repository, assignment_repository
    ):
        await self._run(service, catalog_repository, assignment_repository)

        with pytest.raises(RoleNotFoundError):
            await service.get_matches(ROLE_ID, TENANT_B)

    async def test_set_shortlist_records_reviewer(
        self, service, catalog_repository, assignment_repository, match_result_repository
    ):
        summary = await self._run(service, catalog_repository, assignment_repository)
        target = summary.top_matches[1].result

        updated = await service.set_shortlist(str(target.id), TENANT_A, True, REVIEWER_ID)

        assert updated.is_shortlisted is True
        assert updated.reviewed_by == UserId(REVIEWER_ID)
        assert updated.reviewed_at is not None
        assert ("save_review", str(target.id), True) in match_result_repository.call_log

    async def test_set_shortlist_is_idempotent(
        self, service, catalog_repository, assignment_repository
    ):
        summary = await self._run(service, catalog_repository, assignment_repository)
        result_id = str(summary.top_matches[0].result.id)

        await service.set_shortlist(result_id, TENANT_A, False, REVIEWER_ID)
        again = await service.set_shortlist(result_id, TENANT_A, False, REVIEWER_ID)

        assert again.is_shortlisted is False

    async def test_set_shortlist_on_foreign_result_is_not_found(
        self, service, catalog_repository, assignment_repository
    ):
        summary = await self._run(service, catalog_repository, assignment_repository)

        with pytest.raises(MatchResultNotFoundError):
            await service.set_shortlist(
                str(summary.top_matches[0].result.id), TENANT_B, True, REVIEWER_ID
            )

    async def test_set_shortlist_rejects_malformed_reviewer(self, service):
        with pytest.raises(ValidationError):
            await service.set_shortlist(
                "aaaaaaaa-0000-0000-0000-0000000000ff", TENANT_A, True, "someone"
            )


# ============================================================================
# availability
# ============================================================================

class TestAvailability:

    async def test_free_capacity_over_interval(
        self, service, catalog_repository, assignment_repository
    ):
        catalog_repository.add_employees(EmployeeTestBuilder(1).build())
        book(assignment_repository, 1, 30)
        assignment_repository.seed(
            AssignmentTestBuilder(1).with_allocation(20).between(AS_OF).inactive().build(),
            AssignmentTestBuilder(1).with_allocation(20)
            .between(AS_OF + timedelta(days=60), AS_OF + timedelta(days=90)).build(),
        )

        available = await service.availability(1, TENANT_A, AS_OF, AS_OF + timedelta(days=30))

        assert available == 70

    async def test_open_ended_interval_counts_future_bookings(
        self, service, catalog_repository, assignment_repository
    ):
        catalog_repository.add_employees(EmployeeTestBuilder(1).build())
        assignment_repository.seed(
            AssignmentTestBuilder(1).with_allocation(40).between(date(2026, 1, 1)).build()
        )

        assert await service.availability(1, TENANT_A, AS_OF) == 60

    async def test_employee_of_another_tenant_is_not_found(self, service, catalog_repository):
        catalog_repository.add_employees(EmployeeTestBuilder(1).with_tenant(TENANT_B).build())

        with pytest.raises(EmployeeNotFoundError):
            await service.availability(1, TENANT_A, AS_OF)

    async def test_inverted_interval_is_invalid(self, service, catalog_repository):
        catalog_repository.add_employees(EmployeeTestBuilder(1).build())

        with pytest.raises(ValidationError):
            await service.availability(1, TENANT_A, AS_OF, AS_OF - timedelta(days=1))


# ============================================================================
# Re-running after the ledger changes
# ============================================================================

class TestRebooking:

    async def test_freed_capacity_raises_the_next_run(
        self,
        service,
        assignment_dependencies,
        catalog_repository,
        assignment_repository,
        match_result_repository,
    ):
        assignments = AssignmentApplicationService(assignment_dependencies)
        catalog_repository.add_role(RoleTestBuilder().with_required_skills(1).build())
        catalog_repository.add_employees(
            EmployeeTestBuilder(1).with_skills(1).build(),
            EmployeeTestBuilder(2).with_skills(1).build(),
        )
        [booking] = assignment_repository.seed(
            AssignmentTestBuilder(2)
            .with_allocation(50)
            .between(AS_OF - timedelta(days=30))
            .build()
        )

        await service.run_matching(ROLE_ID, TENANT_A)
        first = {
            result.employee_id.value: result
            for result in match_result_repository.result_sets[(TENANT_A, ROLE_ID)]
        }
        await assignments.update_assignment(booking.id.value, TENANT_A, allocation_percentage=10)
        await service.run_matching(ROLE_ID, TENANT_A)
        second = {
            result.employee_id.value: result
            for result in match_result_repository.result_sets[(TENANT_A, ROLE_ID)]
        }

        assert second[2].sub_scores.availability > first[2].sub_scores.availability
        assert second[2].total_score > first[2].total_score
        assert second[1].total_score == first[1].total_score
        first_ids = {result.id for result in first.values()}
        assert first_ids.isdisjoint(result.id for result in second.values())
