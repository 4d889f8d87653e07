"""Application layer orchestrator for matching runs and result-set review."""

from __future__ import annotations

import asyncio
import time
from datetime import date
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence
from uuid import uuid4

import structlog

from resource_matching.domain.entities.assignment import Assignment
from resource_matching.domain.entities.employee import Employee
from resource_matching.domain.entities.match_result import CandidateEvaluation, MatchResult
from resource_matching.domain.entities.matching import (
    CandidateFilters,
    MatchingSummary,
    RankedMatch,
)
from resource_matching.domain.entities.project import ProjectRole, RoleWithProject
from resource_matching.domain.exceptions import (
    ConcurrencyError,
    EmployeeNotFoundError,
    MatchResultNotFoundError,
    RoleNotFoundError,
    ScoringError,
    ValidationError,
)
from resource_matching.domain.value_objects import (
    DateInterval,
    EmployeeId,
    MatchResultId,
    RoleId,
    TenantId,
    UserId,
)

if TYPE_CHECKING:
    from resource_matching.application.dependencies.matching_dependencies import (
        MatchingDependencies,
    )


class MatchingApplicationService:
    """Coordinates matching runs across the catalog, the ledger and the result store.

    The service owns no state of its own: a run is a function of the role, the
    candidate pool, the assignment ledger and today's date. Per-candidate scoring
    fans out under a semaphore; the result-set replacement is a single shielded
    repository call, so cancelling a run can only happen before anything is
    written.
    """

    def __init__(self, dependencies: MatchingDependencies) -> None:
        """Initialize with injected dependencies.

        Args:
            dependencies: Repositories, domain services and run policy
        """
        self._deps = dependencies
        self._logger = structlog.get_logger(__name__)

    async def run_matching(
        self,
        role_id: str,
        tenant_id: str,
        filters: Optional[CandidateFilters] = None,
    ) -> MatchingSummary:
        """Score every eligible employee against a role and replace its result set.

        Args:
            role_id: Role to match
            tenant_id: Caller's tenant; the role must belong to it
            filters: Optional department / minimum-experience narrowing

        Returns:
            MatchingSummary with the top inline matches joined with employee detail

        Raises:
            RoleNotFoundError: If the role or its project is not visible to the tenant
            ConcurrencyError: If another run kept the role locked past the retry budget
        """
        started = time.perf_counter()
        policy = self._deps.policy
        tenant = TenantId(tenant_id)
        role_vo = self._parse_role_id(role_id)
        filters = filters or CandidateFilters()

        loaded = await self._load_role(role_vo, tenant)
        role = loaded.role
        as_of = self._deps.today()
        interval = loaded.project.staffing_interval(as_of)

        self._logger.info(
            "Matching run started",
            role_id=str(role_vo),
            tenant_id=str(tenant),
            department_id=filters.department_id,
            min_experience_years=filters.min_experience_years,
        )

        # Candidate and ledger loading failures are fatal to the run
        candidates = await self._deps.catalog_repository.list_candidate_employees(
            tenant, filters, as_of
        )
        bookings: Dict[int, List[Assignment]] = {}
        if candidates:
            bookings = await self._deps.assignment_repository.list_active_overlapping(
                tenant, [employee.id for employee in candidates], interval
            )

        evaluations = await self._score_candidates(candidates, role, bookings, interval, as_of)
        skipped = len(candidates) - len(evaluations)

        qualified = [
            evaluation for evaluation in evaluations
            if policy.qualifies(evaluation.total_score)
        ]
        retained = self._deps.matching_service.rank(qualified)[: policy.max_persisted_results]

        created_at = self._deps.now()
        results = [
            MatchResult.from_evaluation(
                evaluation,
                result_id=MatchResultId(uuid4()),
                tenant_id=tenant,
                role_id=role_vo,
                shortlisted=policy.auto_shortlists(evaluation.total_score),
                created_at=created_at,
            )
            for evaluation in retained
        ]

        # Once persistence starts it runs to completion even if the caller is cancelled
        await asyncio.shield(self._replace_results(tenant, role_vo, results))

        employees_by_id = {employee.id.value: employee for employee in candidates}
        top_matches = [
            RankedMatch(result=result, employee=employees_by_id[result.employee_id.value])
            for result in results[: policy.top_inline_results]
        ]

        duration_ms = int((time.perf_counter() - started) * 1000)
        self._logger.info(
            "Matching run completed",
            role_id=str(role_vo),
            tenant_id=str(tenant),
            candidates_evaluated=len(candidates),
            qualified_count=len(qualified),
            persisted_count=len(results),
            skipped_count=skipped,
            threshold=policy.min_score_threshold,
            duration_ms=duration_ms,
            skill_resolver=self._deps.resolution_stats.as_dict(),
        )

        return MatchingSummary(
            role_id=role_vo,
            total_candidates=len(candidates),
            qualified_matches=len(qualified),
            persisted_matches=len(results),
            top_matches=top_matches,
            skipped_candidates=skipped,
            duration_ms=duration_ms,
        )

    async def get_matches(
        self,
        role_id: str,
        tenant_id: str,
        shortlisted_only: bool = False,
    ) -> List[MatchResult]:
        """List the role's current result set, best score first.

        Raises:
            RoleNotFoundError: If the role is not visible to the tenant
        """
        tenant = TenantId(tenant_id)
        role_vo = self._parse_role_id(role_id)
        await self._load_role(role_vo, tenant)

        return await self._deps.match_result_repository.list_for_role(
            tenant, role_vo, shortlisted_only=shortlisted_only
        )

    async def set_shortlist(
        self,
        result_id: str,
        tenant_id: str,
        is_shortlisted: bool,
        reviewer_id: str,
    ) -> MatchResult:
        """Toggle a result's shortlist flag and stamp the reviewer.

        Repeating the same call is idempotent apart from the reviewer metadata.

        Raises:
            MatchResultNotFoundError: If the result is not visible to the tenant
        """
        tenant = TenantId(tenant_id)
        try:
            result_vo = MatchResultId(result_id)
            reviewer = UserId(reviewer_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc

        result = await self._deps.match_result_repository.get_by_id(result_vo, tenant)
        if result is None:
            raise MatchResultNotFoundError(f"Match result {result_id} not found")

        result.set_shortlist(is_shortlisted, reviewer, reviewed_at=self._deps.now())
        saved = await self._deps.match_result_repository.save_review(result)

        self._logger.info(
            "Match result shortlist updated",
            result_id=str(result_vo),
            tenant_id=str(tenant),
            is_shortlisted=is_shortlisted,
            reviewer_id=str(reviewer),
        )
        return saved

    async def availability(
        self,
        employee_id: int,
        tenant_id: str,
        start: date,
        end: Optional[date] = None,
    ) -> int:
        """Free allocation percentage of an employee over ``[start, end)``.

        Raises:
            EmployeeNotFoundError: If the employee is not visible to the tenant
            ValidationError: If the interval is inverted
        """
        tenant = TenantId(tenant_id)
        try:
            employee_vo = EmployeeId(employee_id)
            interval = DateInterval(start=start, end=end)
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc

        employee = await self._deps.catalog_repository.get_employee(employee_vo, tenant)
        if employee is None:
            raise EmployeeNotFoundError(f"Employee {employee_id} not found")

        bookings = await self._deps.assignment_repository.list_active_overlapping(
            tenant, [employee_vo], interval
        )
        return self._deps.availability_calculator.available(
            bookings.get(employee_vo.value, []), interval
        )

    async def _load_role(self, role_id: RoleId, tenant: TenantId) -> RoleWithProject:
        loaded = await self._deps.catalog_repository.get_role_with_project(role_id, tenant)
        # Foreign roles look exactly like missing ones
        if loaded is None or loaded.role.tenant_id != tenant or loaded.project.tenant_id != tenant:
            raise RoleNotFoundError(f"Project role {role_id} not found")
        return loaded

    async def _score_candidates(
        self,
        candidates: Sequence[Employee],
        role: ProjectRole,
        bookings: Dict[int, List[Assignment]],
        interval: DateInterval,
        as_of: date,
    ) -> List[CandidateEvaluation]:
        semaphore = asyncio.Semaphore(self._deps.policy.max_parallelism)

        async def score_one(employee: Employee) -> Optional[CandidateEvaluation]:
            async with semaphore:
                available = self._deps.availability_calculator.available(
                    bookings.get(employee.id.value, []), interval
                )
                try:
                    return self._deps.matching_service.evaluate(employee, role, available, as_of)
                except ScoringError as exc:
                    self._logger.warning(
                        "Candidate scoring failed; skipping",
                        role_id=str(role.id),
                        employee_id=employee.id.value,
                        error=str(exc),
                        error_type=type(exc).__name__,
                    )
                    return None

        outcomes = await asyncio.gather(*(score_one(employee) for employee in candidates))
        return [evaluation for evaluation in outcomes if evaluation is not None]

    async def _replace_results(
        self,
        tenant: TenantId,
        role_id: RoleId,
        results: List[MatchResult],
    ) -> None:
        policy = self._deps.policy
        attempt = 0
        while True:
            try:
                await self._deps.match_result_repository.replace_for_role(tenant, role_id, results)
                return
            except ConcurrencyError:
                attempt += 1
                if attempt > policy.conflict_max_retries:
                    self._logger.error(
                        "Matching run gave up on a locked role",
                        role_id=str(role_id),
                        tenant_id=str(tenant),
                        attempts=attempt,
                    )
                    raise
                self._logger.warning(
                    "Result set locked by a concurrent run; retrying",
                    role_id=str(role_id),
                    tenant_id=str(tenant),
                    attempt=attempt,
                )
                await asyncio.sleep(policy.conflict_retry_delay_seconds * attempt)

    @staticmethod
    def _parse_role_id(role_id: str) -> RoleId:
        try:
            return RoleId(role_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid role id: {role_id}") from exc


__all__ = ["MatchingApplicationService"]
