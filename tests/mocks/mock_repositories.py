"""
Mock repository implementations for testing.

These mocks implement the repository interfaces and maintain
test data in memory while tracking method calls for verification.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from resource_matching.domain.entities.assignment import Assignment
from resource_matching.domain.entities.employee import Employee, EmployeeSkill
from resource_matching.domain.entities.match_result import MatchResult
from resource_matching.domain.entities.matching import CandidateFilters
from resource_matching.domain.entities.project import RoleWithProject
from resource_matching.domain.entities.skill import Skill
from resource_matching.domain.exceptions import (
    AssignmentNotFoundError,
    ConcurrencyError,
    MatchResultNotFoundError,
    TransientError,
)
from resource_matching.domain.repositories import (
    IAssignmentRepository,
    ICatalogRepository,
    IEmployeeSkillRepository,
    IMatchResultRepository,
    ISkillRepository,
)
from resource_matching.domain.value_objects import (
    AssignmentId,
    DateInterval,
    EmployeeId,
    MatchResultId,
    RoleId,
    SkillId,
    TenantId,
)


class MockCatalogRepository(ICatalogRepository):
    """Mock catalog repository for testing."""

    def __init__(self):
        self.roles: Dict[str, RoleWithProject] = {}
        self.employees: Dict[Tuple[str, int], Employee] = {}
        self.call_log: List[tuple] = []
        self.should_fail_on_list = False

    def add_role(self, role_with_project: RoleWithProject) -> None:
        self.roles[str(role_with_project.role.id)] = role_with_project

    def add_employees(self, *employees: Employee) -> None:
        for employee in employees:
            self.employees[(str(employee.tenant_id), employee.id.value)] = employee

    async def get_role_with_project(
        self,
        role_id: RoleId,
        tenant_id: TenantId
    ) -> Optional[RoleWithProject]:
        self.call_log.append(("get_role_with_project", str(role_id), str(tenant_id)))
        loaded = self.roles.get(str(role_id))
        if loaded is None:
            return None
        if loaded.role.tenant_id != tenant_id or loaded.project.tenant_id != tenant_id:
            return None
        return loaded

    async def list_candidate_employees(
        self,
        tenant_id: TenantId,
        filters: CandidateFilters,
        as_of: date
    ) -> List[Employee]:
        self.call_log.append(("list_candidate_employees", str(tenant_id), filters))

        if self.should_fail_on_list:
            raise TransientError("Mock catalog unavailable")

        candidates = []
        for (tenant, _), employee in sorted(self.employees.items(), key=lambda item: item[0][1]):
            if tenant != str(tenant_id) or not employee.is_active:
                continue
            if filters.department_id is not None and employee.department_id != filters.department_id:
                continue
            if (
                filters.min_experience_years is not None
                and employee.years_of_experience(as_of) < filters.min_experience_years
            ):
                continue
            candidates.append(employee)
        return candidates

    async def get_employee(
        self,
        employee_id: EmployeeId,
        tenant_id: TenantId
    ) -> Optional[Employee]:
        self.call_log.append(("get_employee", employee_id.value, str(tenant_id)))
        return self.employees.get((str(tenant_id), employee_id.value))


class MockAssignmentRepository(IAssignmentRepository):
    """Mock assignment ledger for testing."""

    def __init__(self):
        self.assignments: Dict[int, Assignment] = {}
        self.call_log: List[tuple] = []
        self._next_id = 1

    def seed(self, *assignments: Assignment) -> List[Assignment]:
        stored = []
        for assignment in assignments:
            assignment.id = AssignmentId(self._next_id)
            self.assignments[self._next_id] = assignment
            self._next_id += 1
            stored.append(assignment)
        return stored

    async def list_active_overlapping(
        self,
        tenant_id: TenantId,
        employee_ids: Iterable[EmployeeId],
        interval: DateInterval
    ) -> Dict[int, List[Assignment]]:
        wanted = {employee_id.value for employee_id in employee_ids}
        self.call_log.append(("list_active_overlapping", sorted(wanted), interval))

        grouped: Dict[int, List[Assignment]] = {}
        for assignment in self.assignments.values():
            if assignment.tenant_id != tenant_id or not assignment.is_active:
                continue
            if assignment.employee_id.value not in wanted:
                continue
            if not assignment.interval.overlaps(interval):
                continue
            grouped.setdefault(assignment.employee_id.value, []).append(assignment)
        return grouped

    async def list_for_employee(
        self,
        tenant_id: TenantId,
        employee_id: EmployeeId,
        include_inactive: bool = False
    ) -> List[Assignment]:
        self.call_log.append(("list_for_employee", employee_id.value, include_inactive))
        return sorted(
            (
                assignment for assignment in self.assignments.values()
                if assignment.tenant_id == tenant_id
                and assignment.employee_id == employee_id
                and (include_inactive or assignment.is_active)
            ),
            key=lambda assignment: assignment.start_date,
        )

    async def get_by_id(
        self,
        assignment_id: AssignmentId,
        tenant_id: TenantId
    ) -> Optional[Assignment]:
        self.call_log.append(("get_by_id", assignment_id.value, str(tenant_id)))
        assignment = self.assignments.get(assignment_id.value)
        if assignment is None or assignment.tenant_id != tenant_id:
            return None
        return assignment

    async def save(self, assignment: Assignment) -> Assignment:
        self.call_log.append(("save", assignment.id.value if assignment.id else None))
        if assignment.id is None:
            return self.seed(assignment)[0]
        if assignment.id.value not in self.assignments:
            raise AssignmentNotFoundError(f"Assignment {assignment.id} not found")
        self.assignments[assignment.id.value] = assignment
        return assignment


class MockMatchResultRepository(IMatchResultRepository):
    """Mock result store for testing.

    ``conflicts_remaining`` makes that many ``replace_for_role`` calls fail as if
    another run held the role lock.
    """

    def __init__(self):
        self.result_sets: Dict[Tuple[str, str], List[MatchResult]] = {}
        self.call_log: List[tuple] = []
        self.conflicts_remaining = 0

    async def replace_for_role(
        self,
        tenant_id: TenantId,
        role_id: RoleId,
        results: Sequence[MatchResult]
    ) -> None:
        self.call_log.append(("replace_for_role", str(role_id), len(results)))
        if self.conflicts_remaining > 0:
            self.conflicts_remaining -= 1
            raise ConcurrencyError("Mock role lock held")
        self.result_sets[(str(tenant_id), str(role_id))] = list(results)

    async def list_for_role(
        self,
        tenant_id: TenantId,
        role_id: RoleId,
        shortlisted_only: bool = False,
        limit: Optional[int] = None
    ) -> List[MatchResult]:
        self.call_log.append(("list_for_role", str(role_id), shortlisted_only))
        results = [
            result for result in self.result_sets.get((str(tenant_id), str(role_id)), [])
            if not shortlisted_only or result.is_shortlisted
        ]
        results.sort(key=lambda result: (-result.total_score, result.employee_id.value))
        return results[:limit] if limit is not None else results

    async def get_by_id(
        self,
        result_id: MatchResultId,
        tenant_id: TenantId
    ) -> Optional[MatchResult]:
        self.call_log.append(("get_by_id", str(result_id), str(tenant_id)))
        for (tenant, _), results in self.result_sets.items():
            if tenant != str(tenant_id):
                continue
            for result in results:
                if result.id == result_id:
                    return result
        return None

    async def save_review(self, result: MatchResult) -> MatchResult:
        self.call_log.append(("save_review", str(result.id), result.is_shortlisted))
        stored = await self.get_by_id(result.id, result.tenant_id)
        if stored is None:
            raise MatchResultNotFoundError(f"Match result {result.id} not found")
        stored.is_shortlisted = result.is_shortlisted
        stored.reviewed_by = result.reviewed_by
        stored.reviewed_at = result.reviewed_at
        return stored


class MockSkillRepository(ISkillRepository):
    """Mock master skill table; lookups are case-insensitive and lowest-id-first."""

    def __init__(self, skills: Iterable[Skill] = ()):
        self.skills: Dict[int, Skill] = {skill.id.value: skill for skill in skills}
        self.call_log: List[tuple] = []

    def add(self, *skills: Skill) -> None:
        for skill in skills:
            self.skills[skill.id.value] = skill

    def _first(self, predicate) -> Optional[Skill]:
        for skill_id in sorted(self.skills):
            if predicate(self.skills[skill_id]):
                return self.skills[skill_id]
        return None

    async def get_by_id(self, skill_id: SkillId) -> Optional[Skill]:
        self.call_log.append(("get_by_id", skill_id.value))
        return self.skills.get(skill_id.value)

    async def find_first_by_name(self, name: str) -> Optional[Skill]:
        self.call_log.append(("find_first_by_name", name))
        needle = name.lower()
        return self._first(lambda skill: skill.name.lower() == needle)

    async def find_first_by_known_name(self, name: str) -> Optional[Skill]:
        self.call_log.append(("find_first_by_known_name", name))
        needle = name.lower()
        return self._first(lambda skill: (skill.known_name or "").lower() == needle)

    async def find_first_name_containing(self, name: str) -> Optional[Skill]:
        self.call_log.append(("find_first_name_containing", name))
        needle = name.lower()
        return self._first(lambda skill: needle in skill.name.lower())

    async def find_first_known_name_containing(self, name: str) -> Optional[Skill]:
        self.call_log.append(("find_first_known_name_containing", name))
        needle = name.lower()
        return self._first(
            lambda skill: skill.known_name is not None and needle in skill.known_name.lower()
        )

    async def find_first_by_synonym(self, name: str) -> Optional[Skill]:
        self.call_log.append(("find_first_by_synonym", name))
        needle = name.lower()
        return self._first(
            lambda skill: any(synonym.lower() == needle for synonym in skill.synonyms)
        )


class MockEmployeeSkillRepository(IEmployeeSkillRepository):
    """Mock employee skill links.

    Skill ids listed in ``inserted_concurrently`` behave as if another writer
    stored them between the duplicate check and the insert.
    """

    def __init__(self):
        self.links: Dict[Tuple[str, int], Dict[int, EmployeeSkill]] = {}
        self.call_log: List[tuple] = []
        self.inserted_concurrently: Set[int] = set()

    def seed(self, tenant_id: str, *links: EmployeeSkill) -> None:
        for link in links:
            self.links.setdefault((tenant_id, link.employee_id.value), {})[link.skill_id.value] = link

    async def list_skill_ids(self, tenant_id: TenantId, employee_id: EmployeeId) -> Set[int]:
        self.call_log.append(("list_skill_ids", employee_id.value))
        return set(self.links.get((str(tenant_id), employee_id.value), {}))

    async def add(self, tenant_id: TenantId, employee_skill: EmployeeSkill) -> bool:
        self.call_log.append(("add", employee_skill.employee_id.value, employee_skill.skill_id.value))
        key = (str(tenant_id), employee_skill.employee_id.value)
        existing = self.links.setdefault(key, {})
        if employee_skill.skill_id.value in self.inserted_concurrently:
            existing[employee_skill.skill_id.value] = employee_skill
            return False
        if employee_skill.skill_id.value in existing:
            return False
        existing[employee_skill.skill_id.value] = employee_skill
        return True


__all__ = [
    "MockCatalogRepository",
    "MockAssignmentRepository",
    "MockMatchResultRepository",
    "MockSkillRepository",
    "MockEmployeeSkillRepository",
]
