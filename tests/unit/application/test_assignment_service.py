"""Unit tests for AssignmentApplicationService."""

from datetime import timedelta

import pytest
from structlog.testing import capture_logs

from resource_matching.application.assignment_service import AssignmentApplicationService
from resource_matching.domain.exceptions import (
    AssignmentNotFoundError,
    EmployeeNotFoundError,
    RoleNotFoundError,
    ValidationError,
)
from tests.fixtures.matching_fixtures import (
    AS_OF,
    ROLE_ID,
    TENANT_A,
    TENANT_B,
    AssignmentTestBuilder,
    EmployeeTestBuilder,
    RoleTestBuilder,
)


@pytest.fixture
def service(assignment_dependencies, catalog_repository) -> AssignmentApplicationService:
    catalog_repository.add_employees(EmployeeTestBuilder(1).build())
    catalog_repository.add_role(RoleTestBuilder().build())
    return AssignmentApplicationService(assignment_dependencies)


class TestCreateAssignment:

    async def test_creates_assignment_with_id(self, service):
        assignment = await service.create_assignment(
            TENANT_A, 1, 60, AS_OF, AS_OF + timedelta(days=30), role_id=ROLE_ID
        )

        assert assignment.id is not None
        assert assignment.allocation == 60
        assert str(assignment.role_id) == ROLE_ID
        assert assignment.is_active is True

    async def test_administrative_assignment_has_no_role(self, service):
        assignment = await service.create_assignment(TENANT_A, 1, 20, AS_OF)

        assert assignment.role_id is None
        assert assignment.end_date is None

    @pytest.mark.parametrize("allocation", [0, 101, 12.5])
    async def test_rejects_invalid_allocation(self, service, allocation):
        with pytest.raises(ValidationError):
            await service.create_assignment(TENANT_A, 1, allocation, AS_OF)

    async def test_rejects_end_before_start(self, service):
        with pytest.raises(ValidationError):
            await service.create_assignment(TENANT_A, 1, 50, AS_OF, AS_OF - timedelta(days=1))

    async def test_unknown_employee_is_not_found(self, service):
        with pytest.raises(EmployeeNotFoundError):
            await service.create_assignment(TENANT_A, 99, 50, AS_OF)

    async def test_role_of_another_tenant_is_not_found(self, service, catalog_repository):
        catalog_repository.add_employees(EmployeeTestBuilder(1).with_tenant(TENANT_B).build())

        with pytest.raises(RoleNotFoundError):
            await service.create_assignment(TENANT_B, 1, 50, AS_OF, role_id=ROLE_ID)

    async def test_over_allocation_is_accepted_and_logged(self, service, assignment_repository):
        assignment_repository.seed(AssignmentTestBuilder(1).with_allocation(80).build())

        with capture_logs() as logs:
            assignment = await service.create_assignment(TENANT_A, 1, 40, AS_OF)

        assert assignment.id is not None
        warnings = [log for log in logs if log["event"] == "Employee over-allocated"]
        assert warnings and warnings[0]["booked"] == 80

    async def test_full_booking_is_not_over_allocation(self, service, assignment_repository):
        assignment_repository.seed(AssignmentTestBuilder(1).with_allocation(60).build())

        with capture_logs() as logs:
            await service.create_assignment(TENANT_A, 1, 40, AS_OF)

        assert [log for log in logs if log["event"] == "Employee over-allocated"] == []


class TestUpdateAssignment:

    async def test_changes_allocation_and_keeps_other_fields(self, service, assignment_repository):
        [stored] = assignment_repository.seed(
            AssignmentTestBuilder(1).with_allocation(50)
            .between(AS_OF, AS_OF + timedelta(days=60)).build()
        )

        updated = await service.update_assignment(stored.id.value, TENANT_A, allocation_percentage=30)

        assert updated.allocation == 30
        assert updated.end_date == AS_OF + timedelta(days=60)
        assert updated.created_at == stored.created_at

    async def test_clear_end_date_makes_it_open_ended(self, service, assignment_repository):
        [stored] = assignment_repository.seed(
            AssignmentTestBuilder(1).between(AS_OF, AS_OF + timedelta(days=60)).build()
        )

        updated = await service.update_assignment(stored.id.value, TENANT_A, clear_end_date=True)

        assert updated.end_date is None

    async def test_rejects_inverted_dates(self, service, assignment_repository):
        [stored] = assignment_repository.seed(
            AssignmentTestBuilder(1).between(AS_OF, AS_OF + timedelta(days=60)).build()
        )

        with pytest.raises(ValidationError):
            await service.update_assignment(
                stored.id.value, TENANT_A, start_date=AS_OF + timedelta(days=90)
            )

    async def test_assignment_of_another_tenant_is_not_found(self, service, assignment_repository):
        [stored] = assignment_repository.seed(AssignmentTestBuilder(1).build())

        with pytest.raises(AssignmentNotFoundError):
            await service.update_assignment(stored.id.value, TENANT_B, allocation_percentage=10)


class TestDeactivateAndList:

    async def test_deactivated_assignment_stops_booking_capacity(
        self, service, assignment_repository
    ):
        [stored] = assignment_repository.seed(AssignmentTestBuilder(1).with_allocation(70).build())

        deactivated = await service.deactivate_assignment(stored.id.value, TENANT_A)
        active = await service.list_assignments(1, TENANT_A)
        everything = await service.list_assignments(1, TENANT_A, include_inactive=True)

        assert deactivated.is_active is False
        assert active == []
        assert [assignment.id for assignment in everything] == [stored.id]

    async def test_list_orders_by_start_date(self, service, assignment_repository):
        assignment_repository.seed(
            AssignmentTestBuilder(1).between(AS_OF + timedelta(days=10)).build(),
            AssignmentTestBuilder(1).between(AS_OF).build(),
        )

        assignments = await service.list_assignments(1, TENANT_A)

        assert [assignment.start_date for assignment in assignments] == [
            AS_OF,
            AS_OF + timedelta(days=10),
        ]

    async def test_unknown_assignment_is_not_found(self, service):
        with pytest.raises(AssignmentNotFoundError):
            await service.deactivate_assignment(404, TENANT_A)
