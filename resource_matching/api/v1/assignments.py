"""
Assignment API Endpoints

Allocation ledger operations and employee availability queries.
"""

from datetime import date
from typing import List, Optional

import structlog
from fastapi import APIRouter, Path, Query, status

from resource_matching.api.dependencies import (
    AssignmentServiceDep,
    CallerContextDep,
    MatchingServiceDep,
    map_domain_exception_to_http,
)
from resource_matching.api.schemas.assignment_schemas import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentUpdate,
)
from resource_matching.api.schemas.base import ErrorResponse
from resource_matching.api.schemas.matching_schemas import AvailabilityResponse
from resource_matching.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["assignments"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.post(
    "/assignments",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_assignment(
    request: AssignmentCreate,
    caller: CallerContextDep,
    assignment_service: AssignmentServiceDep,
) -> AssignmentResponse:
    """Book part of an employee's capacity; over-allocation is accepted and logged."""
    try:
        assignment = await assignment_service.create_assignment(
            tenant_id=caller.tenant_id,
            employee_id=request.employee_id,
            allocation_percentage=request.allocation_percentage,
            start_date=request.start_date,
            end_date=request.end_date,
            role_id=str(request.role_id) if request.role_id else None,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return AssignmentResponse.from_domain(assignment)


@router.patch(
    "/assignments/{assignment_id}",
    response_model=AssignmentResponse,
    responses=_ERROR_RESPONSES,
)
async def update_assignment(
    request: AssignmentUpdate,
    caller: CallerContextDep,
    assignment_service: AssignmentServiceDep,
    assignment_id: int = Path(..., gt=0, description="Assignment identifier"),
) -> AssignmentResponse:
    """Change allocation, dates or the active flag of an assignment."""
    try:
        assignment = await assignment_service.update_assignment(
            assignment_id=assignment_id,
            tenant_id=caller.tenant_id,
            allocation_percentage=request.allocation_percentage,
            start_date=request.start_date,
            end_date=request.end_date,
            clear_end_date=request.clear_end_date,
            is_active=request.is_active,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return AssignmentResponse.from_domain(assignment)


@router.delete(
    "/assignments/{assignment_id}",
    response_model=AssignmentResponse,
    responses=_ERROR_RESPONSES,
)
async def deactivate_assignment(
    caller: CallerContextDep,
    assignment_service: AssignmentServiceDep,
    assignment_id: int = Path(..., gt=0, description="Assignment identifier"),
) -> AssignmentResponse:
    """Soft delete: the assignment stops booking capacity but stays in the ledger."""
    try:
        assignment = await assignment_service.deactivate_assignment(
            assignment_id=assignment_id,
            tenant_id=caller.tenant_id,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return AssignmentResponse.from_domain(assignment)


@router.get(
    "/employees/{employee_id}/assignments",
    response_model=List[AssignmentResponse],
    responses=_ERROR_RESPONSES,
)
async def list_assignments(
    caller: CallerContextDep,
    assignment_service: AssignmentServiceDep,
    employee_id: int = Path(..., gt=0, description="Employee identifier"),
    include_inactive: bool = Query(False, description="Include deactivated assignments"),
) -> List[AssignmentResponse]:
    try:
        assignments = await assignment_service.list_assignments(
            employee_id=employee_id,
            tenant_id=caller.tenant_id,
            include_inactive=include_inactive,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return [AssignmentResponse.from_domain(assignment) for assignment in assignments]


@router.get(
    "/employees/{employee_id}/availability",
    response_model=AvailabilityResponse,
    responses=_ERROR_RESPONSES,
)
async def get_availability(
    caller: CallerContextDep,
    matching_service: MatchingServiceDep,
    employee_id: int = Path(..., gt=0, description="Employee identifier"),
    start_date: date = Query(..., description="Interval start (inclusive)"),
    end_date: Optional[date] = Query(None, description="Interval end (exclusive); omit for open-ended"),
) -> AvailabilityResponse:
    """Free allocation percentage of the employee over ``[start_date, end_date)``."""
    try:
        available = await matching_service.availability(
            employee_id=employee_id,
            tenant_id=caller.tenant_id,
            start=start_date,
            end=end_date,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return AvailabilityResponse(
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        available_percentage=available,
    )
