"""
Matching API Endpoints

Runs the matching engine for a project role and exposes its persisted result
set and shortlist review. Every call is scoped to the caller's tenant.
"""

from typing import List, Optional

import structlog
from fastapi import APIRouter, Body, Path, Query

from resource_matching.api.dependencies import (
    CallerContextDep,
    MatchingServiceDep,
    map_domain_exception_to_http,
)
from resource_matching.api.schemas.base import ErrorResponse
from resource_matching.api.schemas.matching_schemas import (
    MatchingRunRequest,
    MatchingSummaryResponse,
    MatchResultResponse,
    ShortlistRequest,
)
from resource_matching.domain.entities.matching import CandidateFilters
from resource_matching.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["matching"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.post(
    "/project-roles/{role_id}/match",
    response_model=MatchingSummaryResponse,
    responses=_ERROR_RESPONSES,
)
async def run_matching(
    caller: CallerContextDep,
    matching_service: MatchingServiceDep,
    role_id: str = Path(..., description="Project role identifier"),
    request: Optional[MatchingRunRequest] = Body(None),
) -> MatchingSummaryResponse:
    """
    Score every eligible employee against the role and replace its result set.

    Returns the top matches inline, joined with employee detail. Re-running
    with unchanged inputs reproduces the same scores.
    """
    filters = CandidateFilters(
        department_id=request.department_id if request else None,
        min_experience_years=request.min_experience_years if request else None,
    )

    try:
        summary = await matching_service.run_matching(
            role_id=role_id,
            tenant_id=caller.tenant_id,
            filters=filters,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return MatchingSummaryResponse.from_domain(summary)


@router.get(
    "/project-roles/{role_id}/matches",
    response_model=List[MatchResultResponse],
    responses=_ERROR_RESPONSES,
)
async def get_matches(
    caller: CallerContextDep,
    matching_service: MatchingServiceDep,
    role_id: str = Path(..., description="Project role identifier"),
    shortlisted_only: bool = Query(False, description="Return only shortlisted results"),
) -> List[MatchResultResponse]:
    """List the role's current result set, best score first."""
    try:
        results = await matching_service.get_matches(
            role_id=role_id,
            tenant_id=caller.tenant_id,
            shortlisted_only=shortlisted_only,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return [MatchResultResponse.from_domain(result) for result in results]


@router.patch(
    "/matching-results/{result_id}/shortlist",
    response_model=MatchResultResponse,
    responses=_ERROR_RESPONSES,
)
async def set_shortlist(
    request: ShortlistRequest,
    caller: CallerContextDep,
    matching_service: MatchingServiceDep,
    result_id: str = Path(..., description="Match result identifier"),
) -> MatchResultResponse:
    """Toggle the shortlist flag of a result and record the reviewer."""
    reviewer_id = caller.require_user()

    try:
        result = await matching_service.set_shortlist(
            result_id=result_id,
            tenant_id=caller.tenant_id,
            is_shortlisted=request.is_shortlisted,
            reviewer_id=reviewer_id,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return MatchResultResponse.from_domain(result)
