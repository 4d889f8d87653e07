"""
Skill API Endpoints

Resolves proposed skills against the canonical skill table and ingests the
skills extracted from an employee's CV.
"""

import structlog
from fastapi import APIRouter, Path

from resource_matching.api.dependencies import (
    CallerContextDep,
    SkillIngestServiceDep,
    map_domain_exception_to_http,
)
from resource_matching.api.schemas.base import ErrorResponse
from resource_matching.api.schemas.skill_schemas import (
    SkillIngestRequest,
    SkillIngestResponse,
    SkillResolveRequest,
    SkillResolveResponse,
)
from resource_matching.application.skill_ingest_service import ExtractedSkill
from resource_matching.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["skills"])


@router.post(
    "/skills/resolve",
    response_model=SkillResolveResponse,
    responses={503: {"model": ErrorResponse}},
)
async def resolve_skill(
    request: SkillResolveRequest,
    caller: CallerContextDep,
    skill_service: SkillIngestServiceDep,
) -> SkillResolveResponse:
    """
    Resolve a proposed ``(id?, skill_name)`` pair to a canonical skill id.

    A miss is a normal response listing the lookup levels that were tried.
    """
    try:
        resolution = await skill_service.resolve_skill(request.id, request.skill_name)
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return SkillResolveResponse.from_domain(resolution)


@router.post(
    "/employees/{employee_id}/skills/ingest",
    response_model=SkillIngestResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def ingest_cv_skills(
    request: SkillIngestRequest,
    caller: CallerContextDep,
    skill_service: SkillIngestServiceDep,
    employee_id: int = Path(..., gt=0, description="Employee identifier"),
) -> SkillIngestResponse:
    """Link the resolvable, non-duplicate extracted skills to the employee."""
    skills = [
        ExtractedSkill(
            name=payload.skill_name,
            candidate_id=payload.id,
            proficiency=payload.proficiency,
            is_certified=payload.is_certified,
        )
        for payload in request.skills
    ]

    try:
        report = await skill_service.ingest_cv_skills(
            employee_id=employee_id,
            tenant_id=caller.tenant_id,
            skills=skills,
            payload_tenant_id=request.tenant_id,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return SkillIngestResponse.from_domain(report)
