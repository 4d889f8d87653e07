"""
API-specific dependencies for application services with dependency injection.

This module provides FastAPI dependency injection helpers for application services,
bridging the API layer with the hexagonal architecture's application services,
plus the caller context and the domain-to-HTTP error mapping.
"""

from dataclasses import dataclass
from typing import Annotated, Optional
from uuid import UUID

import structlog
from fastapi import Depends, Header, HTTPException

from resource_matching.application.assignment_service import AssignmentApplicationService
from resource_matching.application.matching_service import MatchingApplicationService
from resource_matching.application.skill_ingest_service import SkillIngestApplicationService
from resource_matching.domain.exceptions import DomainException, ErrorKind
from resource_matching.infrastructure.factories.assignment_dependency_factory import (
    get_assignment_dependencies,
)
from resource_matching.infrastructure.factories.matching_dependency_factory import (
    get_matching_dependencies,
)
from resource_matching.infrastructure.factories.skill_ingest_dependency_factory import (
    get_skill_ingest_dependencies,
)

logger = structlog.get_logger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.TENANT_MISMATCH: 403,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.TRANSIENT: 503,
    ErrorKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class CallerContext:
    """Identity of the caller as asserted by the upstream auth gateway."""

    tenant_id: str
    user_id: Optional[str] = None

    def require_user(self) -> str:
        if not self.user_id:
            raise HTTPException(
                status_code=400,
                detail={"error": ErrorKind.INVALID_INPUT.value, "message": "X-User-ID header is required"},
            )
        return self.user_id


def _parse_uuid_header(name: str, value: str) -> str:
    try:
        return str(UUID(value))
    except (TypeError, ValueError) as e:
        raise HTTPException(
            status_code=400,
            detail={"error": ErrorKind.INVALID_INPUT.value, "message": f"{name} header must be a UUID"},
        ) from e


async def get_caller_context(
    x_tenant_id: Annotated[str, Header(description="Caller tenant id")],
    x_user_id: Annotated[Optional[str], Header(description="Caller user id")] = None,
) -> CallerContext:
    """Read the caller's tenant and user from gateway headers."""
    return CallerContext(
        tenant_id=_parse_uuid_header("X-Tenant-ID", x_tenant_id),
        user_id=_parse_uuid_header("X-User-ID", x_user_id) if x_user_id else None,
    )


# Application Service Dependencies
async def get_matching_service() -> MatchingApplicationService:
    """Create MatchingApplicationService with injected dependencies."""
    try:
        dependencies = await get_matching_dependencies()
        return MatchingApplicationService(dependencies)
    except Exception as e:
        logger.error("Failed to create matching service", error=str(e))
        raise HTTPException(
            status_code=503,
            detail={"error": ErrorKind.TRANSIENT.value, "message": "Matching service unavailable"}
        ) from e


async def get_skill_ingest_service() -> SkillIngestApplicationService:
    """Create SkillIngestApplicationService with injected dependencies."""
    try:
        dependencies = await get_skill_ingest_dependencies()
        return SkillIngestApplicationService(dependencies)
    except Exception as e:
        logger.error("Failed to create skill ingest service", error=str(e))
        raise HTTPException(
            status_code=503,
            detail={"error": ErrorKind.TRANSIENT.value, "message": "Skill service unavailable"}
        ) from e


async def get_assignment_service() -> AssignmentApplicationService:
    """Create AssignmentApplicationService with injected dependencies."""
    try:
        dependencies = await get_assignment_dependencies()
        return AssignmentApplicationService(dependencies)
    except Exception as e:
        logger.error("Failed to create assignment service", error=str(e))
        raise HTTPException(
            status_code=503,
            detail={"error": ErrorKind.TRANSIENT.value, "message": "Assignment service unavailable"}
        ) from e


# Type aliases for dependency injection
CallerContextDep = Annotated[CallerContext, Depends(get_caller_context)]
MatchingServiceDep = Annotated[MatchingApplicationService, Depends(get_matching_service)]
SkillIngestServiceDep = Annotated[SkillIngestApplicationService, Depends(get_skill_ingest_service)]
AssignmentServiceDep = Annotated[AssignmentApplicationService, Depends(get_assignment_service)]


# Domain Exception Handlers
def map_domain_exception_to_http(exception: Exception) -> HTTPException:
    """Map domain exceptions to HTTP responses carrying the error kind and a message."""

    if isinstance(exception, DomainException):
        status_code = _STATUS_BY_KIND.get(exception.error_kind, 500)
        if status_code == 500:
            logger.error(
                "Unhandled domain exception",
                exception_type=type(exception).__name__,
                error=str(exception),
            )
            return HTTPException(
                status_code=500,
                detail={"error": ErrorKind.INTERNAL.value, "message": "Internal server error"},
            )
        return HTTPException(status_code=status_code, detail=exception.to_dict())

    # Non-domain exception - log and return generic error
    logger.error(
        "Non-domain exception in mapping",
        exception_type=type(exception).__name__,
        error=str(exception),
    )
    return HTTPException(
        status_code=500,
        detail={"error": ErrorKind.INTERNAL.value, "message": "Internal server error"},
    )


__all__ = [
    "CallerContext",
    "get_caller_context",
    "get_matching_service",
    "get_skill_ingest_service",
    "get_assignment_service",
    "CallerContextDep",
    "MatchingServiceDep",
    "SkillIngestServiceDep",
    "AssignmentServiceDep",
    "map_domain_exception_to_http",
]
