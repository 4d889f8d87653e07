"""API request/response schemas."""

from resource_matching.api.schemas.assignment_schemas import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentUpdate,
)
from resource_matching.api.schemas.base import ErrorResponse
from resource_matching.api.schemas.matching_schemas import (
    AvailabilityResponse,
    MatchingRunRequest,
    MatchingSummaryResponse,
    MatchResultResponse,
    ShortlistRequest,
)
from resource_matching.api.schemas.skill_schemas import (
    SkillIngestRequest,
    SkillIngestResponse,
    SkillResolveRequest,
    SkillResolveResponse,
)

__all__ = [
    "AssignmentCreate",
    "AssignmentResponse",
    "AssignmentUpdate",
    "AvailabilityResponse",
    "ErrorResponse",
    "MatchingRunRequest",
    "MatchingSummaryResponse",
    "MatchResultResponse",
    "ShortlistRequest",
    "SkillIngestRequest",
    "SkillIngestResponse",
    "SkillResolveRequest",
    "SkillResolveResponse",
]
