"""Application layer entry points.

Holds use-case services that coordinate domain logic with adapters.

Note: Services are imported directly from their modules to avoid circular imports.
Use:
    from resource_matching.application.matching_service import MatchingApplicationService
    from resource_matching.application.skill_ingest_service import SkillIngestApplicationService
    from resource_matching.application.assignment_service import AssignmentApplicationService
"""

# Services are NOT imported here to avoid circular dependencies with API layer
# Import directly from submodules when needed

__all__ = [
    "AssignmentApplicationService",
    "MatchingApplicationService",
    "SkillIngestApplicationService",
]
