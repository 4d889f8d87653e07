"""Concrete factory for creating SkillIngestApplicationService dependencies."""

from __future__ import annotations

from resource_matching.application.dependencies.skill_ingest_dependencies import (
    SkillIngestDependencies,
)
from resource_matching.infrastructure.providers.matching_provider import (
    get_resolution_stats,
    get_skill_resolver,
)
from resource_matching.infrastructure.providers.repository_provider import (
    get_catalog_repository,
    get_employee_skill_repository,
)


async def get_skill_ingest_dependencies() -> SkillIngestDependencies:
    """Construct dependencies for the CV skill ingest application service."""
    return SkillIngestDependencies(
        skill_resolver=await get_skill_resolver(),
        employee_skill_repository=await get_employee_skill_repository(),
        catalog_repository=await get_catalog_repository(),
        resolution_stats=await get_resolution_stats(),
    )


__all__ = ["get_skill_ingest_dependencies"]
