"""Dependency contracts for SkillIngestApplicationService."""

from __future__ import annotations

from dataclasses import dataclass, field

from resource_matching.domain.repositories.catalog_repository import ICatalogRepository
from resource_matching.domain.repositories.skill_repository import IEmployeeSkillRepository
from resource_matching.domain.services.skill_resolver import ResolutionStats, SkillResolver


@dataclass
class SkillIngestDependencies:
    """Dependencies required by SkillIngestApplicationService."""

    skill_resolver: SkillResolver
    employee_skill_repository: IEmployeeSkillRepository
    catalog_repository: ICatalogRepository

    # Process-wide counters shared with matching run logs
    resolution_stats: ResolutionStats = field(default_factory=ResolutionStats)


__all__ = ["SkillIngestDependencies"]
