"""Dependency contracts for MatchingApplicationService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable

from resource_matching.domain.entities.matching import MatchingPolicy
from resource_matching.domain.repositories.assignment_repository import IAssignmentRepository
from resource_matching.domain.repositories.catalog_repository import ICatalogRepository
from resource_matching.domain.repositories.match_result_repository import IMatchResultRepository
from resource_matching.domain.services.availability_service import AvailabilityCalculator
from resource_matching.domain.services.matching_service import IMatchingService
from resource_matching.domain.services.skill_resolver import ResolutionStats


@dataclass
class MatchingDependencies:
    """Dependencies required by MatchingApplicationService."""

    # Core repositories
    catalog_repository: ICatalogRepository
    assignment_repository: IAssignmentRepository
    match_result_repository: IMatchResultRepository

    # Domain services
    matching_service: IMatchingService
    availability_calculator: AvailabilityCalculator

    # Run configuration
    policy: MatchingPolicy = field(default_factory=MatchingPolicy)
    resolution_stats: ResolutionStats = field(default_factory=ResolutionStats)
    today: Callable[[], date] = date.today
    now: Callable[[], datetime] = datetime.utcnow


__all__ = ["MatchingDependencies"]
