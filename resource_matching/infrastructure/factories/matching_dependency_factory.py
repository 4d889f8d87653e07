"""Concrete factory for creating MatchingApplicationService dependencies."""

from __future__ import annotations

from resource_matching.application.dependencies.matching_dependencies import MatchingDependencies
from resource_matching.infrastructure.providers.matching_provider import (
    get_availability_calculator,
    get_matching_policy,
    get_matching_service,
    get_resolution_stats,
)
from resource_matching.infrastructure.providers.repository_provider import (
    get_assignment_repository,
    get_catalog_repository,
    get_match_result_repository,
)


async def get_matching_dependencies() -> MatchingDependencies:
    """
    Construct dependencies for the matching application service.

    Repositories and domain services come from providers (singletons with
    async lock protection); the policy is read from settings on every call.
    """
    return MatchingDependencies(
        catalog_repository=await get_catalog_repository(),
        assignment_repository=await get_assignment_repository(),
        match_result_repository=await get_match_result_repository(),
        matching_service=await get_matching_service(),
        availability_calculator=await get_availability_calculator(),
        policy=get_matching_policy(),
        resolution_stats=await get_resolution_stats(),
    )


__all__ = ["get_matching_dependencies"]
