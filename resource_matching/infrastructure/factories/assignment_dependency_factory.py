"""Concrete factory for creating AssignmentApplicationService dependencies."""

from __future__ import annotations

from resource_matching.application.dependencies.assignment_dependencies import (
    AssignmentDependencies,
)
from resource_matching.infrastructure.providers.matching_provider import (
    get_availability_calculator,
)
from resource_matching.infrastructure.providers.repository_provider import (
    get_assignment_repository,
    get_catalog_repository,
)


async def get_assignment_dependencies() -> AssignmentDependencies:
    """Construct dependencies for the assignment ledger application service."""
    return AssignmentDependencies(
        assignment_repository=await get_assignment_repository(),
        catalog_repository=await get_catalog_repository(),
        availability_calculator=await get_availability_calculator(),
    )


__all__ = ["get_assignment_dependencies"]
