"""Pytest fixtures for provider-based architecture."""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date, datetime

import pytest

from resource_matching.application.dependencies.assignment_dependencies import (
    AssignmentDependencies,
)
from resource_matching.application.dependencies.matching_dependencies import (
    MatchingDependencies,
)
from resource_matching.application.dependencies.skill_ingest_dependencies import (
    SkillIngestDependencies,
)
from resource_matching.core.transaction_manager import reset_transaction_manager
from resource_matching.domain.entities.matching import MatchingPolicy
from resource_matching.domain.services.availability_service import AvailabilityCalculator
from resource_matching.domain.services.matching_service import MatchingService
from resource_matching.domain.services.skill_resolver import ResolutionStats, SkillResolver
from resource_matching.infrastructure.providers.matching_provider import reset_matching_services
from resource_matching.infrastructure.providers.repository_provider import reset_repositories
from tests.fixtures.matching_fixtures import AS_OF, TENANT_A
from tests.mocks.mock_repositories import (
    MockAssignmentRepository,
    MockCatalogRepository,
    MockEmployeeSkillRepository,
    MockMatchResultRepository,
    MockSkillRepository,
)


@pytest.fixture(autouse=True)
async def reset_provider_state() -> AsyncIterator[None]:
    """Ensure each test starts with clean provider singletons."""
    await reset_repositories()
    await reset_matching_services()
    reset_transaction_manager()
    yield
    await reset_repositories()
    await reset_matching_services()
    reset_transaction_manager()


@pytest.fixture
def tenant_id() -> str:
    return TENANT_A


@pytest.fixture
def catalog_repository() -> MockCatalogRepository:
    return MockCatalogRepository()


@pytest.fixture
def assignment_repository() -> MockAssignmentRepository:
    return MockAssignmentRepository()


@pytest.fixture
def match_result_repository() -> MockMatchResultRepository:
    return MockMatchResultRepository()


@pytest.fixture
def skill_repository() -> MockSkillRepository:
    return MockSkillRepository()


@pytest.fixture
def employee_skill_repository() -> MockEmployeeSkillRepository:
    return MockEmployeeSkillRepository()


@pytest.fixture
def matching_dependencies(
    catalog_repository,
    assignment_repository,
    match_result_repository,
) -> MatchingDependencies:
    """Matching dependencies over in-memory repositories with a frozen clock."""
    return MatchingDependencies(
        catalog_repository=catalog_repository,
        assignment_repository=assignment_repository,
        match_result_repository=match_result_repository,
        matching_service=MatchingService(),
        availability_calculator=AvailabilityCalculator(),
        policy=MatchingPolicy(conflict_retry_delay_seconds=0),
        resolution_stats=ResolutionStats(),
        today=lambda: AS_OF,
        now=lambda: datetime(2025, 3, 1, 12, 0, 0),
    )


@pytest.fixture
def skill_ingest_dependencies(
    skill_repository,
    employee_skill_repository,
    catalog_repository,
) -> SkillIngestDependencies:
    return SkillIngestDependencies(
        skill_resolver=SkillResolver(skill_repository),
        employee_skill_repository=employee_skill_repository,
        catalog_repository=catalog_repository,
        resolution_stats=ResolutionStats(),
    )


@pytest.fixture
def assignment_dependencies(assignment_repository, catalog_repository) -> AssignmentDependencies:
    return AssignmentDependencies(
        assignment_repository=assignment_repository,
        catalog_repository=catalog_repository,
    )


@pytest.fixture
def as_of() -> date:
    return AS_OF
