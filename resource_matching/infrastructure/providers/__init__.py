"""Infrastructure provider accessors package."""

from .database_provider import (  # noqa: F401
    get_database_manager,
    reset_database_manager,
)
from .matching_provider import (  # noqa: F401
    get_availability_calculator,
    get_matching_policy,
    get_matching_service,
    get_resolution_stats,
    get_skill_resolver,
    reset_matching_services,
)
from .repository_provider import (  # noqa: F401
    get_assignment_repository,
    get_catalog_repository,
    get_employee_skill_repository,
    get_match_result_repository,
    get_skill_repository,
    reset_repositories,
)

__all__ = [
    "get_database_manager",
    "reset_database_manager",
    "get_availability_calculator",
    "get_matching_policy",
    "get_matching_service",
    "get_resolution_stats",
    "get_skill_resolver",
    "reset_matching_services",
    "get_assignment_repository",
    "get_catalog_repository",
    "get_employee_skill_repository",
    "get_match_result_repository",
    "get_skill_repository",
    "reset_repositories",
]
