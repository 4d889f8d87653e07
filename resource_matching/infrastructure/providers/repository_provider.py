"""Repository provider utilities."""

from __future__ import annotations

import asyncio

from resource_matching.domain.repositories.assignment_repository import IAssignmentRepository
from resource_matching.domain.repositories.catalog_repository import ICatalogRepository
from resource_matching.domain.repositories.match_result_repository import IMatchResultRepository
from resource_matching.domain.repositories.skill_repository import (
    IEmployeeSkillRepository,
    ISkillRepository,
)
from resource_matching.infrastructure.persistence.repositories import (
    PostgresAssignmentRepository,
    PostgresCatalogRepository,
    PostgresEmployeeSkillRepository,
    PostgresMatchResultRepository,
    PostgresSkillRepository,
)

_catalog_repository: ICatalogRepository | None = None
_assignment_repository: IAssignmentRepository | None = None
_match_result_repository: IMatchResultRepository | None = None
_skill_repository: ISkillRepository | None = None
_employee_skill_repository: IEmployeeSkillRepository | None = None

_catalog_lock = asyncio.Lock()
_assignment_lock = asyncio.Lock()
_match_result_lock = asyncio.Lock()
_skill_lock = asyncio.Lock()
_employee_skill_lock = asyncio.Lock()


async def get_catalog_repository() -> ICatalogRepository:
    """Return singleton catalog repository adapter satisfying the domain interface."""
    global _catalog_repository
    if _catalog_repository is not None:
        return _catalog_repository

    async with _catalog_lock:
        if _catalog_repository is not None:
            return _catalog_repository

        _catalog_repository = PostgresCatalogRepository()
        return _catalog_repository


async def get_assignment_repository() -> IAssignmentRepository:
    """Return singleton assignment ledger implementation."""
    global _assignment_repository
    if _assignment_repository is not None:
        return _assignment_repository

    async with _assignment_lock:
        if _assignment_repository is not None:
            return _assignment_repository

        _assignment_repository = PostgresAssignmentRepository()
        return _assignment_repository


async def get_match_result_repository() -> IMatchResultRepository:
    """Return singleton match result repository implementation."""
    global _match_result_repository
    if _match_result_repository is not None:
        return _match_result_repository

    async with _match_result_lock:
        if _match_result_repository is not None:
            return _match_result_repository

        _match_result_repository = PostgresMatchResultRepository()
        return _match_result_repository


async def get_skill_repository() -> ISkillRepository:
    """Return singleton master skill repository implementation."""
    global _skill_repository
    if _skill_repository is not None:
        return _skill_repository

    async with _skill_lock:
        if _skill_repository is not None:
            return _skill_repository

        _skill_repository = PostgresSkillRepository()
        return _skill_repository


async def get_employee_skill_repository() -> IEmployeeSkillRepository:
    """Return singleton employee skill repository implementation."""
    global _employee_skill_repository
    if _employee_skill_repository is not None:
        return _employee_skill_repository

    async with _employee_skill_lock:
        if _employee_skill_repository is not None:
            return _employee_skill_repository

        _employee_skill_repository = PostgresEmployeeSkillRepository()
        return _employee_skill_repository


async def reset_repositories() -> None:
    global _catalog_repository, _assignment_repository, _match_result_repository
    global _skill_repository, _employee_skill_repository
    _catalog_repository = None
    _assignment_repository = None
    _match_result_repository = None
    _skill_repository = None
    _employee_skill_repository = None


__all__ = [
    "get_catalog_repository",
    "get_assignment_repository",
    "get_match_result_repository",
    "get_skill_repository",
    "get_employee_skill_repository",
    "reset_repositories",
]
