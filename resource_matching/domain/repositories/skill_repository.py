"""Domain repository contracts for the master skill table and employee skill links."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Set

from resource_matching.domain.entities.employee import EmployeeSkill
from resource_matching.domain.entities.skill import Skill
from resource_matching.domain.value_objects import EmployeeId, SkillId, TenantId


class ISkillRepository(ABC):
    """Read-only lookups over canonical skills.

    Every ``find_first_*`` lookup is case-insensitive and, when several rows
    qualify, returns the one with the lowest id.
    """

    @abstractmethod
    async def get_by_id(self, skill_id: SkillId) -> Optional[Skill]:
        raise NotImplementedError

    @abstractmethod
    async def find_first_by_name(self, name: str) -> Optional[Skill]:
        """Exact match on the canonical name."""
        raise NotImplementedError

    @abstractmethod
    async def find_first_by_known_name(self, name: str) -> Optional[Skill]:
        """Exact match on the known-name alias."""
        raise NotImplementedError

    @abstractmethod
    async def find_first_name_containing(self, name: str) -> Optional[Skill]:
        """Canonical name contains ``name``."""
        raise NotImplementedError

    @abstractmethod
    async def find_first_known_name_containing(self, name: str) -> Optional[Skill]:
        """Known-name alias contains ``name``."""
        raise NotImplementedError

    @abstractmethod
    async def find_first_by_synonym(self, name: str) -> Optional[Skill]:
        """Any synonym equals ``name``."""
        raise NotImplementedError


class IEmployeeSkillRepository(ABC):
    """Tenant-scoped store of employee to canonical skill links."""

    @abstractmethod
    async def list_skill_ids(self, tenant_id: TenantId, employee_id: EmployeeId) -> Set[int]:
        raise NotImplementedError

    @abstractmethod
    async def add(self, tenant_id: TenantId, employee_skill: EmployeeSkill) -> bool:
        """Insert the link; False when ``(employee_id, skill_id)`` already exists."""
        raise NotImplementedError


__all__ = ["ISkillRepository", "IEmployeeSkillRepository"]
