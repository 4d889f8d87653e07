"""Domain repository contract for the read-only catalog projection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from resource_matching.domain.entities.employee import Employee
from resource_matching.domain.entities.matching import CandidateFilters
from resource_matching.domain.entities.project import RoleWithProject
from resource_matching.domain.value_objects import EmployeeId, RoleId, TenantId


class ICatalogRepository(ABC):
    """Narrow, tenant-scoped view of employees and project roles."""

    @abstractmethod
    async def get_role_with_project(
        self,
        role_id: RoleId,
        tenant_id: TenantId
    ) -> Optional[RoleWithProject]:
        """Load a role and its project; None when either is missing for the tenant."""
        raise NotImplementedError

    @abstractmethod
    async def list_candidate_employees(
        self,
        tenant_id: TenantId,
        filters: CandidateFilters,
        as_of: date
    ) -> List[Employee]:
        """List active employees of the tenant honouring department and tenure filters."""
        raise NotImplementedError

    @abstractmethod
    async def get_employee(
        self,
        employee_id: EmployeeId,
        tenant_id: TenantId
    ) -> Optional[Employee]:
        """Load one employee (active or not) within tenant scope."""
        raise NotImplementedError


__all__ = ["ICatalogRepository"]
