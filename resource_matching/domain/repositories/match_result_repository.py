"""Domain repository contract for matching result sets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from resource_matching.domain.entities.match_result import MatchResult
from resource_matching.domain.value_objects import MatchResultId, RoleId, TenantId


class IMatchResultRepository(ABC):
    """Result store keyed by role.

    Readers never lock; they observe either the previous complete set or the
    new complete set of a role.
    """

    @abstractmethod
    async def replace_for_role(
        self,
        tenant_id: TenantId,
        role_id: RoleId,
        results: Sequence[MatchResult]
    ) -> None:
        """Atomically delete the role's prior set and insert ``results``.

        Holds a role-scoped lock for the delete+insert sequence and raises
        ``ConcurrencyError`` when another writer holds it.
        """
        raise NotImplementedError

    @abstractmethod
    async def list_for_role(
        self,
        tenant_id: TenantId,
        role_id: RoleId,
        shortlisted_only: bool = False,
        limit: Optional[int] = None
    ) -> List[MatchResult]:
        """List the role's results sorted by total score descending."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(
        self,
        result_id: MatchResultId,
        tenant_id: TenantId
    ) -> Optional[MatchResult]:
        raise NotImplementedError

    @abstractmethod
    async def save_review(self, result: MatchResult) -> MatchResult:
        """Persist shortlist flag and reviewer metadata of an existing result."""
        raise NotImplementedError


__all__ = ["IMatchResultRepository"]
