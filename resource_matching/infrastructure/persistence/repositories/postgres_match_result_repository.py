"""PostgreSQL implementation of IMatchResultRepository using MatchResultMapper."""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog
from sqlalchemy import Delete, Select, delete, func
from sqlmodel import select

from resource_matching.core.transaction_manager import (
    SQLModelTransactionManager,
    get_transaction_manager,
)
from resource_matching.database.error_handling import handle_database_errors
from resource_matching.database.sqlmodel_engine import (
    SQLModelDatabaseManager,
    get_sqlmodel_db_manager,
)
from resource_matching.domain.entities.match_result import MatchResult
from resource_matching.domain.exceptions import ConcurrencyError, MatchResultNotFoundError
from resource_matching.domain.repositories.match_result_repository import IMatchResultRepository
from resource_matching.domain.value_objects import MatchResultId, RoleId, TenantId
from resource_matching.infrastructure.persistence.mappers.match_result_mapper import (
    MatchResultMapper,
)
from resource_matching.infrastructure.persistence.models.match_result_table import MatchResultTable

logger = structlog.get_logger(__name__)


def role_lock_statement(role_id: RoleId) -> Select:
    """Transaction-scoped advisory lock keyed by the role; released on commit or rollback."""
    return select(func.pg_try_advisory_xact_lock(func.hashtext(str(role_id))))


def delete_for_role_statement(tenant_id: TenantId, role_id: RoleId) -> Delete:
    return delete(MatchResultTable).where(
        MatchResultTable.tenant_id == tenant_id.value,
        MatchResultTable.role_id == role_id.value,
    )


def list_for_role_statement(
    tenant_id: TenantId,
    role_id: RoleId,
    shortlisted_only: bool = False,
    limit: Optional[int] = None,
) -> Select:
    stmt = select(MatchResultTable).where(
        MatchResultTable.tenant_id == tenant_id.value,
        MatchResultTable.role_id == role_id.value,
    )
    if shortlisted_only:
        stmt = stmt.where(MatchResultTable.is_shortlisted == True)  # noqa: E712

    stmt = stmt.order_by(MatchResultTable.total_score.desc(), MatchResultTable.employee_id)
    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt


class PostgresMatchResultRepository(IMatchResultRepository):
    """PostgreSQL adapter implementation of IMatchResultRepository."""

    def __init__(
        self,
        db_manager: Optional[SQLModelDatabaseManager] = None,
        transaction_manager: Optional[SQLModelTransactionManager] = None,
    ):
        self._db_manager = db_manager
        self._transaction_manager = transaction_manager

    def _get_db_manager(self) -> SQLModelDatabaseManager:
        """Get database manager (lazy initialization)."""
        if self._db_manager is None:
            self._db_manager = get_sqlmodel_db_manager()
        return self._db_manager

    def _get_transaction_manager(self) -> SQLModelTransactionManager:
        if self._transaction_manager is None:
            self._transaction_manager = get_transaction_manager()
        return self._transaction_manager

    @handle_database_errors(context={"repository": "match_result", "operation": "replace_for_role"})
    async def replace_for_role(
        self,
        tenant_id: TenantId,
        role_id: RoleId,
        results: Sequence[MatchResult]
    ) -> None:
        async with self._get_transaction_manager().transaction() as session:
            locked = (await session.execute(role_lock_statement(role_id))).scalar()
            if not locked:
                raise ConcurrencyError(
                    "Another matching run is replacing results for this role",
                    details={"role_id": str(role_id)},
                )

            deleted = await session.execute(delete_for_role_statement(tenant_id, role_id))
            session.add_all([MatchResultMapper.to_table(result) for result in results])

        logger.debug(
            "Replaced match results",
            tenant_id=str(tenant_id),
            role_id=str(role_id),
            deleted=deleted.rowcount,
            inserted=len(results),
        )

    @handle_database_errors(context={"repository": "match_result", "operation": "list_for_role"})
    async def list_for_role(
        self,
        tenant_id: TenantId,
        role_id: RoleId,
        shortlisted_only: bool = False,
        limit: Optional[int] = None
    ) -> List[MatchResult]:
        async with self._get_db_manager().get_session() as session:
            result = await session.execute(
                list_for_role_statement(tenant_id, role_id, shortlisted_only, limit)
            )
            rows = result.scalars().all()

        return [MatchResultMapper.to_domain(row) for row in rows]

    @handle_database_errors(context={"repository": "match_result", "operation": "get_by_id"})
    async def get_by_id(
        self,
        result_id: MatchResultId,
        tenant_id: TenantId
    ) -> Optional[MatchResult]:
        async with self._get_db_manager().get_session() as session:
            stmt = select(MatchResultTable).where(
                MatchResultTable.id == result_id.value,
                MatchResultTable.tenant_id == tenant_id.value,
            )
            result = await session.execute(stmt)
            row = result.scalars().first()

        return MatchResultMapper.to_domain(row) if row else None

    @handle_database_errors(context={"repository": "match_result", "operation": "save_review"})
    async def save_review(self, result: MatchResult) -> MatchResult:
        async with self._get_db_manager().get_session() as session:
            stmt = select(MatchResultTable).where(
                MatchResultTable.id == result.id.value,
                MatchResultTable.tenant_id == result.tenant_id.value,
            )
            existing = (await session.execute(stmt)).scalars().first()
            if existing is None:
                # The result set was replaced by a newer run since the caller loaded it
                raise MatchResultNotFoundError(
                    "Match result not found",
                    details={"match_result_id": str(result.id)},
                )

            MatchResultMapper.update_review_from_domain(existing, result)
            await session.flush()
            return MatchResultMapper.to_domain(existing)


__all__ = [
    "PostgresMatchResultRepository",
    "delete_for_role_statement",
    "list_for_role_statement",
    "role_lock_statement",
]
