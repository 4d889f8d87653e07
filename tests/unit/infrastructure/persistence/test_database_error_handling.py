"""Unit tests for the SQLAlchemy to domain exception mapping."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError

from resource_matching.database.error_handling import (
    get_error_details,
    handle_database_errors,
    map_sqlalchemy_error,
)
from resource_matching.domain.exceptions import (
    ConcurrencyError,
    InternalError,
    RoleNotFoundError,
    TransientError,
)


class UniqueViolation(Exception):
    pgcode = "23505"


def operational_error():
    return OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))


def integrity_error():
    return IntegrityError("INSERT INTO match_results", {"tenant_id": "secret"}, UniqueViolation())


@pytest.mark.parametrize(
    "error_factory,expected",
    [
        (operational_error, TransientError),
        (integrity_error, ConcurrencyError),
        (lambda: ProgrammingError("SELEC", {}, Exception("syntax")), InternalError),
    ],
)
def test_map_sqlalchemy_error(error_factory, expected):
    assert map_sqlalchemy_error(error_factory()) is expected


def test_details_carry_pgcode_but_no_parameters():
    details = get_error_details(integrity_error())

    assert details == {
        "error_type": "IntegrityError",
        "error_code": "23505",
        "original_error_type": "UniqueViolation",
    }


class TestHandleDatabaseErrors:

    async def test_connection_failure_becomes_retryable(self):
        @handle_database_errors(context={"operation": "list_candidates"})
        async def list_candidates():
            raise operational_error()

        with pytest.raises(TransientError) as exc_info:
            await list_candidates()

        assert exc_info.value.retryable is True
        assert exc_info.value.details["operation"] == "list_candidates"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    async def test_integrity_violation_becomes_conflict(self):
        @handle_database_errors()
        async def insert_results():
            raise integrity_error()

        with pytest.raises(ConcurrencyError):
            await insert_results()

    async def test_domain_exceptions_pass_through(self):
        @handle_database_errors()
        async def get_role():
            raise RoleNotFoundError("missing")

        with pytest.raises(RoleNotFoundError):
            await get_role()

    async def test_return_value_is_untouched(self):
        @handle_database_errors()
        async def count():
            return 3

        assert await count() == 3
