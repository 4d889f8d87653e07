"""Domain value objects used across aggregates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional
from uuid import UUID


def _coerce_uuid(value: Any, *, field_name: str) -> UUID:
    """Convert strings to UUID instances while validating type."""
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value)
    raise TypeError(f"{field_name} must be a UUID-compatible value")


def _coerce_int(value: Any, *, field_name: str) -> int:
    """Convert integer-like values (ints, numeric strings) to int."""
    if isinstance(value, bool):
        raise TypeError(f"{field_name} must be an integer identifier")
    if isinstance(value, int):
        result = value
    elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
        result = int(value.strip())
    else:
        raise TypeError(f"{field_name} must be an integer identifier")
    if result <= 0:
        raise ValueError(f"{field_name} must be a positive integer")
    return result


@dataclass(frozen=True)
class TenantId:
    """Strongly-typed tenant identifier used for multi-tenant isolation."""

    value: UUID

    def __init__(self, value: Any):
        object.__setattr__(self, "value", _coerce_uuid(value, field_name="tenant_id"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Identifier of the user acting on a resource (e.g. a shortlist reviewer)."""

    value: UUID

    def __init__(self, value: Any):
        object.__setattr__(self, "value", _coerce_uuid(value, field_name="user_id"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RoleId:
    """Aggregate identifier for ProjectRole entities."""

    value: UUID

    def __init__(self, value: Any):
        object.__setattr__(self, "value", _coerce_uuid(value, field_name="role_id"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MatchResultId:
    """Identifier of a persisted match result row."""

    value: UUID

    def __init__(self, value: Any):
        object.__setattr__(self, "value", _coerce_uuid(value, field_name="match_result_id"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EmployeeId:
    """Stable integer identifier of an employee."""

    value: int

    def __init__(self, value: Any):
        object.__setattr__(self, "value", _coerce_int(value, field_name="employee_id"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SkillId:
    """Canonical skill identifier from the master skill table."""

    value: int

    def __init__(self, value: Any):
        object.__setattr__(self, "value", _coerce_int(value, field_name="skill_id"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ProjectId:
    """Aggregate identifier for Project entities."""

    value: int

    def __init__(self, value: Any):
        object.__setattr__(self, "value", _coerce_int(value, field_name="project_id"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AssignmentId:
    """Identifier of an assignment in the allocation ledger."""

    value: int

    def __init__(self, value: Any):
        object.__setattr__(self, "value", _coerce_int(value, field_name="assignment_id"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DateInterval:
    """Half-open date interval ``[start, end)``; ``end=None`` means open-ended."""

    start: date
    end: Optional[date] = None

    def __post_init__(self):
        if self.end is not None and self.end < self.start:
            raise ValueError("Interval end must not be before its start")

    @property
    def is_open_ended(self) -> bool:
        return self.end is None

    def overlaps(self, other: "DateInterval") -> bool:
        """``[a,b)`` overlaps ``[c,d)`` iff ``a < d`` and ``c < b``; None ends are +infinity."""
        starts_before_other_ends = other.end is None or self.start < other.end
        other_starts_before_end = self.end is None or other.start < self.end
        return starts_before_other_ends and other_starts_before_end


@dataclass(frozen=True)
class AllocationPercentage:
    """Share of an employee's capacity, 1..100."""

    value: int

    def __init__(self, value: Any):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError("allocation_percentage must be numeric")
        if value != int(value):
            raise ValueError("allocation_percentage must be a whole number")
        value = int(value)
        if not 1 <= value <= 100:
            raise ValueError("allocation_percentage must be between 1 and 100")
        object.__setattr__(self, "value", value)

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class SkillName:
    """Value object for skill names with normalization."""

    value: str
    normalized: str

    def __init__(self, value: str):
        if not value or not value.strip():
            raise ValueError("Skill name cannot be empty")

        normalized = value.strip().lower()
        object.__setattr__(self, "value", value.strip())
        object.__setattr__(self, "normalized", normalized)

    def __str__(self) -> str:
        return self.value


__all__ = [
    "TenantId",
    "UserId",
    "RoleId",
    "MatchResultId",
    "EmployeeId",
    "SkillId",
    "ProjectId",
    "AssignmentId",
    "DateInterval",
    "AllocationPercentage",
    "SkillName",
]
