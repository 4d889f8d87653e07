"""Narrow catalog projection of employees used by the matcher."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import FrozenSet, List, Optional

from resource_matching.domain.entities.skill import SkillSource
from resource_matching.domain.value_objects import EmployeeId, SkillId, TenantId

DAYS_PER_YEAR = 365.25


class Seniority(str, Enum):
    """Seniority ladder shared by employees and role targets."""

    JUNIOR = "JUNIOR"
    MIDDLE = "MIDDLE"
    SENIOR = "SENIOR"
    LEAD = "LEAD"
    PRINCIPAL = "PRINCIPAL"

    @property
    def ordinal(self) -> int:
        return _SENIORITY_ORDINALS[self]

    @classmethod
    def from_tenure(cls, years: int) -> "Seniority":
        """Seniority implied by tenure alone, used when none is recorded."""
        if years < 2:
            return cls.JUNIOR
        if years < 5:
            return cls.MIDDLE
        if years < 8:
            return cls.SENIOR
        if years < 12:
            return cls.LEAD
        return cls.PRINCIPAL

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Seniority"]:
        """Lenient parse of stored values ("Middle", "middle", "MIDDLE")."""
        if value is None or not str(value).strip():
            return None
        return cls(str(value).strip().upper())


_SENIORITY_ORDINALS = {
    Seniority.JUNIOR: 1,
    Seniority.MIDDLE: 2,
    Seniority.SENIOR: 3,
    Seniority.LEAD: 4,
    Seniority.PRINCIPAL: 5,
}


def years_between(start: Optional[date], as_of: date) -> int:
    """Whole years between two dates on a 365.25-day year; 0 when start is unknown or in the future."""
    if start is None:
        return 0
    days = (as_of - start).days
    if days <= 0:
        return 0
    return math.floor(days / DAYS_PER_YEAR)


@dataclass(frozen=True)
class EmployeeSkill:
    """Link between an employee and a canonical skill."""

    employee_id: EmployeeId
    skill_id: SkillId
    proficiency: float = 0.0
    is_certified: bool = False
    source: SkillSource = SkillSource.MANUAL

    def __post_init__(self):
        if not 0.0 <= self.proficiency <= 1.0:
            raise ValueError("Proficiency must be between 0.0 and 1.0")


@dataclass
class Employee:
    """Employee as seen by the matching engine."""

    id: EmployeeId
    tenant_id: TenantId
    hire_date: Optional[date] = None
    department_id: Optional[int] = None
    seniority: Optional[Seniority] = None
    is_active: bool = True
    skills: List[EmployeeSkill] = field(default_factory=list)
    soft_skill_ids: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def skill_ids(self) -> FrozenSet[int]:
        return frozenset(skill.skill_id.value for skill in self.skills)

    @property
    def certified_skill_count(self) -> int:
        return sum(1 for skill in self.skills if skill.is_certified)

    def years_of_experience(self, as_of: date) -> int:
        return years_between(self.hire_date, as_of)

    def effective_seniority(self, as_of: date) -> Seniority:
        """Recorded seniority, or the tenure-derived level when none is recorded."""
        if self.seniority is not None:
            return self.seniority
        return Seniority.from_tenure(self.years_of_experience(as_of))


__all__ = ["Seniority", "EmployeeSkill", "Employee", "years_between", "DAYS_PER_YEAR"]
