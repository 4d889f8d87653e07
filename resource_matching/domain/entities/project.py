"""Projects and the staffing roles opened on them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import FrozenSet, List, Optional

from resource_matching.domain.entities.employee import Seniority
from resource_matching.domain.value_objects import (
    AllocationPercentage,
    DateInterval,
    ProjectId,
    RoleId,
    TenantId,
)


class RoleStatus(str, Enum):
    """Lifecycle status of a project role."""

    DRAFT = "DRAFT"
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    FILLED = "FILLED"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


class WorkMode(str, Enum):
    """Where the work on a role happens."""

    REMOTE = "REMOTE"
    HYBRID = "HYBRID"
    ONSITE = "ONSITE"


@dataclass
class Project:
    """Project owning one or more roles."""

    id: ProjectId
    tenant_id: TenantId
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[str] = None

    def __post_init__(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("Project start date must not be after its end date")

    def staffing_interval(self, today: date) -> DateInterval:
        """Interval a role on this project is staffed over; an unknown start means today.

        A project without a start that has already ended collapses to an empty
        interval at its end date.
        """
        start = self.start_date or today
        if self.start_date is None and self.end_date is not None and self.end_date < start:
            start = self.end_date
        return DateInterval(start=start, end=self.end_date)


@dataclass
class ProjectRole:
    """Open role on a project that the matcher fills."""

    id: RoleId
    project_id: ProjectId
    tenant_id: TenantId
    title: str
    allocation_percentage: AllocationPercentage = field(
        default_factory=lambda: AllocationPercentage(100)
    )
    seniority: Optional[Seniority] = None
    required_skill_ids: FrozenSet[int] = field(default_factory=frozenset)
    preferred_soft_skill_ids: FrozenSet[int] = field(default_factory=frozenset)
    required_certifications: List[str] = field(default_factory=list)
    required_languages: List[str] = field(default_factory=list)
    min_experience_years: Optional[int] = None
    preferred_experience_years: Optional[int] = None
    work_mode: Optional[WorkMode] = None
    location: Optional[str] = None
    is_critical: bool = False
    is_urgent: bool = False
    status: RoleStatus = RoleStatus.OPEN

    @property
    def allocation(self) -> int:
        return self.allocation_percentage.value


@dataclass
class RoleWithProject:
    """A role joined with its project, as loaded for a matching run."""

    role: ProjectRole
    project: Project


__all__ = ["RoleStatus", "WorkMode", "Project", "ProjectRole", "RoleWithProject"]
