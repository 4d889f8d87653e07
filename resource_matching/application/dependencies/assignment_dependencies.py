"""Dependency container for assignment ledger application service."""

from __future__ import annotations

from dataclasses import dataclass, field

from resource_matching.domain.repositories.assignment_repository import IAssignmentRepository
from resource_matching.domain.repositories.catalog_repository import ICatalogRepository
from resource_matching.domain.services.availability_service import AvailabilityCalculator


@dataclass
class AssignmentDependencies:
    """Container for assignment service dependencies."""

    assignment_repository: IAssignmentRepository
    catalog_repository: ICatalogRepository
    availability_calculator: AvailabilityCalculator = field(default_factory=AvailabilityCalculator)


__all__ = ["AssignmentDependencies"]
