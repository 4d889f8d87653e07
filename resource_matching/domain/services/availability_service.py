"""Domain service computing free capacity from the assignment ledger."""

from __future__ import annotations

from typing import Iterable

from resource_matching.domain.entities.assignment import Assignment
from resource_matching.domain.value_objects import DateInterval

FULL_CAPACITY = 100


class AvailabilityCalculator:
    """Free allocation percentage of an employee over a target interval.

    Inactive assignments and assignments that do not overlap the interval are
    ignored. Open-ended assignments and open-ended targets extend to +infinity.
    """

    def booked(self, assignments: Iterable[Assignment], interval: DateInterval) -> int:
        """Sum of allocations that overlap ``interval``."""
        return sum(
            assignment.allocation
            for assignment in assignments
            if assignment.is_active and assignment.interval.overlaps(interval)
        )

    def available(self, assignments: Iterable[Assignment], interval: DateInterval) -> int:
        return max(0, FULL_CAPACITY - self.booked(assignments, interval))

    def is_over_allocated(self, assignments: Iterable[Assignment], interval: DateInterval) -> bool:
        return self.booked(assignments, interval) > FULL_CAPACITY


__all__ = ["AvailabilityCalculator", "FULL_CAPACITY"]
