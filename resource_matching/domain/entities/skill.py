"""Canonical skill records from the master skill table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from resource_matching.domain.value_objects import SkillId


class SkillSource(str, Enum):
    """Where an employee skill row came from."""

    CV_EXTRACTED = "cv_extracted"
    MANUAL = "manual"
    IMPORTED = "imported"


@dataclass(frozen=True)
class Skill:
    """Canonical skill. The display name alone is not unique; the id is."""

    id: SkillId
    name: str
    known_name: Optional[str] = None
    synonyms: List[str] = field(default_factory=list)

    def has_exact_name(self, candidate: str) -> bool:
        """True when ``candidate`` equals the canonical name, known name or a synonym (case-insensitive)."""
        needle = candidate.strip().lower()
        if not needle:
            return False
        if (self.name or "").strip().lower() == needle:
            return True
        if (self.known_name or "").strip().lower() == needle:
            return True
        return any((synonym or "").strip().lower() == needle for synonym in self.synonyms)

    def overlaps_name(self, candidate: str) -> bool:
        """True when the canonical name and ``candidate`` substring-contain each other."""
        needle = candidate.strip().lower()
        canonical = (self.name or "").strip().lower()
        if not needle or not canonical:
            return False
        return needle in canonical or canonical in needle


__all__ = ["Skill", "SkillSource"]
