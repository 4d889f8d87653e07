"""
Skill resolution for externally supplied skills.

CV extraction hands over ``(id?, name)`` pairs. An id is only trusted when the
canonical row it points at agrees with the name; otherwise the resolver walks a
fixed ladder of name lookups and stops at the first hit. A miss is an ordinary
outcome, never an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from resource_matching.domain.entities.skill import Skill
from resource_matching.domain.repositories.skill_repository import ISkillRepository
from resource_matching.domain.value_objects import SkillId


class ResolutionLevel(str, Enum):
    """Step of the resolution ladder that produced (or was tried for) a result."""

    VALIDATED_ID = "validated_id"
    EXACT_NAME = "exact_name"
    EXACT_KNOWN_NAME = "exact_known_name"
    NAME_CONTAINS = "name_contains"
    KNOWN_NAME_CONTAINS = "known_name_contains"
    SYNONYM = "synonym"


class ResolutionOutcome(str, Enum):
    RESOLVED = "resolved"
    MISS = "miss"


@dataclass(frozen=True)
class SkillResolution:
    """Result of resolving one ``(id?, name)`` pair."""

    outcome: ResolutionOutcome
    skill_id: Optional[int] = None
    level: Optional[ResolutionLevel] = None
    tried_levels: Tuple[ResolutionLevel, ...] = ()
    id_discarded: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.outcome is ResolutionOutcome.RESOLVED

    @property
    def used_validated_id(self) -> bool:
        return self.level is ResolutionLevel.VALIDATED_ID

    @property
    def used_fallback(self) -> bool:
        return self.is_resolved and self.level is not ResolutionLevel.VALIDATED_ID


@dataclass
class ResolutionStats:
    """Acceptance counters surfaced to callers for observability."""

    validated: int = 0
    fallback: int = 0
    id_discarded: int = 0
    unresolved: int = 0
    unresolved_names: List[str] = field(default_factory=list)

    def record(self, resolution: SkillResolution, name: str = "") -> None:
        if resolution.used_validated_id:
            self.validated += 1
        if resolution.used_fallback:
            self.fallback += 1
        if resolution.id_discarded:
            self.id_discarded += 1
        if not resolution.is_resolved:
            self.unresolved += 1
            if name:
                self.unresolved_names.append(name)

    def merge(self, other: "ResolutionStats") -> None:
        """Add another tally's counters; unresolved names stay with the batch that saw them."""
        self.validated += other.validated
        self.fallback += other.fallback
        self.id_discarded += other.id_discarded
        self.unresolved += other.unresolved

    def as_dict(self) -> Dict[str, int]:
        return {
            "validated": self.validated,
            "fallback": self.fallback,
            "id_discarded": self.id_discarded,
            "unresolved": self.unresolved,
        }


class SkillResolver:
    """Maps ``(candidate_id?, name)`` to a canonical skill id or a definite miss.

    The resolver only reads the master skill table; it never creates skills.
    """

    def __init__(self, skill_repository: ISkillRepository):
        self._skills = skill_repository
        self._fallback_ladder: List[
            Tuple[ResolutionLevel, Callable[[str], Awaitable[Optional[Skill]]]]
        ] = [
            (ResolutionLevel.EXACT_NAME, skill_repository.find_first_by_name),
            (ResolutionLevel.EXACT_KNOWN_NAME, skill_repository.find_first_by_known_name),
            (ResolutionLevel.NAME_CONTAINS, skill_repository.find_first_name_containing),
            (ResolutionLevel.KNOWN_NAME_CONTAINS, skill_repository.find_first_known_name_containing),
            (ResolutionLevel.SYNONYM, skill_repository.find_first_by_synonym),
        ]

    async def resolve(self, candidate_id: Any, name: Optional[str]) -> SkillResolution:
        needle = (name or "").strip()
        tried: List[ResolutionLevel] = []
        id_supplied = candidate_id is not None and candidate_id != ""

        if not needle:
            return SkillResolution(
                outcome=ResolutionOutcome.MISS,
                tried_levels=tuple(tried),
                id_discarded=id_supplied,
            )

        if id_supplied:
            tried.append(ResolutionLevel.VALIDATED_ID)
            skill = await self._lookup_id(candidate_id)
            if skill is not None and (skill.has_exact_name(needle) or skill.overlaps_name(needle)):
                return SkillResolution(
                    outcome=ResolutionOutcome.RESOLVED,
                    skill_id=skill.id.value,
                    level=ResolutionLevel.VALIDATED_ID,
                    tried_levels=tuple(tried),
                )

        for level, lookup in self._fallback_ladder:
            tried.append(level)
            skill = await lookup(needle)
            if skill is not None:
                return SkillResolution(
                    outcome=ResolutionOutcome.RESOLVED,
                    skill_id=skill.id.value,
                    level=level,
                    tried_levels=tuple(tried),
                    id_discarded=id_supplied,
                )

        return SkillResolution(
            outcome=ResolutionOutcome.MISS,
            tried_levels=tuple(tried),
            id_discarded=id_supplied,
        )

    async def _lookup_id(self, candidate_id: Any) -> Optional[Skill]:
        try:
            skill_id = SkillId(candidate_id)
        except (TypeError, ValueError):
            # Malformed ids are untrustworthy ids
            return None
        return await self._skills.get_by_id(skill_id)


__all__ = [
    "ResolutionLevel",
    "ResolutionOutcome",
    "SkillResolution",
    "ResolutionStats",
    "SkillResolver",
]
