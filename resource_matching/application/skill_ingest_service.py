"""Application service linking CV-extracted skills to canonical skill ids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

import structlog

from resource_matching.domain.entities.employee import EmployeeSkill
from resource_matching.domain.entities.skill import SkillSource
from resource_matching.domain.exceptions import (
    EmployeeNotFoundError,
    TenantMismatchError,
    ValidationError,
)
from resource_matching.domain.services.skill_resolver import ResolutionStats, SkillResolution
from resource_matching.domain.value_objects import EmployeeId, SkillId, TenantId

if TYPE_CHECKING:
    from resource_matching.application.dependencies.skill_ingest_dependencies import (
        SkillIngestDependencies,
    )

# Extraction sometimes reports proficiency on a 1..5 scale
LEGACY_PROFICIENCY_SCALE = 5.0


@dataclass
class ExtractedSkill:
    """One skill as reported by CV extraction."""

    name: str
    candidate_id: Optional[Any] = None
    proficiency: Optional[float] = None
    is_certified: bool = False


@dataclass
class SkillIngestReport:
    """Outcome of ingesting a batch of extracted skills for one employee."""

    employee_id: int
    saved: int = 0
    duplicates: int = 0
    stats: ResolutionStats = field(default_factory=ResolutionStats)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "saved": self.saved,
            "duplicates": self.duplicates,
            **self.stats.as_dict(),
            "unresolved_names": list(self.stats.unresolved_names),
        }


def normalize_proficiency(value: Optional[float]) -> float:
    """Map a reported proficiency onto the single 0..1 scale."""
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("proficiency must be numeric")
    if 0.0 <= value <= 1.0:
        return float(value)
    if 1.0 < value <= LEGACY_PROFICIENCY_SCALE:
        return round(value / LEGACY_PROFICIENCY_SCALE, 4)
    raise ValidationError(f"proficiency {value} is outside the supported scales")


class SkillIngestApplicationService:
    """Resolves extracted skills and writes only the canonical, non-duplicate ones."""

    def __init__(self, dependencies: SkillIngestDependencies) -> None:
        self._deps = dependencies
        self._logger = structlog.get_logger(__name__)

    async def resolve_skill(self, candidate_id: Any, name: Optional[str]) -> SkillResolution:
        """Resolve one ``(id?, name)`` pair; a miss is returned, never raised."""
        resolution = await self._deps.skill_resolver.resolve(candidate_id, name)
        self._deps.resolution_stats.record(resolution)

        self._logger.info(
            "Skill resolved" if resolution.is_resolved else "Skill not resolved",
            outcome=resolution.outcome.value,
            level=resolution.level.value if resolution.level else None,
            skill_id=resolution.skill_id,
            id_discarded=resolution.id_discarded,
        )
        return resolution

    async def ingest_cv_skills(
        self,
        employee_id: int,
        tenant_id: str,
        skills: Sequence[ExtractedSkill],
        payload_tenant_id: Optional[str] = None,
    ) -> SkillIngestReport:
        """Resolve and persist a batch of extracted skills for an employee.

        Args:
            employee_id: Employee the CV belongs to
            tenant_id: Caller's tenant
            skills: Extracted skills in extraction order
            payload_tenant_id: Tenant named by the extraction payload, if any

        Returns:
            SkillIngestReport with saved/duplicate counts and resolver counters

        Raises:
            TenantMismatchError: If the payload names a different tenant
            EmployeeNotFoundError: If the employee is not visible to the tenant
            ValidationError: If any proficiency is outside the supported scales
        """
        tenant = TenantId(tenant_id)
        if payload_tenant_id is not None and TenantId(payload_tenant_id) != tenant:
            raise TenantMismatchError("Extraction payload belongs to a different tenant")

        try:
            employee_vo = EmployeeId(employee_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc

        employee = await self._deps.catalog_repository.get_employee(employee_vo, tenant)
        if employee is None:
            raise EmployeeNotFoundError(f"Employee {employee_id} not found")

        # Validate the whole batch before writing anything
        proficiencies = [normalize_proficiency(skill.proficiency) for skill in skills]

        report = SkillIngestReport(employee_id=employee_vo.value)
        known_ids = set(
            await self._deps.employee_skill_repository.list_skill_ids(tenant, employee_vo)
        )

        for extracted, proficiency in zip(skills, proficiencies):
            resolution = await self._deps.skill_resolver.resolve(
                extracted.candidate_id, extracted.name
            )
            report.stats.record(resolution, (extracted.name or "").strip())

            if not resolution.is_resolved:
                continue
            if resolution.skill_id in known_ids:
                report.duplicates += 1
                continue

            added = await self._deps.employee_skill_repository.add(
                tenant,
                EmployeeSkill(
                    employee_id=employee_vo,
                    skill_id=SkillId(resolution.skill_id),
                    proficiency=proficiency,
                    is_certified=extracted.is_certified,
                    source=SkillSource.CV_EXTRACTED,
                ),
            )
            known_ids.add(resolution.skill_id)
            if added:
                report.saved += 1
            else:
                report.duplicates += 1

        self._deps.resolution_stats.merge(report.stats)

        self._logger.info(
            "CV skills ingested",
            employee_id=employee_vo.value,
            tenant_id=str(tenant),
            received=len(skills),
            saved=report.saved,
            duplicates=report.duplicates,
            **report.stats.as_dict(),
        )
        if report.stats.unresolved:
            self._logger.warning(
                "Unresolved skills dropped",
                employee_id=employee_vo.value,
                unresolved=report.stats.unresolved,
            )
        return report


__all__ = [
    "ExtractedSkill",
    "SkillIngestReport",
    "SkillIngestApplicationService",
    "normalize_proficiency",
]
