"""
Skill Schemas

Request and response models for skill resolution and CV skill ingestion.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from resource_matching.application.skill_ingest_service import SkillIngestReport
from resource_matching.domain.services.skill_resolver import SkillResolution


class SkillResolveRequest(BaseModel):
    """A proposed skill as produced by an extractor"""

    id: Optional[Union[int, str]] = Field(None, description="Proposed canonical skill id")
    skill_name: Optional[str] = Field(None, description="Skill name as written in the source")


class SkillResolveResponse(BaseModel):
    """Either a resolved id or a miss with the levels that were tried"""

    resolved: bool
    resolved_id: Optional[int] = None
    level: Optional[str] = None
    tried_levels: List[str] = Field(default_factory=list)
    id_discarded: bool = False

    @classmethod
    def from_domain(cls, resolution: SkillResolution) -> "SkillResolveResponse":
        return cls(
            resolved=resolution.is_resolved,
            resolved_id=resolution.skill_id,
            level=resolution.level.value if resolution.level else None,
            tried_levels=[level.value for level in resolution.tried_levels],
            id_discarded=resolution.id_discarded,
        )


class ExtractedSkillPayload(BaseModel):
    id: Optional[Union[int, str]] = Field(None, description="Proposed canonical skill id")
    skill_name: str = Field(..., description="Skill name as written in the CV")
    proficiency: Optional[float] = Field(None, description="0..1, or the legacy 1..5 scale")
    is_certified: bool = False


class SkillIngestRequest(BaseModel):
    """Skills extracted from one CV"""

    tenant_id: Optional[str] = Field(None, description="Tenant named by the extraction payload")
    skills: List[ExtractedSkillPayload] = Field(default_factory=list)


class SkillIngestResponse(BaseModel):
    employee_id: int
    saved: int
    duplicates: int
    validated: int
    fallback: int
    id_discarded: int
    unresolved: int
    unresolved_names: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, report: SkillIngestReport) -> "SkillIngestResponse":
        return cls(**report.as_dict())
