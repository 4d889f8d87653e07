"""
Mapper between MatchResult domain entities and MatchResultTable persistence models.

Reasoning, risks and growth are stored as JSONB documents with stable keys so
that two runs over unchanged inputs produce identical rows.
"""

from __future__ import annotations

from typing import Any, Dict, List

from resource_matching.domain.entities.match_result import (
    GrowthAssessment,
    MatchReasoning,
    MatchResult,
    OverallAssessment,
    RiskFactor,
    RiskLevel,
    RiskType,
    SubScores,
)
from resource_matching.domain.value_objects import (
    EmployeeId,
    MatchResultId,
    RoleId,
    TenantId,
    UserId,
)
from resource_matching.infrastructure.persistence.models.match_result_table import MatchResultTable


class MatchResultMapper:
    """Maps between MatchResult domain entities and MatchResultTable persistence models."""

    @staticmethod
    def to_domain(table: MatchResultTable) -> MatchResult:
        reasoning = table.reasoning or {}
        growth = table.growth or {}

        return MatchResult(
            id=MatchResultId(table.id),
            tenant_id=TenantId(table.tenant_id),
            role_id=RoleId(table.role_id),
            employee_id=EmployeeId(table.employee_id),
            total_score=table.total_score,
            sub_scores=SubScores(
                skills=table.skills_match,
                availability=table.availability_match,
                experience=table.experience_match,
                preference=table.preference_match,
            ),
            reasoning=MatchReasoning(
                strengths=list(reasoning.get("strengths", [])),
                weaknesses=list(reasoning.get("weaknesses", [])),
                overall=OverallAssessment(reasoning.get("overall", OverallAssessment.LIMITED.value)),
            ),
            risks=[
                RiskFactor(
                    type=RiskType(risk["type"]),
                    level=RiskLevel(risk["level"]),
                    description=risk.get("description", ""),
                )
                for risk in (table.risks or [])
            ],
            growth=GrowthAssessment(
                skill_development=bool(growth.get("skill_development", False)),
                career_advancement=bool(growth.get("career_advancement", False)),
                score=int(growth.get("score", 0)),
            ),
            suggested_allocation=float(table.suggested_allocation),
            is_shortlisted=bool(table.is_shortlisted),
            reviewed_by=UserId(table.reviewed_by) if table.reviewed_by else None,
            reviewed_at=table.reviewed_at,
            created_at=table.created_at,
        )

    @staticmethod
    def to_table(entity: MatchResult) -> MatchResultTable:
        return MatchResultTable(
            id=entity.id.value,
            tenant_id=entity.tenant_id.value,
            role_id=entity.role_id.value,
            employee_id=entity.employee_id.value,
            total_score=entity.total_score,
            skills_match=entity.sub_scores.skills,
            availability_match=entity.sub_scores.availability,
            experience_match=entity.sub_scores.experience,
            preference_match=entity.sub_scores.preference,
            reasoning=MatchResultMapper.reasoning_to_json(entity.reasoning),
            risks=MatchResultMapper.risks_to_json(entity.risks),
            growth=MatchResultMapper.growth_to_json(entity.growth),
            suggested_allocation=entity.suggested_allocation,
            is_shortlisted=entity.is_shortlisted,
            reviewed_by=entity.reviewed_by.value if entity.reviewed_by else None,
            reviewed_at=entity.reviewed_at,
            created_at=entity.created_at,
        )

    @staticmethod
    def update_review_from_domain(table: MatchResultTable, entity: MatchResult) -> MatchResultTable:
        """Only review fields change after a result set is written."""
        table.is_shortlisted = entity.is_shortlisted
        table.reviewed_by = entity.reviewed_by.value if entity.reviewed_by else None
        table.reviewed_at = entity.reviewed_at
        return table

    @staticmethod
    def reasoning_to_json(reasoning: MatchReasoning) -> Dict[str, Any]:
        return {
            "strengths": list(reasoning.strengths),
            "weaknesses": list(reasoning.weaknesses),
            "overall": reasoning.overall.value,
        }

    @staticmethod
    def risks_to_json(risks: List[RiskFactor]) -> List[Dict[str, Any]]:
        return [
            {"type": risk.type.value, "level": risk.level.value, "description": risk.description}
            for risk in risks
        ]

    @staticmethod
    def growth_to_json(growth: GrowthAssessment) -> Dict[str, Any]:
        return {
            "skill_development": growth.skill_development,
            "career_advancement": growth.career_advancement,
            "score": growth.score,
        }


__all__ = ["MatchResultMapper"]
