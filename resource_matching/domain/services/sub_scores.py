"""
The four sub-score calculators.

Each function is pure and returns an integer in 0..100. They are kept apart from
the scorer so every sub-score can be audited (and tested) on its own.
"""

from __future__ import annotations

from datetime import date

from resource_matching.domain.entities.employee import Employee
from resource_matching.domain.entities.match_result import round_half_up
from resource_matching.domain.entities.project import ProjectRole

NEUTRAL_SCORE = 50
MAX_SCORE = 100

CERTIFICATION_POINTS = 10
CERTIFICATION_CAP = 20
SOFT_SKILL_POINTS = 5
SOFT_SKILL_CAP = 20

MIN_EXPERIENCE_BONUS = 30
PREFERRED_EXPERIENCE_BONUS = 20
SENIORITY_MET_BONUS = 20
SENIORITY_GROWTH_BONUS = 10

WORK_MODE_BONUS = 20
LOCATION_BONUS = 15
LANGUAGES_BONUS = 15


def skills_match(role: ProjectRole, employee: Employee) -> int:
    """Coverage of the required hard skills, adjusted by certifications and soft skills."""
    required = role.required_skill_ids
    if not required:
        score = float(NEUTRAL_SCORE)
    else:
        covered = len(required & employee.skill_ids)
        score = MAX_SCORE * covered / len(required)

    if role.required_certifications:
        cert_bonus = min(CERTIFICATION_CAP, CERTIFICATION_POINTS * employee.certified_skill_count)
        score = (score + cert_bonus) / 2

    if role.preferred_soft_skill_ids:
        overlap = len(role.preferred_soft_skill_ids & employee.soft_skill_ids)
        if overlap:
            score = min(MAX_SCORE, score + min(SOFT_SKILL_CAP, SOFT_SKILL_POINTS * overlap))

    return round_half_up(score)


def availability_match(required_allocation: int, available_allocation: int) -> int:
    """Banded fit between the free capacity V and the role's allocation A."""
    if required_allocation <= 0:
        raise ValueError("required_allocation must be positive")
    available = max(0, available_allocation)
    if available >= required_allocation:
        return MAX_SCORE
    if available >= 0.75 * required_allocation:
        return 75
    if available >= 0.5 * required_allocation:
        return 50
    return round_half_up(MAX_SCORE * available / required_allocation)


def experience_match(role: ProjectRole, employee: Employee, as_of: date) -> int:
    score = NEUTRAL_SCORE
    years = employee.years_of_experience(as_of)

    if role.min_experience_years is not None and years >= role.min_experience_years:
        score += MIN_EXPERIENCE_BONUS
    if role.preferred_experience_years is not None and years >= role.preferred_experience_years:
        score += PREFERRED_EXPERIENCE_BONUS

    if role.seniority is not None:
        employee_level = employee.effective_seniority(as_of).ordinal
        role_level = role.seniority.ordinal
        if employee_level >= role_level:
            score += SENIORITY_MET_BONUS
        elif employee_level == role_level - 1:
            score += SENIORITY_GROWTH_BONUS

    return min(score, MAX_SCORE)


def preference_match(role: ProjectRole) -> int:
    """Placeholder until per-employee preferences exist: hints on the role never penalise."""
    score = NEUTRAL_SCORE
    if role.work_mode is not None:
        score += WORK_MODE_BONUS
    if role.location:
        score += LOCATION_BONUS
    if role.required_languages:
        score += LANGUAGES_BONUS
    return min(score, MAX_SCORE)


__all__ = [
    "skills_match",
    "availability_match",
    "experience_match",
    "preference_match",
]
