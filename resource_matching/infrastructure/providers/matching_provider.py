"""Providers for the stateless matching domain services and shared counters."""

from __future__ import annotations

import asyncio
from typing import Optional

from resource_matching.core.config import get_settings
from resource_matching.domain.entities.matching import MatchingPolicy
from resource_matching.domain.services.availability_service import AvailabilityCalculator
from resource_matching.domain.services.matching_service import IMatchingService, MatchingService
from resource_matching.domain.services.skill_resolver import ResolutionStats, SkillResolver
from resource_matching.infrastructure.providers.repository_provider import get_skill_repository

_matching_service: Optional[IMatchingService] = None
_availability_calculator: Optional[AvailabilityCalculator] = None
_skill_resolver: Optional[SkillResolver] = None
_resolution_stats: Optional[ResolutionStats] = None
_lock = asyncio.Lock()


def get_matching_policy() -> MatchingPolicy:
    """Matching knobs from settings; settings are cached so this is cheap."""
    return get_settings().get_matching_policy()


async def get_matching_service() -> IMatchingService:
    global _matching_service
    if _matching_service is not None:
        return _matching_service

    async with _lock:
        if _matching_service is None:
            _matching_service = MatchingService()
        return _matching_service


async def get_availability_calculator() -> AvailabilityCalculator:
    global _availability_calculator
    if _availability_calculator is not None:
        return _availability_calculator

    async with _lock:
        if _availability_calculator is None:
            _availability_calculator = AvailabilityCalculator()
        return _availability_calculator


async def get_skill_resolver() -> SkillResolver:
    """Return the resolver bound to the master skill repository."""
    global _skill_resolver
    if _skill_resolver is not None:
        return _skill_resolver

    skill_repository = await get_skill_repository()
    async with _lock:
        if _skill_resolver is None:
            _skill_resolver = SkillResolver(skill_repository)
        return _skill_resolver


async def get_resolution_stats() -> ResolutionStats:
    """Process-wide resolver counters shared by ingest and matching runs."""
    global _resolution_stats
    if _resolution_stats is not None:
        return _resolution_stats

    async with _lock:
        if _resolution_stats is None:
            _resolution_stats = ResolutionStats()
        return _resolution_stats


async def reset_matching_services() -> None:
    global _matching_service, _availability_calculator, _skill_resolver, _resolution_stats
    async with _lock:
        _matching_service = None
        _availability_calculator = None
        _skill_resolver = None
        _resolution_stats = None


__all__ = [
    "get_matching_policy",
    "get_matching_service",
    "get_availability_calculator",
    "get_skill_resolver",
    "get_resolution_stats",
    "reset_matching_services",
]
