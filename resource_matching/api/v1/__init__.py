"""
API v1 Routes

Matching, skill and assignment endpoints of the resource matching service.
"""

from .assignments import router as assignments_router
from .health import router as health_router
from .matching import router as matching_router
from .skills import router as skills_router

__all__ = [
    "assignments_router",
    "health_router",
    "matching_router",
    "skills_router",
]
