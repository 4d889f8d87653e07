"""
API Package

Central package for all API endpoints.
Provides versioned API routes with proper namespace management.

Note: Routers are imported lazily to avoid circular import issues with application services.
"""

from fastapi import APIRouter


def create_api_router() -> APIRouter:
    """
    Create and configure the main API router with all v1 routes.

    Uses lazy imports to avoid circular dependencies between:
    - Application layer services
    - API schemas
    - API dependencies
    - API routers
    """
    # Import v1 routes only when creating the router (lazy import)
    from resource_matching.api.v1.assignments import router as assignments_router
    from resource_matching.api.v1.matching import router as matching_router
    from resource_matching.api.v1.skills import router as skills_router

    api_router = APIRouter()

    api_router.include_router(matching_router, prefix="/api/v1")
    api_router.include_router(skills_router, prefix="/api/v1")
    api_router.include_router(assignments_router, prefix="/api/v1")

    return api_router


__all__ = ["create_api_router"]
