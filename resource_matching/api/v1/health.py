"""Health check endpoints."""

from datetime import datetime

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from resource_matching.core.config import get_settings
from resource_matching.core.transaction_manager import get_transaction_manager
from resource_matching.infrastructure.providers.database_provider import get_database_manager

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Basic health check endpoint"""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@router.get("/health/database")
async def database_health_check():
    """Database health including pool usage and transaction counters"""
    try:
        db_manager = await get_database_manager()
        db_health = await db_manager.health_check()
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        db_health = {"status": "unhealthy", "error": str(e)}

    body = {
        **db_health,
        "transaction_stats": get_transaction_manager().get_transaction_stats(),
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }
    status_code = 200 if db_health.get("status") == "healthy" else 503
    return JSONResponse(status_code=status_code, content=body)
