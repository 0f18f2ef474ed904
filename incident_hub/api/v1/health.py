"""
Health check endpoints.
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends

from incident_hub.api.deps import ServiceContainer, get_container
from incident_hub.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Basic health check endpoint.
    Returns application status.
    """
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.app_env,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
async def readiness_check(c: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    """
    Readiness check endpoint.
    Reports whether the configured backends have what they need to start.
    """
    data_store_ready = (
        c.settings.data_store_backend == "memory"
        or bool(c.settings.supabase.url and c.settings.supabase.anon_key)
    )
    checks = {
        "app": True,
        "data_store": data_store_ready,
        "completion_service": bool(c.settings.completion.api_key),
    }

    return {
        "status": "ready" if data_store_ready else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """
    Liveness check endpoint.
    Simple check that the application is running.
    """
    return {"status": "alive"}
