"""
Dashboard analytics endpoint.
"""

from typing import Any

from fastapi import APIRouter, Depends

from incident_hub.api.deps import get_analytics_service
from incident_hub.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/analytics/dashboard")
async def dashboard_analytics(
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> dict[str, Any]:
    """
    Weekly dashboard summary.

    Compares the last seven days against the seven days before for active
    incidents, mean time to resolve and AI resolutions, and reports current
    service health.
    """
    return await analytics.dashboard_analytics()
