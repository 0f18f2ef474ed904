"""
Incident endpoints.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from incident_hub.api.deps import (
    enforce_analysis_rate_limit,
    get_analysis_cache_manager,
    get_analytics_service,
    get_incident_service,
)
from incident_hub.domain.analysis import AnalysisRecord
from incident_hub.domain.incident import Identifier, Incident, IncidentCreate, IncidentUpdate
from incident_hub.services.analysis_cache import AnalysisCacheManager
from incident_hub.services.analytics_service import AnalyticsService
from incident_hub.services.incident_service import IncidentService


router = APIRouter()


# Request models
class StatusUpdate(BaseModel):
    status: Optional[str] = Field(default=None, description="New incident status")


class CategoryUpdate(BaseModel):
    category: Optional[str] = Field(default=None, description="New incident category")


class AssignmentUpdate(BaseModel):
    assigned_to: Optional[Identifier] = Field(
        default=None, description="Team member ID, or null to unassign"
    )


@router.get("/incidents/analytics/category")
async def category_analytics(
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> list[dict[str, Any]]:
    """Incident counts per category and status."""
    return await analytics.category_analytics()


@router.get("/incidents/analytics/team-member")
async def team_member_analytics(
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> list[dict[str, Any]]:
    """Assigned and resolved incident counts per team member."""
    return await analytics.team_member_analytics()


@router.get("/incidents", response_model=list[Incident])
async def list_incidents(
    service: IncidentService = Depends(get_incident_service),
) -> list[Incident]:
    """List incidents, newest first."""
    return await service.list_incidents()


@router.get("/incidents/{incident_id}", response_model=Incident)
async def get_incident(
    incident_id: str,
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    return await service.get_incident(incident_id)


@router.post("/incidents", response_model=Incident, status_code=status.HTTP_201_CREATED)
async def create_incident(
    request: IncidentCreate,
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    """
    Create an incident.

    Title and description are required. Status defaults to Open and
    priority to Medium.
    """
    return await service.create_incident(request)


@router.put("/incidents/{incident_id}", response_model=Incident)
async def update_incident(
    incident_id: str,
    request: IncidentUpdate,
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    """Update the fields present in the request body."""
    return await service.update_incident(incident_id, request)


@router.put("/incidents/{incident_id}/status", response_model=Incident)
async def update_incident_status(
    incident_id: str,
    request: StatusUpdate,
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    return await service.update_status(incident_id, request.status)


@router.put("/incidents/{incident_id}/assign", response_model=Incident)
async def assign_incident(
    incident_id: str,
    request: AssignmentUpdate,
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    """
    Assign an incident to a team member.

    The team member is notified over Telegram when they have a chat ID
    configured.
    """
    return await service.assign_incident(incident_id, request.assigned_to)


@router.put("/incidents/{incident_id}/category", response_model=Incident)
async def update_incident_category(
    incident_id: str,
    request: CategoryUpdate,
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    return await service.update_category(incident_id, request.category)


@router.post(
    "/incidents/{incident_id}/analyze",
    response_model=AnalysisRecord,
    dependencies=[Depends(enforce_analysis_rate_limit)],
)
async def analyze_incident(
    incident_id: str,
    manager: AnalysisCacheManager = Depends(get_analysis_cache_manager),
) -> AnalysisRecord:
    """
    Get the root-cause analysis for an incident.

    A cached analysis is returned while the incident's title and
    description are unchanged; otherwise a new one is computed.
    """
    return await manager.analyze(incident_id)
