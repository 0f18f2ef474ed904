"""
Team member endpoints.
"""

from fastapi import APIRouter, Depends

from incident_hub.api.deps import get_incident_service
from incident_hub.domain.incident import TeamMember
from incident_hub.services.incident_service import IncidentService

router = APIRouter()


@router.get("/team-members", response_model=list[TeamMember])
async def list_team_members(
    service: IncidentService = Depends(get_incident_service),
) -> list[TeamMember]:
    """List team members ordered by name."""
    return await service.list_team_members()


@router.get("/team-members/{member_id}", response_model=TeamMember)
async def get_team_member(
    member_id: str,
    service: IncidentService = Depends(get_incident_service),
) -> TeamMember:
    return await service.get_team_member(member_id)
