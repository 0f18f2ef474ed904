"""
Incident repository for managing incident rows.
"""

from __future__ import annotations

from typing import Any, Optional

from incident_hub.core.constants import INCIDENTS_TABLE
from incident_hub.core.logging import get_logger
from incident_hub.domain.incident import Incident
from incident_hub.repositories.store import DataStore
from incident_hub.repositories.team_repo import TeamMemberRepository

logger = get_logger(__name__)


class IncidentRepository:
    """
    Maps incident rows to domain models.

    When asked, the assigned team member is resolved and embedded as
    ``assigned_team_member``.
    """

    def __init__(self, store: DataStore, team_members: TeamMemberRepository) -> None:
        self.store = store
        self.team_members = team_members

    async def _with_assignee(self, incident: Incident) -> Incident:
        if incident.assigned_to:
            member = await self.team_members.get(incident.assigned_to)
            if member is not None:
                incident.assigned_team_member = member.summary()
        return incident

    async def get(self, id: str, with_assignee: bool = False) -> Optional[Incident]:
        """Get an incident by ID."""
        row = await self.store.get(INCIDENTS_TABLE, id)
        if row is None:
            return None
        incident = Incident(**row)
        return await self._with_assignee(incident) if with_assignee else incident

    async def list(self) -> list[Incident]:
        """List incidents, newest first."""
        rows = await self.store.list(INCIDENTS_TABLE, order_by="created_at", descending=True)
        return [Incident(**row) for row in rows]

    async def create(self, values: dict[str, Any]) -> Incident:
        """Insert an incident and return it with its assignee embedded."""
        row = await self.store.insert(INCIDENTS_TABLE, values)
        logger.debug("Incident saved", incident_id=row.get("id"))
        return await self._with_assignee(Incident(**row))

    async def update(self, id: str, values: dict[str, Any], with_assignee: bool = False) -> Optional[Incident]:
        """Apply a partial update; returns None if the incident does not exist."""
        row = await self.store.update(INCIDENTS_TABLE, id, values)
        if row is None:
            return None
        incident = Incident(**row)
        return await self._with_assignee(incident) if with_assignee else incident
