"""
Incident service for incident lifecycle and team roster operations.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from incident_hub.clients.notification_client import TelegramNotifier
from incident_hub.core.constants import IncidentCategory, IncidentPriority, IncidentStatus
from incident_hub.core.exceptions import (
    IncidentNotFoundError,
    TeamMemberNotFoundError,
    ValidationError,
)
from incident_hub.core.logging import get_logger
from incident_hub.domain.incident import Incident, IncidentCreate, IncidentUpdate, TeamMember
from incident_hub.repositories.incident_repo import IncidentRepository
from incident_hub.repositories.team_repo import TeamMemberRepository

logger = get_logger(__name__)

VALID_STATUSES = [s.value for s in IncidentStatus]
VALID_CATEGORIES = [c.value for c in IncidentCategory]

# Columns that may be changed but never cleared.
REQUIRED_FIELDS = ("title", "description", "status", "priority")


class IncidentService:
    """
    Service for creating, updating and assigning incidents.
    """

    def __init__(
        self,
        incidents: IncidentRepository,
        team_members: TeamMemberRepository,
        notifier: Optional[TelegramNotifier] = None,
    ) -> None:
        """
        Initialize the incident service.

        Args:
            incidents: Incident repository
            team_members: Team member repository
            notifier: Assignment notifier; notifications are skipped when None
        """
        self.incidents = incidents
        self.team_members = team_members
        self.notifier = notifier

    # ------------------------------------------------------------------
    # Incidents
    # ------------------------------------------------------------------

    async def list_incidents(self) -> list[Incident]:
        incidents = await self.incidents.list()
        logger.info("Fetched incidents", count=len(incidents))
        return incidents

    async def get_incident(self, incident_id: str) -> Incident:
        incident = await self.incidents.get(incident_id, with_assignee=True)
        if incident is None:
            raise IncidentNotFoundError(incident_id)
        return incident

    async def _require_team_member(self, member_id: str) -> TeamMember:
        member = await self.team_members.get(member_id)
        if member is None:
            logger.warning("Invalid team member ID provided for assignment", member_id=member_id)
            raise ValidationError(
                "Invalid team member ID provided",
                details=f"No team member with ID '{member_id}'",
                field="assigned_to",
            )
        return member

    async def create_incident(self, data: IncidentCreate) -> Incident:
        """
        Create an incident.

        Title and description are required; status defaults to Open and
        priority to Medium.

        Raises:
            ValidationError: If a required field is missing or the assignee is unknown
        """
        if not data.title or not data.description:
            logger.warning("Title and description are required for creating incident")
            raise ValidationError(
                "Title and description are required",
                field="title" if not data.title else "description",
            )

        if data.assigned_to:
            await self._require_team_member(data.assigned_to)

        values = data.model_dump(exclude_none=True)
        values.setdefault("status", IncidentStatus.OPEN.value)
        values.setdefault("priority", IncidentPriority.MEDIUM.value)

        incident = await self.incidents.create(values)
        logger.info("Created incident", incident_id=incident.id)
        return incident

    async def update_incident(self, incident_id: str, data: IncidentUpdate) -> Incident:
        """Apply the fields present in ``data`` to an incident."""
        values = data.model_dump(exclude_unset=True)
        cleared = [f for f in REQUIRED_FIELDS if f in values and not values[f]]
        if cleared:
            raise ValidationError(
                f"{cleared[0].capitalize()} cannot be empty",
                details=f"Fields that cannot be cleared: {', '.join(cleared)}",
                field=cleared[0],
            )
        if values.get("assigned_to"):
            await self._require_team_member(values["assigned_to"])

        incident = await self.incidents.update(incident_id, values, with_assignee=True)
        if incident is None:
            raise IncidentNotFoundError(incident_id)

        logger.info("Updated incident", incident_id=incident_id, fields=sorted(values))
        return incident

    async def update_status(self, incident_id: str, status: Optional[str]) -> Incident:
        if not status:
            raise ValidationError("Status is required", field="status")
        if status not in VALID_STATUSES:
            raise ValidationError(
                "Invalid status value",
                details=f"Status must be one of: {', '.join(VALID_STATUSES)}",
                field="status",
            )

        incident = await self.incidents.update(incident_id, {"status": status})
        if incident is None:
            raise IncidentNotFoundError(incident_id)

        logger.info("Updated incident status", incident_id=incident_id, status=status)
        return incident

    async def update_category(self, incident_id: str, category: Optional[str]) -> Incident:
        if not category or category not in VALID_CATEGORIES:
            raise ValidationError(
                "Invalid category",
                details=f"Category must be one of: {', '.join(VALID_CATEGORIES)}",
                field="category",
            )

        incident = await self.incidents.update(incident_id, {"category": category})
        if incident is None:
            raise IncidentNotFoundError(incident_id)

        logger.info("Updated incident category", incident_id=incident_id, category=category)
        return incident

    async def assign_incident(self, incident_id: str, assigned_to: Optional[str]) -> Incident:
        """
        Assign an incident to a team member, or unassign it when
        ``assigned_to`` is None.

        The assignee is notified when they have a chat configured; the
        outcome of the notification does not affect the assignment.
        """
        if assigned_to:
            member, incident = await asyncio.gather(
                self.team_members.get(assigned_to),
                self.incidents.get(incident_id),
            )
            if member is None:
                logger.warning("Invalid team member ID provided for assignment", member_id=assigned_to)
                raise ValidationError(
                    "Invalid team member ID provided",
                    details=f"No team member with ID '{assigned_to}'",
                    field="assigned_to",
                )
            if incident is None:
                raise IncidentNotFoundError(incident_id)

            await self._notify(member, incident)

        updated = await self.incidents.update(
            incident_id, {"assigned_to": assigned_to}, with_assignee=True
        )
        if updated is None:
            raise IncidentNotFoundError(incident_id)

        logger.info("Updated incident assignment", incident_id=incident_id, assigned_to=assigned_to)
        return updated

    async def _notify(self, member: TeamMember, incident: Incident) -> None:
        if not member.telegram_chat_id:
            logger.info("No Telegram chat ID for team member", member_id=member.id)
            return
        if self.notifier is None:
            return
        try:
            await self.notifier.notify_assignment(member.telegram_chat_id, incident)
        except Exception as e:
            logger.warning("Assignment notification failed", member_id=member.id, error=str(e))

    # ------------------------------------------------------------------
    # Team members
    # ------------------------------------------------------------------

    async def list_team_members(self) -> list[TeamMember]:
        members = await self.team_members.list()
        logger.info("Fetched team members", count=len(members))
        return members

    async def get_team_member(self, member_id: str) -> TeamMember:
        member = await self.team_members.get(member_id)
        if member is None:
            raise TeamMemberNotFoundError(member_id)
        return member
