"""
Team member repository.
"""

from __future__ import annotations

from typing import Optional

from incident_hub.core.constants import TEAM_MEMBERS_TABLE
from incident_hub.domain.incident import TeamMember
from incident_hub.repositories.store import DataStore


class TeamMemberRepository:
    """Read-only access to the team roster."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def get(self, id: str) -> Optional[TeamMember]:
        row = await self.store.get(TEAM_MEMBERS_TABLE, id)
        return TeamMember(**row) if row else None

    async def list(self) -> list[TeamMember]:
        rows = await self.store.list(TEAM_MEMBERS_TABLE, order_by="full_name")
        return [TeamMember(**row) for row in rows]
