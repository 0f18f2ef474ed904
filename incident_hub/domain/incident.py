"""
Incident, team member and comment domain models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from incident_hub.core.constants import IncidentCategory, IncidentPriority, IncidentStatus

# Row identifiers may come back from the store as integers or UUID strings.
Identifier = Annotated[str, BeforeValidator(str)]


@dataclass(frozen=True)
class IncidentSnapshot:
    """The incident content an analysis was computed from."""

    title: str
    description: str


class TeamMemberSummary(BaseModel):
    """Team member fields embedded in an incident."""

    id: Identifier
    full_name: str
    email: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None


class TeamMember(BaseModel):
    """Team member domain model."""

    id: Identifier = Field(..., description="Unique team member identifier")
    full_name: str = Field(..., description="Display name")
    email: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    telegram_chat_id: Optional[Identifier] = Field(
        default=None, description="Chat used for assignment notifications"
    )
    created_at: Optional[datetime] = None

    def summary(self) -> TeamMemberSummary:
        return TeamMemberSummary(
            id=self.id,
            full_name=self.full_name,
            email=self.email,
            role=self.role,
            department=self.department,
        )


class Incident(BaseModel):
    """Incident domain model."""

    id: Identifier = Field(..., description="Unique incident identifier")
    title: str = Field(..., description="Short incident title")
    description: str = Field(default="", description="Incident description")
    status: IncidentStatus = Field(default=IncidentStatus.OPEN)
    priority: IncidentPriority = Field(default=IncidentPriority.MEDIUM)
    category: Optional[IncidentCategory] = None

    assigned_to: Optional[Identifier] = Field(
        default=None, description="Assigned team member ID"
    )
    resolution: Optional[str] = None
    source: Optional[str] = None
    client: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    assigned_team_member: Optional[TeamMemberSummary] = None

    class Config:
        use_enum_values = True

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, v: Optional[str]) -> str:
        return v or ""

    def snapshot(self) -> IncidentSnapshot:
        """Current title/description, as compared against cached analyses."""
        return IncidentSnapshot(title=self.title, description=self.description)


class IncidentCreate(BaseModel):
    """Fields accepted when creating an incident."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[IncidentStatus] = None
    priority: Optional[IncidentPriority] = None
    category: Optional[IncidentCategory] = None
    assigned_to: Optional[Identifier] = None
    resolution: Optional[str] = None
    source: Optional[str] = None
    client: Optional[str] = None

    class Config:
        use_enum_values = True


class IncidentUpdate(BaseModel):
    """Partial incident update; only fields explicitly sent are applied."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[IncidentStatus] = None
    priority: Optional[IncidentPriority] = None
    category: Optional[IncidentCategory] = None
    assigned_to: Optional[Identifier] = None
    resolution: Optional[str] = None
    source: Optional[str] = None
    client: Optional[str] = None

    class Config:
        use_enum_values = True


class Comment(BaseModel):
    """A free-text comment left on the dashboard."""

    id: Identifier
    name: str
    comment: str
    created_at: Optional[datetime] = None
