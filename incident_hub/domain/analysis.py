"""
Analysis domain model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from incident_hub.domain.incident import Identifier, IncidentSnapshot


class AnalysisRecord(BaseModel):
    """
    A root-cause suggestion computed for an incident.

    ``title`` and ``description`` hold the incident content at analysis time;
    a record is only reused while they still match the incident. ``id`` is
    None for a record that could not be persisted.
    """

    id: Optional[Identifier] = None
    incident_id: Identifier = Field(..., description="Owning incident")
    title: str = Field(..., description="Incident title at analysis time")
    description: str = Field(default="", description="Incident description at analysis time")
    possible_cause: str
    suggested_solution: str
    created_at: Optional[datetime] = None

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, v: Optional[str]) -> str:
        return v or ""

    @property
    def snapshot(self) -> IncidentSnapshot:
        return IncidentSnapshot(title=self.title, description=self.description)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def to_row(self) -> dict[str, Any]:
        """Column values for insertion; the store assigns the id."""
        return self.model_dump(mode="json", exclude={"id"}, exclude_none=True)
