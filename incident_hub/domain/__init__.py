"""
Domain models.
"""

from incident_hub.domain.analysis import AnalysisRecord
from incident_hub.domain.incident import (
    Comment,
    Incident,
    IncidentCreate,
    IncidentSnapshot,
    IncidentUpdate,
    TeamMember,
    TeamMemberSummary,
)

__all__ = [
    "AnalysisRecord",
    "Comment",
    "Incident",
    "IncidentCreate",
    "IncidentSnapshot",
    "IncidentUpdate",
    "TeamMember",
    "TeamMemberSummary",
]
