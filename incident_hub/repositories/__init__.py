"""
Repository implementations for data access.
"""

from incident_hub.repositories.analysis_repo import AnalysisRepository
from incident_hub.repositories.comment_repo import CommentRepository
from incident_hub.repositories.incident_repo import IncidentRepository
from incident_hub.repositories.store import DataStore, InMemoryDataStore
from incident_hub.repositories.supabase_store import SupabaseDataStore
from incident_hub.repositories.team_repo import TeamMemberRepository

__all__ = [
    "DataStore",
    "InMemoryDataStore",
    "SupabaseDataStore",
    "IncidentRepository",
    "TeamMemberRepository",
    "AnalysisRepository",
    "CommentRepository",
]
