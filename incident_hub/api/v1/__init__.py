"""
API v1 routers.
"""

from incident_hub.api.v1 import analytics, comments, health, incidents, team_members

__all__ = ["analytics", "comments", "health", "incidents", "team_members"]
