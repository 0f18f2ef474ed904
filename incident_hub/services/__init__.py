"""
Service layer implementations.
"""

from incident_hub.services.analysis_cache import AnalysisCacheManager, is_fresh
from incident_hub.services.analysis_parser import ParsedAnalysis, parse_analysis
from incident_hub.services.analytics_service import AnalyticsService
from incident_hub.services.comment_service import CommentService
from incident_hub.services.incident_service import IncidentService

__all__ = [
    "AnalysisCacheManager",
    "is_fresh",
    "ParsedAnalysis",
    "parse_analysis",
    "AnalyticsService",
    "CommentService",
    "IncidentService",
]
