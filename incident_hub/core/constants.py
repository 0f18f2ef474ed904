"""
System-wide constants for Incident Hub.
"""

from enum import Enum


# =============================================================================
# Enums
# =============================================================================


class IncidentStatus(str, Enum):
    """Incident lifecycle states."""

    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    CLOSED = "Closed"


class IncidentPriority(str, Enum):
    """Incident priority levels."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class IncidentCategory(str, Enum):
    """Incident categories used for analytics."""

    HARDWARE = "Hardware"
    SOFTWARE = "Software"
    SERVICES = "Services"


class MessageRole(str, Enum):
    """Message roles in a chat completion request."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


# =============================================================================
# API Constants
# =============================================================================

API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}"

# =============================================================================
# Tables
# =============================================================================

INCIDENTS_TABLE = "incidents"
TEAM_MEMBERS_TABLE = "team_members"
COMMENTS_TABLE = "comments"
ANALYSIS_TABLE = "incident_analysis"
RESOLUTIONS_TABLE = "incident_resolutions"
SERVICE_HEALTH_TABLE = "service_health"

# =============================================================================
# Analysis
# =============================================================================

ANALYSIS_SYSTEM_PROMPT = (
    "You are an IT incident response expert. Your task is to analyze IT incidents "
    "and provide clear, actionable insights. Always format your response exactly as follows:\n\n"
    "Possible Cause: [Your analysis of the likely cause]\n\n"
    "Suggested Solution: [Your recommended solution]\n\n"
    "Do not include any additional text or explanations outside these sections."
)

ANALYSIS_USER_PROMPT = (
    "Incident Title: {title}\n\n"
    "Description: {description}\n\n"
    "Please analyze this incident and provide a possible cause and suggested solution."
)

CAUSE_LABEL = "Possible Cause"
SOLUTION_LABEL = "Suggested Solution"

CAUSE_PLACEHOLDER = "Unable to determine cause"
SOLUTION_PLACEHOLDER = "No solution suggested"

# =============================================================================
# Analytics
# =============================================================================

DEFAULT_CATEGORY = IncidentCategory.SOFTWARE
OPERATIONAL_STATUS = "Operational"
AI_RESOLUTION_TYPE = "AI"
ANALYTICS_WINDOW_DAYS = 7

# =============================================================================
# Notifications
# =============================================================================

ASSIGNMENT_MESSAGE = (
    "\U0001F6A8 New Incident Assignment\n\n"
    "Title: {title}\n"
    "Priority: {priority}\n"
    "Status: {status}\n\n"
    "You have been assigned to this incident."
)
