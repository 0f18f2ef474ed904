"""
Custom exception hierarchy for Incident Hub.
Provides structured error handling with proper HTTP status codes.
"""

from typing import Any, Optional


class IncidentHubError(Exception):
    """Base exception for all Incident Hub errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[str] = None,
        status_code: int = 500,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Configuration Errors (500)
# =============================================================================


class ConfigurationError(IncidentHubError):
    """A required secret or setting is missing."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=details,
            status_code=500,
        )


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(IncidentHubError):
    """Caller-supplied data is missing or invalid."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details=details,
            status_code=400,
            context={"field": field} if field else None,
        )
        self.field = field


# =============================================================================
# Not Found Errors (404)
# =============================================================================


class NotFoundError(IncidentHubError):
    """Requested resource not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        msg = message or f"{resource_type} not found"
        details = None
        if resource_id:
            details = f"{resource_type} with ID '{resource_id}' not found"

        super().__init__(
            message=msg,
            code="NOT_FOUND",
            details=details,
            status_code=404,
            context={"resource_type": resource_type, "resource_id": resource_id},
        )


class IncidentNotFoundError(NotFoundError):
    """Incident not found."""

    def __init__(self, incident_id: str) -> None:
        super().__init__(resource_type="Incident", resource_id=incident_id)
        self.code = "INCIDENT_NOT_FOUND"


class TeamMemberNotFoundError(NotFoundError):
    """Team member not found."""

    def __init__(self, member_id: str) -> None:
        super().__init__(resource_type="Team member", resource_id=member_id)
        self.code = "TEAM_MEMBER_NOT_FOUND"


# =============================================================================
# Upstream Errors (500)
# =============================================================================


class UpstreamError(IncidentHubError):
    """Error communicating with an external service."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=f"{service_name} error: {message}",
            code="UPSTREAM_ERROR",
            details=details or message,
            status_code=500,
            context={"service": service_name, **(context or {})},
        )
        self.service_name = service_name


class DataStoreError(UpstreamError):
    """Error communicating with the hosted database."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(service_name="Data store", message=message, details=details, context=context)
        self.code = "DATA_STORE_ERROR"


class CompletionServiceError(UpstreamError):
    """Error communicating with the chat-completion service."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(service_name="Completion service", message=message, details=details, context=context)
        self.code = "COMPLETION_SERVICE_ERROR"


# =============================================================================
# Rate Limiting Errors (429)
# =============================================================================


class RateLimitError(IncidentHubError):
    """Rate limit exceeded."""

    def __init__(self, retry_after: Optional[int] = None) -> None:
        details = None
        if retry_after:
            details = f"Retry after {retry_after} seconds"

        super().__init__(
            message="Too many requests, please try again later",
            code="RATE_LIMIT_EXCEEDED",
            details=details,
            status_code=429,
            context={"retry_after_seconds": retry_after} if retry_after else None,
        )
        self.retry_after = retry_after
