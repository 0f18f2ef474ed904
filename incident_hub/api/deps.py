"""
API dependencies for dependency injection.
"""

from typing import Optional

from fastapi import Depends, Request

from incident_hub.clients.completion_client import BaseCompletionClient, ChatCompletionClient
from incident_hub.clients.notification_client import TelegramNotifier
from incident_hub.core.config import Settings, get_settings
from incident_hub.core.exceptions import RateLimitError
from incident_hub.core.logging import get_logger
from incident_hub.core.security import FixedWindowRateLimiter
from incident_hub.repositories.analysis_repo import AnalysisRepository
from incident_hub.repositories.comment_repo import CommentRepository
from incident_hub.repositories.incident_repo import IncidentRepository
from incident_hub.repositories.store import DataStore, InMemoryDataStore
from incident_hub.repositories.supabase_store import SupabaseDataStore
from incident_hub.repositories.team_repo import TeamMemberRepository
from incident_hub.services.analysis_cache import AnalysisCacheManager
from incident_hub.services.analytics_service import AnalyticsService
from incident_hub.services.comment_service import CommentService
from incident_hub.services.incident_service import IncidentService

logger = get_logger(__name__)


class ServiceContainer:
    """
    Container for all application services.

    External clients may be passed in; anything not supplied is built from
    settings on first use.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        data_store: Optional[DataStore] = None,
        completion_client: Optional[BaseCompletionClient] = None,
        notifier: Optional[TelegramNotifier] = None,
        rate_limiter: Optional[FixedWindowRateLimiter] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._data_store = data_store
        self._completion_client = completion_client
        self._notifier = notifier
        self._rate_limiter = rate_limiter
        self._initialized = False

    def _build_data_store(self) -> DataStore:
        if self.settings.data_store_backend == "memory":
            logger.info("Using in-memory data store")
            return InMemoryDataStore()
        return SupabaseDataStore.from_settings(self.settings.supabase)

    def initialize(self) -> None:
        """Initialize all services."""
        if self._initialized:
            return

        # Clients
        if self._data_store is None:
            self._data_store = self._build_data_store()
        if self._completion_client is None:
            self._completion_client = ChatCompletionClient.from_settings(self.settings.completion)
        if self._notifier is None:
            self._notifier = TelegramNotifier.from_settings(self.settings.telegram)
        if self._rate_limiter is None:
            self._rate_limiter = FixedWindowRateLimiter(
                max_requests=self.settings.rate_limit.max_requests,
                window_seconds=self.settings.rate_limit.window_seconds,
            )

        # Repositories
        team_members = TeamMemberRepository(self._data_store)
        incidents = IncidentRepository(self._data_store, team_members)
        analyses = AnalysisRepository(self._data_store)
        comments = CommentRepository(self._data_store)

        # Services
        self._incident_service = IncidentService(incidents, team_members, self._notifier)
        self._analysis_cache_manager = AnalysisCacheManager(
            incidents, analyses, self._completion_client
        )
        self._comment_service = CommentService(comments)
        self._analytics_service = AnalyticsService(self._data_store)

        self._initialized = True

    async def close(self) -> None:
        """Close outbound clients."""
        if not self._initialized:
            return
        await self._data_store.close()
        await self._completion_client.close()
        await self._notifier.close()

    @property
    def rate_limiter(self) -> FixedWindowRateLimiter:
        """Get the analysis rate limiter."""
        self.initialize()
        return self._rate_limiter

    @property
    def incident_service(self) -> IncidentService:
        """Get the incident service."""
        self.initialize()
        return self._incident_service

    @property
    def analysis_cache_manager(self) -> AnalysisCacheManager:
        """Get the analysis cache manager."""
        self.initialize()
        return self._analysis_cache_manager

    @property
    def comment_service(self) -> CommentService:
        self.initialize()
        return self._comment_service

    @property
    def analytics_service(self) -> AnalyticsService:
        self.initialize()
        return self._analytics_service


# Application container instance
container = ServiceContainer()


# Dependency functions for FastAPI
def get_container() -> ServiceContainer:
    """Get the service container."""
    return container


def get_incident_service(c: ServiceContainer = Depends(get_container)) -> IncidentService:
    """Get the incident service instance."""
    return c.incident_service


def get_analysis_cache_manager(
    c: ServiceContainer = Depends(get_container),
) -> AnalysisCacheManager:
    """Get the analysis cache manager instance."""
    return c.analysis_cache_manager


def get_comment_service(c: ServiceContainer = Depends(get_container)) -> CommentService:
    """Get the comment service instance."""
    return c.comment_service


def get_analytics_service(c: ServiceContainer = Depends(get_container)) -> AnalyticsService:
    """Get the analytics service instance."""
    return c.analytics_service


async def enforce_analysis_rate_limit(
    request: Request,
    c: ServiceContainer = Depends(get_container),
) -> None:
    """Reject the request with 429 once the client's window is used up."""
    client_id = request.client.host if request.client else "unknown"
    limiter = c.rate_limiter
    if not limiter.is_allowed(client_id):
        retry_after = limiter.get_retry_after(client_id)
        logger.warning("Analysis rate limit exceeded", client=client_id, retry_after=retry_after)
        raise RateLimitError(retry_after=retry_after)
