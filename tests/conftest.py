"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from incident_hub.api.deps import ServiceContainer, get_container
from incident_hub.clients.completion_client import BaseCompletionClient
from incident_hub.clients.notification_client import TelegramNotifier
from incident_hub.core.config import Settings
from incident_hub.core.constants import (
    INCIDENTS_TABLE,
    TEAM_MEMBERS_TABLE,
)
from incident_hub.core.security import FixedWindowRateLimiter
from incident_hub.main import app
from incident_hub.repositories.analysis_repo import AnalysisRepository
from incident_hub.repositories.incident_repo import IncidentRepository
from incident_hub.repositories.store import InMemoryDataStore
from incident_hub.repositories.team_repo import TeamMemberRepository

ANALYSIS_REPLY = (
    "Possible Cause: Disk on db-01 is full\n\n"
    "Suggested Solution: Rotate logs and extend the volume"
)


@pytest.fixture
def sample_incident_id() -> str:
    """Sample incident ID for testing."""
    return "inc-1"


@pytest.fixture
def sample_member_id() -> str:
    """Sample team member ID for testing."""
    return "tm-1"


@pytest.fixture
def seed_rows(sample_incident_id: str, sample_member_id: str) -> dict[str, list[dict]]:
    return {
        TEAM_MEMBERS_TABLE: [
            {
                "id": sample_member_id,
                "full_name": "Alex Kim",
                "email": "alex@example.com",
                "role": "SRE",
                "department": "Operations",
                "telegram_chat_id": "555",
            },
            {
                "id": "tm-2",
                "full_name": "Bo Lee",
                "email": "bo@example.com",
                "role": "Engineer",
                "department": "Platform",
            },
        ],
        INCIDENTS_TABLE: [
            {
                "id": sample_incident_id,
                "title": "Database down",
                "description": "Primary DB is not accepting connections",
                "status": "Open",
                "priority": "High",
                "category": "Hardware",
                "created_at": "2026-10-01T09:00:00+00:00",
            },
        ],
    }


@pytest.fixture
def store(seed_rows: dict[str, list[dict]]) -> InMemoryDataStore:
    """In-memory data store seeded with one incident and two team members."""
    return InMemoryDataStore(seed_rows)


@pytest.fixture
def team_repo(store: InMemoryDataStore) -> TeamMemberRepository:
    return TeamMemberRepository(store)


@pytest.fixture
def incident_repo(store: InMemoryDataStore, team_repo: TeamMemberRepository) -> IncidentRepository:
    return IncidentRepository(store, team_repo)


@pytest.fixture
def analysis_repo(store: InMemoryDataStore) -> AnalysisRepository:
    return AnalysisRepository(store)


@pytest.fixture
def completion_client() -> AsyncMock:
    """Completion client stub returning a well-formed analysis."""
    client = AsyncMock(spec=BaseCompletionClient)
    client.complete.return_value = ANALYSIS_REPLY
    return client


@pytest.fixture
def notifier() -> AsyncMock:
    client = AsyncMock(spec=TelegramNotifier)
    client.notify_assignment.return_value = True
    return client


@pytest.fixture
def rate_limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(max_requests=3, window_seconds=60)


@pytest.fixture
def container(
    store: InMemoryDataStore,
    completion_client: AsyncMock,
    notifier: AsyncMock,
    rate_limiter: FixedWindowRateLimiter,
) -> ServiceContainer:
    return ServiceContainer(
        settings=Settings(data_store_backend="memory"),
        data_store=store,
        completion_client=completion_client,
        notifier=notifier,
        rate_limiter=rate_limiter,
    )


@pytest.fixture
async def async_client(container: ServiceContainer) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    app.dependency_overrides[get_container] = lambda: container
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
