"""
Unit tests for incident analytics.
"""

from datetime import datetime, timedelta, timezone

import pytest

from incident_hub.core.constants import (
    INCIDENTS_TABLE,
    RESOLUTIONS_TABLE,
    SERVICE_HEALTH_TABLE,
    TEAM_MEMBERS_TABLE,
)
from incident_hub.repositories.store import InMemoryDataStore
from incident_hub.services.analytics_service import (
    AnalyticsService,
    change_percentage,
    format_minutes,
)

NOW = datetime(2026, 10, 15, 12, 0, tzinfo=timezone.utc)


def _days_ago(days: float) -> str:
    return (NOW - timedelta(days=days)).isoformat()


@pytest.fixture
def analytics_store() -> InMemoryDataStore:
    return InMemoryDataStore(
        {
            TEAM_MEMBERS_TABLE: [
                {"id": "tm-2", "full_name": "Bo Lee"},
                {"id": "tm-1", "full_name": "Alex Kim"},
            ],
            INCIDENTS_TABLE: [
                {"title": "a", "status": "Open", "category": "Hardware", "assigned_to": "tm-1", "created_at": _days_ago(1)},
                {"title": "b", "status": "Open", "category": None, "assigned_to": "tm-1", "created_at": _days_ago(2)},
                {"title": "c", "status": "Closed", "category": "Software", "assigned_to": "tm-1", "created_at": _days_ago(3)},
                {"title": "d", "status": "In Progress", "category": "Services", "assigned_to": "tm-2", "created_at": _days_ago(4)},
                {"title": "e", "status": "Open", "category": "Network", "created_at": _days_ago(10)},
                {"title": "f", "status": "Open", "category": "Hardware", "created_at": _days_ago(20)},
            ],
            RESOLUTIONS_TABLE: [
                {"resolved_at": _days_ago(1), "resolution_time_minutes": 90, "resolution_type": "AI"},
                {"resolved_at": _days_ago(2), "resolution_time_minutes": 61, "resolution_type": "Manual"},
                {"resolved_at": _days_ago(9), "resolution_time_minutes": 60, "resolution_type": "AI"},
            ],
            SERVICE_HEALTH_TABLE: [
                {"service_name": "API", "status": "Operational"},
                {"service_name": "Email", "status": "Degraded"},
                {"service_name": "VPN", "status": "Operational"},
            ],
        }
    )


@pytest.fixture
def analytics(analytics_store: InMemoryDataStore) -> AnalyticsService:
    return AnalyticsService(analytics_store)


async def test_category_analytics(analytics: AnalyticsService) -> None:
    stats = {row["category"]: row for row in await analytics.category_analytics()}

    assert list(stats) == ["Hardware", "Software", "Services"]
    assert stats["Hardware"] == {"category": "Hardware", "total": 2, "open": 2, "inProgress": 0, "closed": 0}
    # Uncategorized incidents count as Software; unknown categories are skipped.
    assert stats["Software"]["total"] == 2
    assert stats["Software"]["open"] == 1
    assert stats["Software"]["closed"] == 1
    assert stats["Services"]["inProgress"] == 1


async def test_team_member_analytics(analytics: AnalyticsService) -> None:
    stats = await analytics.team_member_analytics()

    assert stats == [
        {"id": "tm-1", "name": "Alex Kim", "assignedCount": 3, "resolvedCount": 1},
        {"id": "tm-2", "name": "Bo Lee", "assignedCount": 1, "resolvedCount": 0},
    ]


async def test_dashboard_analytics(analytics: AnalyticsService) -> None:
    data = await analytics.dashboard_analytics(now=NOW)

    # Open incidents: two this week, one the week before.
    assert data["activeIncidents"] == {"count": 2, "changePercentage": 100.0}
    # Mean of 90 and 61 minutes rounds to 76.
    assert data["meanTimeToResolve"]["time"] == "1h 16m"
    assert data["meanTimeToResolve"]["changePercentage"] == 26.7
    assert data["serviceHealth"] == {"count": "2/3", "description": "Email (Degraded)"}
    assert data["aiResolutions"] == {"count": 1, "changePercentage": 0.0}


async def test_dashboard_with_empty_tables() -> None:
    data = await AnalyticsService(InMemoryDataStore()).dashboard_analytics(now=NOW)

    assert data["activeIncidents"] == {"count": 0, "changePercentage": 0}
    assert data["meanTimeToResolve"]["time"] == "0h 0m"
    assert data["serviceHealth"] == {"count": "0/0", "description": "All services operational"}


@pytest.mark.parametrize(
    "current, previous, expected",
    [(5, 0, 0), (3, 2, 50.0), (1, 3, -66.7), (2, 3, -33.3), (4, 4, 0.0)],
)
def test_change_percentage(current: int, previous: int, expected: float) -> None:
    assert change_percentage(current, previous) == expected


def test_format_minutes() -> None:
    assert format_minutes(0) == "0h 0m"
    assert format_minutes(125) == "2h 5m"
