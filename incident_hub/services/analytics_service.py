"""
Incident analytics: per-category and per-member counts, and the weekly
dashboard summary.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

from incident_hub.core.constants import (
    AI_RESOLUTION_TYPE,
    ANALYTICS_WINDOW_DAYS,
    DEFAULT_CATEGORY,
    INCIDENTS_TABLE,
    OPERATIONAL_STATUS,
    RESOLUTIONS_TABLE,
    SERVICE_HEALTH_TABLE,
    TEAM_MEMBERS_TABLE,
    IncidentCategory,
    IncidentStatus,
)
from incident_hub.core.logging import get_logger
from incident_hub.repositories.store import DataStore, Row

logger = get_logger(__name__)

_STATUS_KEYS = {
    IncidentStatus.OPEN.value: "open",
    IncidentStatus.IN_PROGRESS.value: "inProgress",
    IncidentStatus.CLOSED.value: "closed",
}


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def change_percentage(current: float, previous: float) -> float:
    """Percent change from ``previous`` to ``current``; 0 when there is no baseline."""
    if previous == 0:
        return 0
    return round_half_up((current - previous) / previous * 100, 1)


def format_minutes(minutes: int) -> str:
    """Format a duration as ``"<h>h <m>m"``."""
    return f"{minutes // 60}h {minutes % 60}m"


def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        ts = value
    else:
        ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


class Windows:
    """The current and previous analytics windows ending at ``now``."""

    def __init__(self, now: datetime, days: int = ANALYTICS_WINDOW_DAYS) -> None:
        self.current_start = now - timedelta(days=days)
        self.previous_start = now - timedelta(days=2 * days)

    def current(self, rows: Iterable[Row], column: str) -> list[Row]:
        return [r for r in rows if _within(r, column, self.current_start)]

    def previous(self, rows: Iterable[Row], column: str) -> list[Row]:
        return [r for r in rows if _within(r, column, self.previous_start, self.current_start)]


def _within(row: Row, column: str, start: datetime, end: Optional[datetime] = None) -> bool:
    ts = parse_timestamp(row.get(column))
    if ts is None:
        return False
    return ts >= start and (end is None or ts < end)


def _mean_minutes(resolutions: list[Row]) -> int:
    if not resolutions:
        return 0
    total = sum(r.get("resolution_time_minutes") or 0 for r in resolutions)
    return int(round_half_up(total / len(resolutions)))


class AnalyticsService:
    """
    Aggregates incident, resolution and service-health rows.

    Works on raw store rows, so incidents with unknown categories are still
    seen (and skipped with a warning).
    """

    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def category_analytics(self) -> list[dict[str, Any]]:
        """Incident counts per category, broken down by status."""
        rows = await self.store.list(INCIDENTS_TABLE)

        stats = {
            c.value: {"total": 0, "open": 0, "inProgress": 0, "closed": 0}
            for c in IncidentCategory
        }
        for row in rows:
            category = row.get("category") or DEFAULT_CATEGORY.value
            bucket = stats.get(category)
            if bucket is None:
                logger.warning("Incident with unknown category found", category=category)
                continue
            bucket["total"] += 1
            key = _STATUS_KEYS.get(row.get("status"))
            if key:
                bucket[key] += 1

        logger.info("Generated category analytics", incidents=len(rows))
        return [{"category": category, **counts} for category, counts in stats.items()]

    async def team_member_analytics(self) -> list[dict[str, Any]]:
        """Assigned and resolved (Closed) incident counts per team member."""
        members = await self.store.list(TEAM_MEMBERS_TABLE, order_by="full_name")
        incidents = await self.store.list(INCIDENTS_TABLE)

        stats = []
        for member in members:
            member_id = str(member["id"])
            assigned = [i for i in incidents if str(i.get("assigned_to")) == member_id]
            resolved = [i for i in assigned if i.get("status") == IncidentStatus.CLOSED.value]
            stats.append(
                {
                    "id": member_id,
                    "name": member.get("full_name"),
                    "assignedCount": len(assigned),
                    "resolvedCount": len(resolved),
                }
            )

        logger.info("Generated team member analytics", members=len(stats))
        return stats

    async def dashboard_analytics(self, now: Optional[datetime] = None) -> dict[str, Any]:
        """
        Compare the last seven days against the seven days before.

        Args:
            now: End of the current window; defaults to the current UTC time

        Returns:
            Dict with activeIncidents, meanTimeToResolve, serviceHealth and
            aiResolutions sections
        """
        windows = Windows(now or datetime.now(timezone.utc))

        active = await self.store.list(
            INCIDENTS_TABLE, filters={"status": [IncidentStatus.OPEN.value]}
        )
        resolutions = await self.store.list(RESOLUTIONS_TABLE)
        services = await self.store.list(SERVICE_HEALTH_TABLE)

        current_active = len(windows.current(active, "created_at"))
        previous_active = len(windows.previous(active, "created_at"))

        current_resolutions = windows.current(resolutions, "resolved_at")
        previous_resolutions = windows.previous(resolutions, "resolved_at")
        current_mean = _mean_minutes(current_resolutions)
        previous_mean = _mean_minutes(previous_resolutions)

        current_ai = sum(1 for r in current_resolutions if r.get("resolution_type") == AI_RESOLUTION_TYPE)
        previous_ai = sum(1 for r in previous_resolutions if r.get("resolution_type") == AI_RESOLUTION_TYPE)

        operational = [s for s in services if s.get("status") == OPERATIONAL_STATUS]
        issues = ", ".join(
            f"{s.get('service_name')} ({s.get('status')})"
            for s in services
            if s.get("status") != OPERATIONAL_STATUS
        )

        logger.info("Generated dashboard analytics")
        return {
            "activeIncidents": {
                "count": current_active,
                "changePercentage": change_percentage(current_active, previous_active),
            },
            "meanTimeToResolve": {
                "time": format_minutes(current_mean),
                "changePercentage": change_percentage(current_mean, previous_mean),
            },
            "serviceHealth": {
                "count": f"{len(operational)}/{len(services)}",
                "description": issues or "All services operational",
            },
            "aiResolutions": {
                "count": current_ai,
                "changePercentage": change_percentage(current_ai, previous_ai),
            },
        }
