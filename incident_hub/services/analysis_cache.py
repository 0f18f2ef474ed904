"""
Cached root-cause analysis for incidents.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import structlog

from incident_hub.clients.completion_client import BaseCompletionClient
from incident_hub.core.constants import ANALYSIS_SYSTEM_PROMPT, ANALYSIS_USER_PROMPT
from incident_hub.core.exceptions import IncidentNotFoundError, UpstreamError
from incident_hub.core.logging import get_logger
from incident_hub.domain.analysis import AnalysisRecord
from incident_hub.domain.incident import Incident
from incident_hub.repositories.analysis_repo import AnalysisRepository
from incident_hub.repositories.incident_repo import IncidentRepository
from incident_hub.services.analysis_parser import parse_analysis


def is_fresh(record: AnalysisRecord, incident: Incident) -> bool:
    """A cached analysis is valid while the incident's title and description are unchanged."""
    return record.snapshot == incident.snapshot()


def build_user_prompt(incident: Incident) -> str:
    return ANALYSIS_USER_PROMPT.format(title=incident.title, description=incident.description)


class AnalysisCacheManager:
    """
    Returns an analysis for an incident, computing one only when the cached
    record is missing or stale.

    Per call there is at most one completion request and at most one
    delete+insert against the store; a fresh cache makes no external call.
    Cache failures are logged and never fail the read: an unreadable cache
    is treated as missing, and an analysis that cannot be written is
    returned unsaved.
    """

    def __init__(
        self,
        incidents: IncidentRepository,
        analyses: AnalysisRepository,
        completion_client: BaseCompletionClient,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ) -> None:
        """
        Initialize the manager.

        Args:
            incidents: Incident repository
            analyses: Analysis repository
            completion_client: Chat-completion client
            logger: Logger receiving progress and cache failures
        """
        self.incidents = incidents
        self.analyses = analyses
        self.completion_client = completion_client
        self.logger = logger or get_logger(__name__)

    async def analyze(self, incident_id: str) -> AnalysisRecord:
        """
        Get the current analysis for an incident.

        Raises:
            IncidentNotFoundError: If the incident does not exist
            ConfigurationError: If the completion service has no credential
            UpstreamError: If the store or completion service fails
        """
        log = self.logger.bind(incident_id=incident_id)
        log.info("Starting incident analysis")

        incident = await self.incidents.get(incident_id)
        if incident is None:
            log.warning("Incident not found for analysis")
            raise IncidentNotFoundError(incident_id)

        cached = await self._lookup(incident, log)
        if cached is not None:
            if is_fresh(cached, incident):
                log.info("Using cached analysis", analysis_id=cached.id)
                return cached
            log.info("Incident content changed, discarding cached analysis", analysis_id=cached.id)
            await self._discard(cached, log)

        return await self._recompute(incident, log)

    async def _lookup(
        self, incident: Incident, log: structlog.stdlib.BoundLogger
    ) -> Optional[AnalysisRecord]:
        try:
            return await self.analyses.latest_for_incident(incident.id)
        except UpstreamError as e:
            log.error("Failed to fetch cached analysis", error=e.message, details=e.details)
            return None

    async def _discard(self, record: AnalysisRecord, log: structlog.stdlib.BoundLogger) -> None:
        try:
            await self.analyses.delete(record.id)
        except UpstreamError as e:
            log.error("Failed to delete stale analysis", analysis_id=record.id, error=e.message)

    async def _recompute(
        self, incident: Incident, log: structlog.stdlib.BoundLogger
    ) -> AnalysisRecord:
        raw = await self.completion_client.complete(
            ANALYSIS_SYSTEM_PROMPT, build_user_prompt(incident)
        )
        parsed = parse_analysis(raw)
        log.info("Extracted analysis", cause=parsed.cause, solution=parsed.solution)

        snapshot = incident.snapshot()
        record = AnalysisRecord(
            incident_id=incident.id,
            title=snapshot.title,
            description=snapshot.description,
            possible_cause=parsed.cause,
            suggested_solution=parsed.solution,
            created_at=datetime.now(timezone.utc),
        )

        try:
            saved = await self.analyses.save(record)
        except UpstreamError as e:
            log.error("Failed to cache analysis", error=e.message, details=e.details)
            return record

        log.info("Cached new analysis", analysis_id=saved.id)
        return saved
