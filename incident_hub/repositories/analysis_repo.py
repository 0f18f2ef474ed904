"""
Analysis repository for cached incident analyses.
"""

from __future__ import annotations

from typing import Optional

from incident_hub.core.constants import ANALYSIS_TABLE
from incident_hub.domain.analysis import AnalysisRecord
from incident_hub.repositories.store import DataStore


class AnalysisRepository:
    """
    Stores AnalysisRecords in the ``incident_analysis`` table.
    """

    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def latest_for_incident(self, incident_id: str) -> Optional[AnalysisRecord]:
        """Most recently created analysis for an incident, if any."""
        rows = await self.store.list(
            ANALYSIS_TABLE,
            filters={"incident_id": incident_id},
            order_by="created_at",
            descending=True,
            limit=1,
        )
        return AnalysisRecord(**rows[0]) if rows else None

    async def save(self, record: AnalysisRecord) -> AnalysisRecord:
        """Insert a record and return it with its store-assigned ID."""
        row = await self.store.insert(ANALYSIS_TABLE, record.to_row())
        return AnalysisRecord(**row)

    async def delete(self, id: str) -> bool:
        return await self.store.delete(ANALYSIS_TABLE, id)
