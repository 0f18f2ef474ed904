"""
Data store interface and in-memory implementation.
"""

from __future__ import annotations

import itertools
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

from incident_hub.core.logging import get_logger

logger = get_logger(__name__)

Row = dict[str, Any]


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string, the store's timestamp format."""
    return datetime.now(timezone.utc).isoformat()


class DataStore(ABC):
    """
    Table-oriented access to the hosted relational store.

    Rows are plain dicts keyed by column name. Filter values match by
    equality, or by membership when given as a list or tuple.
    """

    @abstractmethod
    async def get(self, table: str, id: str) -> Optional[Row]:
        """Get a row by ID."""
        ...

    @abstractmethod
    async def list(
        self,
        table: str,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Row]:
        """List rows with optional filters, ordering and limit."""
        ...

    @abstractmethod
    async def insert(self, table: str, values: Row) -> Row:
        """Insert a row and return it with its generated ID and timestamp."""
        ...

    @abstractmethod
    async def update(self, table: str, id: str, values: Row) -> Optional[Row]:
        """Apply a partial update; returns None if no row has that ID."""
        ...

    @abstractmethod
    async def delete(self, table: str, id: str) -> bool:
        """Delete a row by ID."""
        ...

    async def close(self) -> None:
        pass


def _matches(row: Row, filters: dict[str, Any]) -> bool:
    for column, expected in filters.items():
        value = row.get(column)
        if isinstance(expected, (list, tuple, set)):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True


class InMemoryDataStore(DataStore):
    """
    In-memory data store for development/testing.
    """

    def __init__(self, tables: Optional[dict[str, list[Row]]] = None) -> None:
        self._tables: dict[str, dict[str, Row]] = {}
        self._order: dict[str, int] = {}
        self._sequence = itertools.count()
        for table, rows in (tables or {}).items():
            for row in rows:
                self._put(table, dict(row))

    def _put(self, table: str, row: Row) -> Row:
        row["id"] = str(row.get("id") or uuid.uuid4())
        row.setdefault("created_at", utc_now_iso())
        self._tables.setdefault(table, {})[row["id"]] = row
        self._order[f"{table}:{row['id']}"] = next(self._sequence)
        return row

    def rows(self, table: str) -> list[Row]:
        """Snapshot of every row in a table, in insertion order."""
        return [dict(r) for r in self._tables.get(table, {}).values()]

    async def get(self, table: str, id: str) -> Optional[Row]:
        row = self._tables.get(table, {}).get(str(id))
        return dict(row) if row is not None else None

    async def list(
        self,
        table: str,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Row]:
        rows = list(self._tables.get(table, {}).values())

        if filters:
            rows = [r for r in rows if _matches(r, filters)]

        if order_by:
            # Insertion order breaks ties so "latest" is deterministic.
            rows.sort(
                key=lambda r: (
                    r.get(order_by) is not None,
                    r.get(order_by) or "",
                    self._order[f"{table}:{r['id']}"],
                ),
                reverse=descending,
            )

        if limit is not None:
            rows = rows[:limit]

        return [dict(r) for r in rows]

    async def insert(self, table: str, values: Row) -> Row:
        row = self._put(table, dict(values))
        logger.debug("Row inserted", table=table, id=row["id"])
        return dict(row)

    async def update(self, table: str, id: str, values: Row) -> Optional[Row]:
        row = self._tables.get(table, {}).get(str(id))
        if row is None:
            return None
        row.update(values)
        row["updated_at"] = utc_now_iso()
        logger.debug("Row updated", table=table, id=id, columns=list(values))
        return dict(row)

    async def delete(self, table: str, id: str) -> bool:
        rows = self._tables.get(table, {})
        if str(id) in rows:
            del rows[str(id)]
            logger.debug("Row deleted", table=table, id=id)
            return True
        return False
