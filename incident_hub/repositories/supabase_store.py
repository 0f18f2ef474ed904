"""
Supabase data store, speaking PostgREST over HTTP.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from incident_hub.clients.base_client import BaseHTTPClient
from incident_hub.core.config import SupabaseSettings
from incident_hub.core.exceptions import ConfigurationError, DataStoreError, UpstreamError
from incident_hub.core.logging import get_logger
from incident_hub.repositories.store import DataStore, Row, utc_now_iso

logger = get_logger(__name__)

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def filter_params(filters: Optional[dict[str, Any]]) -> dict[str, str]:
    """
    Translate equality/membership filters into PostgREST query parameters.

    Example:
        filter_params({"status": ["Open", "In Progress"], "category": "Hardware"})
        -> {"status": 'in.("Open","In Progress")', "category": "eq.Hardware"}
    """
    params: dict[str, str] = {}
    for column, value in (filters or {}).items():
        if isinstance(value, (list, tuple, set)):
            quoted = ",".join('"{}"'.format(_literal(v).replace('"', '\\"')) for v in value)
            params[column] = f"in.({quoted})"
        elif value is None:
            params[column] = "is.null"
        else:
            params[column] = f"eq.{_literal(value)}"
    return params


class SupabaseDataStore(BaseHTTPClient, DataStore):
    """
    Data store backed by a Supabase project's REST endpoint.

    Missing credentials are reported on first use rather than at startup.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            base_url=f"{url.rstrip('/')}/rest/v1" if url else "",
            timeout=timeout,
            headers={"apikey": api_key, "Authorization": f"Bearer {api_key}"},
            transport=transport,
        )
        self.url = url
        self.api_key = api_key

    @classmethod
    def from_settings(cls, settings: SupabaseSettings) -> "SupabaseDataStore":
        return cls(url=settings.url, api_key=settings.anon_key, timeout=settings.timeout)

    @property
    def service_name(self) -> str:
        return "Data store"

    def _error(
        self,
        message: str,
        details: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> UpstreamError:
        return DataStoreError(message, details=details, context=context)

    def _ensure_configured(self) -> None:
        if not self.url or not self.api_key:
            logger.error("Missing SUPABASE_URL or SUPABASE_ANON_KEY")
            raise ConfigurationError(
                "Data store configuration error",
                details="SUPABASE_URL and SUPABASE_ANON_KEY must be set",
            )

    async def _rows(
        self,
        method: str,
        table: str,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
        prefer: bool = False,
    ) -> list[Row]:
        self._ensure_configured()
        response = await self._request(
            method,
            f"/{table}",
            params=params,
            json=json,
            headers=RETURN_REPRESENTATION if prefer else None,
        )
        try:
            data = response.json()
        except ValueError as e:
            raise DataStoreError("Invalid response from data store", details=response.text[:500]) from e
        if not isinstance(data, list):
            raise DataStoreError("Unexpected response shape from data store", details=str(data)[:500])
        return data

    async def get(self, table: str, id: str) -> Optional[Row]:
        rows = await self._rows(
            "GET", table, params={"select": "*", "id": f"eq.{id}", "limit": 1}
        )
        return rows[0] if rows else None

    async def list(
        self,
        table: str,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Row]:
        params: dict[str, Any] = {"select": "*", **filter_params(filters)}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = limit
        return await self._rows("GET", table, params=params)

    async def insert(self, table: str, values: Row) -> Row:
        rows = await self._rows("POST", table, json=[values], prefer=True)
        if not rows:
            raise DataStoreError(f"Insert into {table} returned no rows")
        return rows[0]

    async def update(self, table: str, id: str, values: Row) -> Optional[Row]:
        rows = await self._rows(
            "PATCH",
            table,
            params={"id": f"eq.{id}"},
            json={**values, "updated_at": utc_now_iso()},
            prefer=True,
        )
        return rows[0] if rows else None

    async def delete(self, table: str, id: str) -> bool:
        rows = await self._rows("DELETE", table, params={"id": f"eq.{id}"}, prefer=True)
        return len(rows) > 0
