"""
Comment repository.
"""

from __future__ import annotations

from incident_hub.core.constants import COMMENTS_TABLE
from incident_hub.domain.incident import Comment
from incident_hub.repositories.store import DataStore


class CommentRepository:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def list(self) -> list[Comment]:
        rows = await self.store.list(COMMENTS_TABLE, order_by="created_at", descending=True)
        return [Comment(**row) for row in rows]

    async def add(self, name: str, comment: str) -> Comment:
        row = await self.store.insert(COMMENTS_TABLE, {"name": name, "comment": comment})
        return Comment(**row)
