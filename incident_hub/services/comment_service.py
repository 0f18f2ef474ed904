"""
Comment service.
"""

from __future__ import annotations

from typing import Optional

from incident_hub.core.exceptions import ValidationError
from incident_hub.core.logging import get_logger
from incident_hub.domain.incident import Comment
from incident_hub.repositories.comment_repo import CommentRepository

logger = get_logger(__name__)


class CommentService:
    """Reads and records dashboard comments."""

    def __init__(self, comments: CommentRepository) -> None:
        self.comments = comments

    async def list_comments(self) -> list[Comment]:
        comments = await self.comments.list()
        logger.info("Fetched comments", count=len(comments))
        return comments

    async def add_comment(self, name: Optional[str], comment: Optional[str]) -> Comment:
        if not name or not comment:
            raise ValidationError(
                "Name and comment are required",
                field="name" if not name else "comment",
            )

        created = await self.comments.add(name, comment)
        logger.info("Added comment", comment_id=created.id)
        return created
