"""
Comment endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from incident_hub.api.deps import get_comment_service
from incident_hub.domain.incident import Comment
from incident_hub.services.comment_service import CommentService

router = APIRouter()


class CommentCreate(BaseModel):
    name: Optional[str] = None
    comment: Optional[str] = None


@router.get("/comments", response_model=list[Comment])
async def list_comments(
    service: CommentService = Depends(get_comment_service),
) -> list[Comment]:
    return await service.list_comments()


@router.post("/comments", response_model=Comment, status_code=status.HTTP_201_CREATED)
async def add_comment(
    request: CommentCreate,
    service: CommentService = Depends(get_comment_service),
) -> Comment:
    return await service.add_comment(request.name, request.comment)
