"""Comment schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from plaza.application.dtos import CommentView
from plaza.presentation.api.schemas.common import CamelModel
from plaza.presentation.api.schemas.posts import AuthorResponse


class CommentCreateRequest(CamelModel):
    content: str = Field(..., description="Comment text (1-1000 characters)")


class CommentUpdateRequest(CamelModel):
    content: str = Field(..., description="New comment text")


class CommentResponse(CamelModel):
    id: int
    post_id: int
    parent_id: Optional[int]
    author: AuthorResponse
    content: str
    like_count: int
    reply_count: int
    is_liked: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentResponse":
        return cls(
            id=view.id,
            post_id=view.post_id,
            parent_id=view.parent_id,
            author=AuthorResponse.from_view(view.author),
            content=view.content,
            like_count=view.like_count,
            reply_count=view.reply_count,
            is_liked=view.is_liked,
            is_deleted=view.is_deleted,
            created_at=view.created_at,
            updated_at=view.updated_at,
        )
