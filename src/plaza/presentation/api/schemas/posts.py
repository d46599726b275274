"""Post schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from plaza.application.dtos import AuthorView, PostView
from plaza.domain.social import Visibility
from plaza.presentation.api.schemas.common import CamelModel


class AuthorResponse(CamelModel):
    id: int
    name: str

    @classmethod
    def from_view(cls, view: AuthorView) -> "AuthorResponse":
        return cls(id=view.id, name=view.name)


class PostCreateRequest(CamelModel):
    content: str = Field(..., description="Post text (1-5000 characters)")
    visibility: Visibility = Field(default=Visibility.PUBLIC)


class PostUpdateRequest(CamelModel):
    """Partial update; omitted fields stay unchanged."""

    content: Optional[str] = None
    visibility: Optional[Visibility] = None


class PostResponse(CamelModel):
    id: int
    author: AuthorResponse
    content: str
    visibility: str
    like_count: int
    comment_count: int
    view_count: int
    is_liked: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: PostView) -> "PostResponse":
        return cls(
            id=view.id,
            author=AuthorResponse.from_view(view.author),
            content=view.content,
            visibility=view.visibility,
            like_count=view.like_count,
            comment_count=view.comment_count,
            view_count=view.view_count,
            is_liked=view.is_liked,
            created_at=view.created_at,
            updated_at=view.updated_at,
        )
