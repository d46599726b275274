"""DTOs for posts, comments and likes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from plaza.domain.social import Comment, Post
    from plaza.domain.user import User


@dataclass(frozen=True)
class AuthorView:
    id: int
    name: str

    @classmethod
    def from_user(cls, user: Optional[User], user_id: int) -> AuthorView:
        # Authors are never hard-deleted, a missing row still renders
        return cls(id=user_id, name=user.name if user else "unknown")


@dataclass(frozen=True)
class PostView:
    id: int
    author: AuthorView
    content: str
    visibility: str
    like_count: int
    comment_count: int
    view_count: int
    is_liked: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(
        cls,
        post: Post,
        author: AuthorView,
        is_liked: bool = False,
    ) -> PostView:
        return cls(
            id=post.id,  # type: ignore[arg-type]
            author=author,
            content=post.content,
            visibility=post.visibility.value,
            like_count=post.like_count,
            comment_count=post.comment_count,
            view_count=post.view_count,
            is_liked=is_liked,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


@dataclass(frozen=True)
class CommentView:
    id: int
    post_id: int
    parent_id: Optional[int]
    author: AuthorView
    content: str
    like_count: int
    reply_count: int
    is_liked: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(
        cls,
        comment: Comment,
        author: AuthorView,
        reply_count: int = 0,
        is_liked: bool = False,
    ) -> CommentView:
        return cls(
            id=comment.id,  # type: ignore[arg-type]
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            author=author,
            content=comment.content,
            like_count=comment.like_count,
            reply_count=reply_count,
            is_liked=is_liked,
            is_deleted=comment.is_deleted,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


@dataclass(frozen=True)
class LikeResult:
    """State of a target after a like or unlike."""

    target_type: str
    target_id: int
    liked: bool
    like_count: int


@dataclass(frozen=True)
class LikerView:
    id: int
    name: str


@dataclass(frozen=True)
class AdminUserView:
    """User row as shown to administrators."""

    id: int
    email: str
    name: str
    role: str
    status: str
    is_active: bool
    failed_login_attempts: int
    account_locked_until: Optional[datetime]
    last_login_at: Optional[datetime]
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> AdminUserView:
        return cls(
            id=user.id,  # type: ignore[arg-type]
            email=user.email,
            name=user.name,
            role=user.role.value,
            status=user.status.value,
            is_active=user.is_active,
            failed_login_attempts=user.failed_login_attempts,
            account_locked_until=user.account_locked_until,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )
