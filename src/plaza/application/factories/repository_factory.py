"""Repository factory protocol for application layer."""

from __future__ import annotations

from typing import Any, Protocol

from plaza.domain.social.repositories import (
    CommentRepository,
    LikeRepository,
    PostRepository,
)
from plaza.domain.user.repositories import UserRepository
from plaza_auth.repositories import RefreshTokenRepository


class RepositoryFactory(Protocol):
    """Protocol for creating repositories that share one unit of work."""

    @property
    def session(self) -> Any:
        """Get the database session for transaction management.

        Use this for commit/rollback at the presentation layer.
        """
        ...

    def user_repository(self) -> UserRepository:
        ...

    def post_repository(self) -> PostRepository:
        ...

    def comment_repository(self) -> CommentRepository:
        ...

    def like_repository(self) -> LikeRepository:
        ...

    def refresh_token_repository(self) -> RefreshTokenRepository:
        ...
