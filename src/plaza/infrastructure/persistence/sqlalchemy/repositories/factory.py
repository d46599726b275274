"""SQLAlchemy repository factory for one request-scoped session."""

from sqlalchemy.ext.asyncio import AsyncSession

from plaza.infrastructure.persistence.sqlalchemy.repositories.comment_repository import (
    CommentRepositorySQLAlchemy,
)
from plaza.infrastructure.persistence.sqlalchemy.repositories.like_repository import (
    LikeRepositorySQLAlchemy,
)
from plaza.infrastructure.persistence.sqlalchemy.repositories.post_repository import (
    PostRepositorySQLAlchemy,
)
from plaza.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)
from plaza_auth.persistence.sqlalchemy import RefreshTokenRepositorySQLAlchemy


class SQLAlchemyRepositoryFactory:
    """Creates repositories that share one session (one unit of work)."""

    def __init__(self, session: AsyncSession):
        self._session = session

        # Cached instances (created on demand)
        self._user_repo: UserRepositorySQLAlchemy | None = None
        self._post_repo: PostRepositorySQLAlchemy | None = None
        self._comment_repo: CommentRepositorySQLAlchemy | None = None
        self._like_repo: LikeRepositorySQLAlchemy | None = None
        self._refresh_token_repo: RefreshTokenRepositorySQLAlchemy | None = None

    @property
    def session(self) -> AsyncSession:
        return self._session

    def user_repository(self) -> UserRepositorySQLAlchemy:
        if self._user_repo is None:
            self._user_repo = UserRepositorySQLAlchemy(self._session)
        return self._user_repo

    def post_repository(self) -> PostRepositorySQLAlchemy:
        if self._post_repo is None:
            self._post_repo = PostRepositorySQLAlchemy(self._session)
        return self._post_repo

    def comment_repository(self) -> CommentRepositorySQLAlchemy:
        if self._comment_repo is None:
            self._comment_repo = CommentRepositorySQLAlchemy(self._session)
        return self._comment_repo

    def like_repository(self) -> LikeRepositorySQLAlchemy:
        if self._like_repo is None:
            self._like_repo = LikeRepositorySQLAlchemy(self._session)
        return self._like_repo

    def refresh_token_repository(self) -> RefreshTokenRepositorySQLAlchemy:
        if self._refresh_token_repo is None:
            self._refresh_token_repo = RefreshTokenRepositorySQLAlchemy(self._session)
        return self._refresh_token_repo
