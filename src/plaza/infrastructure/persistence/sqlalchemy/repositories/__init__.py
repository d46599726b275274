# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations."""

from plaza.infrastructure.persistence.sqlalchemy.repositories.comment_repository import (
    CommentRepositorySQLAlchemy,
)
from plaza.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
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

__all__ = [
    "CommentRepositorySQLAlchemy",
    "LikeRepositorySQLAlchemy",
    "PostRepositorySQLAlchemy",
    "SQLAlchemyRepositoryFactory",
    "UserRepositorySQLAlchemy",
]
