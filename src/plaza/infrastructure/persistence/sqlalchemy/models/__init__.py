"""SQLAlchemy models for persistence layer."""

from plaza.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from plaza.infrastructure.persistence.sqlalchemy.models.comment_model import (
    CommentModel,
)
from plaza.infrastructure.persistence.sqlalchemy.models.like_model import LikeModel
from plaza.infrastructure.persistence.sqlalchemy.models.post_model import PostModel
from plaza.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "Base",
    "CommentModel",
    "LikeModel",
    "PostModel",
    "TimestampMixin",
    "UserModel",
]
