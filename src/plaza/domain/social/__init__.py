"""Social domain covers posts, comments and likes.

This domain handles:
- Post aggregate with visibility and soft deletion
- Comments with a single level of replies
- Likes on posts and comments, unique per user and target
"""

from plaza.domain.social.aggregates import (
    DELETED_COMMENT_CONTENT,
    Comment,
    Like,
    Post,
)
from plaza.domain.social.exceptions import (
    CommentNotFoundError,
    DuplicateLikeError,
    InvalidContentError,
    InvalidReplyTargetError,
    LikeNotFoundError,
    NotContentOwnerError,
    PostNotFoundError,
)
from plaza.domain.social.repositories import (
    CommentRepository,
    LikeRepository,
    PostRepository,
)
from plaza.domain.social.value_objects import (
    CommentTarget,
    LikeTarget,
    PostTarget,
    TargetType,
    Visibility,
    like_target_from,
)

__all__ = [
    "DELETED_COMMENT_CONTENT",
    "Comment",
    "CommentNotFoundError",
    "CommentRepository",
    "CommentTarget",
    "DuplicateLikeError",
    "InvalidContentError",
    "InvalidReplyTargetError",
    "Like",
    "LikeNotFoundError",
    "LikeRepository",
    "LikeTarget",
    "NotContentOwnerError",
    "Post",
    "PostNotFoundError",
    "PostRepository",
    "PostTarget",
    "TargetType",
    "Visibility",
    "like_target_from",
]
