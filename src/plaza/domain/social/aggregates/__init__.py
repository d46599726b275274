from plaza.domain.social.aggregates.comment import (
    COMMENT_CONTENT_MAX_LENGTH,
    DELETED_COMMENT_CONTENT,
    Comment,
)
from plaza.domain.social.aggregates.like import Like
from plaza.domain.social.aggregates.post import POST_CONTENT_MAX_LENGTH, Post

__all__ = [
    "COMMENT_CONTENT_MAX_LENGTH",
    "DELETED_COMMENT_CONTENT",
    "POST_CONTENT_MAX_LENGTH",
    "Comment",
    "Like",
    "Post",
]
