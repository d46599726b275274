from plaza.domain.social.repositories.comment_repository import CommentRepository
from plaza.domain.social.repositories.like_repository import LikeRepository
from plaza.domain.social.repositories.post_repository import PostRepository

__all__ = [
    "CommentRepository",
    "LikeRepository",
    "PostRepository",
]
