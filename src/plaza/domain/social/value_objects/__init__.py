from plaza.domain.social.value_objects.like_target import (
    CommentTarget,
    LikeTarget,
    PostTarget,
    TargetType,
    like_target_from,
)
from plaza.domain.social.value_objects.visibility import Visibility

__all__ = [
    "CommentTarget",
    "LikeTarget",
    "PostTarget",
    "TargetType",
    "Visibility",
    "like_target_from",
]
