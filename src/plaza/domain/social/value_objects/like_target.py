"""Like targets.

A like points at either a post or a comment. Storage keeps a
``(target_type, target_id)`` pair without a foreign key; inside the
application the target is always one of the two tagged variants below,
so an unknown type tag cannot be constructed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TargetType(str, Enum):
    POST = "POST"
    COMMENT = "COMMENT"


@dataclass(frozen=True)
class PostTarget:
    post_id: int

    @property
    def target_type(self) -> TargetType:
        return TargetType.POST

    @property
    def target_id(self) -> int:
        return self.post_id


@dataclass(frozen=True)
class CommentTarget:
    comment_id: int

    @property
    def target_type(self) -> TargetType:
        return TargetType.COMMENT

    @property
    def target_id(self) -> int:
        return self.comment_id


LikeTarget = Union[PostTarget, CommentTarget]


def like_target_from(target_type: Union[str, TargetType], target_id: int) -> LikeTarget:
    """Rebuild a tagged target from its stored ``(type, id)`` pair."""
    kind = TargetType(target_type)
    if kind is TargetType.POST:
        return PostTarget(target_id)
    return CommentTarget(target_id)
