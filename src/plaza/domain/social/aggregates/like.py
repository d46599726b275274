"""Like entity."""

from dataclasses import dataclass, field
from datetime import datetime

from plaza.domain.shared.time import utc_now
from plaza.domain.social.value_objects import LikeTarget


@dataclass(frozen=True)
class Like:
    """A user's like on a post or comment. Unique per (user, target)."""

    user_id: int
    target: LikeTarget
    created_at: datetime = field(default_factory=utc_now)
    id: int | None = None
