"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.social.aggregates.like import Like
from plaza.domain.social.value_objects import LikeTarget, TargetType


class LikeRepository(ABC):
    """Repository interface for likes on posts and comments."""

    @abstractmethod
    async def add(self, like: Like) -> Like:
        """Store a like.

        Raises DuplicateLikeError when the user already liked the target.
        """

    @abstractmethod
    async def find(self, user_id: int, target: LikeTarget) -> Optional[Like]:
        pass

    @abstractmethod
    async def remove(self, like: Like) -> bool:
        """Delete the like. Returns False when no row was removed."""

    @abstractmethod
    async def exists(self, user_id: int, target: LikeTarget) -> bool:
        pass

    @abstractmethod
    async def liked_target_ids(
        self,
        user_id: int,
        target_type: TargetType,
        target_ids: list[int],
    ) -> set[int]:
        """Return the subset of target_ids the user has liked."""

    @abstractmethod
    async def list_liker_ids(
        self,
        target: LikeTarget,
        page_request: PageRequest,
    ) -> Page[int]:
        """User ids that liked the target, most recent first."""
