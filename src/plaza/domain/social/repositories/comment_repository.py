"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.social.aggregates.comment import Comment


class CommentRepository(ABC):
    """Repository interface for Comment aggregates."""

    @abstractmethod
    async def find_by_id(self, comment_id: int) -> Optional[Comment]:
        """Find a comment by id, including soft-deleted comments."""

    @abstractmethod
    async def save(self, comment: Comment) -> None:
        """Insert or update a comment and assign its id."""

    @abstractmethod
    async def list_roots_by_post(
        self,
        post_id: int,
        page_request: PageRequest,
    ) -> Page[Comment]:
        """List top-level comments of a post, oldest first."""

    @abstractmethod
    async def list_replies(
        self,
        parent_id: int,
        page_request: PageRequest,
    ) -> Page[Comment]:
        """List replies to a root comment, oldest first."""

    @abstractmethod
    async def count_replies(self, parent_ids: list[int]) -> dict[int, int]:
        """Count non-deleted replies per parent. Missing parents map to 0."""

    @abstractmethod
    async def increment_like_count(self, comment_id: int) -> int:
        pass

    @abstractmethod
    async def decrement_like_count(self, comment_id: int) -> int:
        pass
