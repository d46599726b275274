"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.social.aggregates.post import Post


class PostRepository(ABC):
    """Repository interface for Post aggregates.

    Counter methods apply an atomic UPDATE and return the value stored
    afterwards. Decrements never go below zero.
    """

    @abstractmethod
    async def find_by_id(self, post_id: int) -> Optional[Post]:
        """Find a post by id, including soft-deleted posts."""

    @abstractmethod
    async def save(self, post: Post) -> None:
        """Insert or update a post and assign its id."""

    @abstractmethod
    async def list_public(self, page_request: PageRequest) -> Page[Post]:
        """List non-deleted PUBLIC posts, newest first."""

    @abstractmethod
    async def list_by_author(
        self,
        author_id: int,
        page_request: PageRequest,
        public_only: bool = True,
    ) -> Page[Post]:
        """List non-deleted posts of one author, newest first."""

    @abstractmethod
    async def increment_view_count(self, post_id: int) -> int:
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: int) -> int:
        pass

    @abstractmethod
    async def decrement_comment_count(self, post_id: int) -> int:
        pass

    @abstractmethod
    async def increment_like_count(self, post_id: int) -> int:
        pass

    @abstractmethod
    async def decrement_like_count(self, post_id: int) -> int:
        pass
