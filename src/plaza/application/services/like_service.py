"""Like and unlike posts and comments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from plaza.application.dtos import LikerView, LikeResult
from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.social import (
    CommentNotFoundError,
    CommentTarget,
    Like,
    LikeNotFoundError,
    LikeTarget,
    PostNotFoundError,
    PostTarget,
)

if TYPE_CHECKING:
    from plaza.application.factories import RepositoryFactory
    from plaza.domain.social import CommentRepository, LikeRepository, PostRepository
    from plaza.domain.user import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_LIKER_PAGE_SIZE = 20


class LikeService:
    """
    Application service for likes.

    A like row and the target's counter change in the same transaction.
    Uniqueness is left to the database constraint.
    """

    def __init__(
        self,
        like_repository: LikeRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ):
        self._like_repo = like_repository
        self._post_repo = post_repository
        self._comment_repo = comment_repository
        self._user_repo = user_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> LikeService:
        return cls(
            like_repository=factory.like_repository(),
            post_repository=factory.post_repository(),
            comment_repository=factory.comment_repository(),
            user_repository=factory.user_repository(),
        )

    async def like(self, user_id: int, target: LikeTarget) -> LikeResult:
        await self._ensure_target(target, user_id)
        await self._like_repo.add(Like(user_id=user_id, target=target))
        like_count = await self._change_count(target, +1)
        logger.debug(
            "User %s liked %s:%s",
            user_id,
            target.target_type.value,
            target.target_id,
        )
        return self._result(target, liked=True, like_count=like_count)

    async def unlike(self, user_id: int, target: LikeTarget) -> LikeResult:
        await self._ensure_target(target, user_id)
        like = await self._like_repo.find(user_id, target)
        if like is None:
            raise LikeNotFoundError(target.target_type.value, target.target_id)
        if not await self._like_repo.remove(like):
            # Removed concurrently between find and delete
            raise LikeNotFoundError(target.target_type.value, target.target_id)
        like_count = await self._change_count(target, -1)
        logger.debug(
            "User %s unliked %s:%s",
            user_id,
            target.target_type.value,
            target.target_id,
        )
        return self._result(target, liked=False, like_count=like_count)

    async def list_likers(
        self,
        target: LikeTarget,
        page_request: PageRequest,
        viewer_id: Optional[int] = None,
    ) -> Page[LikerView]:
        await self._ensure_target(target, viewer_id)
        page = await self._like_repo.list_liker_ids(target, page_request)
        users = await self._user_repo.find_by_ids(page.items)
        return Page(
            items=[
                LikerView(id=user_id, name=users[user_id].name)
                for user_id in page.items
                if user_id in users
            ],
            total=page.total,
            request=page.request,
        )

    async def _ensure_target(self, target: LikeTarget, viewer_id: Optional[int]) -> None:
        """Target must exist, not be deleted, and sit on a visible post."""
        if isinstance(target, PostTarget):
            post_id = target.post_id
        else:
            comment = await self._comment_repo.find_by_id(target.comment_id)
            if comment is None or comment.is_deleted:
                raise CommentNotFoundError(target.comment_id)
            post_id = comment.post_id

        post = await self._post_repo.find_by_id(post_id)
        if post is None or not post.is_visible_to(viewer_id):
            raise PostNotFoundError(post_id)

    async def _change_count(self, target: LikeTarget, delta: int) -> int:
        if isinstance(target, CommentTarget):
            if delta > 0:
                return await self._comment_repo.increment_like_count(target.comment_id)
            return await self._comment_repo.decrement_like_count(target.comment_id)
        if delta > 0:
            return await self._post_repo.increment_like_count(target.post_id)
        return await self._post_repo.decrement_like_count(target.post_id)

    @staticmethod
    def _result(target: LikeTarget, liked: bool, like_count: int) -> LikeResult:
        return LikeResult(
            target_type=target.target_type.value,
            target_id=target.target_id,
            liked=liked,
            like_count=like_count,
        )
