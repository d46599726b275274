"""Comment and reply use cases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from plaza.application.dtos import AuthorView, CommentView
from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.social import (
    Comment,
    CommentNotFoundError,
    Post,
    PostNotFoundError,
    TargetType,
)

if TYPE_CHECKING:
    from plaza.application.factories import RepositoryFactory
    from plaza.domain.social import CommentRepository, LikeRepository, PostRepository
    from plaza.domain.user import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_COMMENT_PAGE_SIZE = 20


class CommentService:
    """
    Application service for comments.

    Every comment and reply bumps the post's ``comment_count``; deleting
    one decrements it. Replies nest one level deep only.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        like_repository: LikeRepository,
    ):
        self._comment_repo = comment_repository
        self._post_repo = post_repository
        self._user_repo = user_repository
        self._like_repo = like_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> CommentService:
        return cls(
            comment_repository=factory.comment_repository(),
            post_repository=factory.post_repository(),
            user_repository=factory.user_repository(),
            like_repository=factory.like_repository(),
        )

    async def create_comment(
        self,
        post_id: int,
        author_id: int,
        content: str,
    ) -> CommentView:
        await self._get_visible_post(post_id, author_id)

        comment = Comment.create(post_id=post_id, author_id=author_id, content=content)
        await self._comment_repo.save(comment)
        await self._post_repo.increment_comment_count(post_id)

        logger.info("Comment %s created on post %s", comment.id, post_id)
        views = await self._to_views([comment], viewer_id=author_id)
        return views[0]

    async def create_reply(
        self,
        parent_id: int,
        author_id: int,
        content: str,
    ) -> CommentView:
        parent = await self._get_live_comment(parent_id)
        await self._get_visible_post(parent.post_id, author_id)

        reply = Comment.create_reply(parent, author_id=author_id, content=content)
        await self._comment_repo.save(reply)
        await self._post_repo.increment_comment_count(parent.post_id)

        logger.info("Reply %s created under comment %s", reply.id, parent_id)
        views = await self._to_views([reply], viewer_id=author_id)
        return views[0]

    async def list_comments(
        self,
        post_id: int,
        page_request: PageRequest,
        viewer_id: Optional[int] = None,
    ) -> Page[CommentView]:
        await self._get_visible_post(post_id, viewer_id)
        page = await self._comment_repo.list_roots_by_post(post_id, page_request)
        return await self._to_page(page, viewer_id)

    async def list_replies(
        self,
        comment_id: int,
        page_request: PageRequest,
        viewer_id: Optional[int] = None,
    ) -> Page[CommentView]:
        parent = await self._comment_repo.find_by_id(comment_id)
        if parent is None:
            raise CommentNotFoundError(comment_id)
        await self._get_visible_post(parent.post_id, viewer_id)

        page = await self._comment_repo.list_replies(comment_id, page_request)
        return await self._to_page(page, viewer_id)

    async def get_comment(
        self,
        comment_id: int,
        viewer_id: Optional[int] = None,
    ) -> CommentView:
        comment = await self._get_live_comment(comment_id)
        await self._get_visible_post(comment.post_id, viewer_id)
        views = await self._to_views([comment], viewer_id)
        return views[0]

    async def update_comment(
        self,
        comment_id: int,
        user_id: int,
        content: str,
    ) -> CommentView:
        comment = await self._get_live_comment(comment_id)
        comment.ensure_author(user_id)
        comment.edit(content)
        await self._comment_repo.save(comment)
        logger.info("Comment %s edited by user %s", comment_id, user_id)
        views = await self._to_views([comment], viewer_id=user_id)
        return views[0]

    async def delete_comment(self, comment_id: int, user_id: int) -> None:
        comment = await self._get_live_comment(comment_id)
        comment.ensure_author(user_id)
        comment.soft_delete()
        await self._comment_repo.save(comment)
        await self._post_repo.decrement_comment_count(comment.post_id)
        logger.info("Comment %s deleted by user %s", comment_id, user_id)

    async def _get_visible_post(self, post_id: int, viewer_id: Optional[int]) -> Post:
        post = await self._post_repo.find_by_id(post_id)
        if post is None or not post.is_visible_to(viewer_id):
            raise PostNotFoundError(post_id)
        return post

    async def _get_live_comment(self, comment_id: int) -> Comment:
        comment = await self._comment_repo.find_by_id(comment_id)
        if comment is None or comment.is_deleted:
            raise CommentNotFoundError(comment_id)
        return comment

    async def _to_page(
        self,
        page: Page[Comment],
        viewer_id: Optional[int],
    ) -> Page[CommentView]:
        views = await self._to_views(page.items, viewer_id)
        return Page(items=views, total=page.total, request=page.request)

    async def _to_views(
        self,
        comments: list[Comment],
        viewer_id: Optional[int],
    ) -> list[CommentView]:
        if not comments:
            return []
        ids: list[int] = [c.id for c in comments]  # type: ignore[misc]
        authors = await self._user_repo.find_by_ids([c.author_id for c in comments])
        reply_counts = await self._comment_repo.count_replies(
            [c.id for c in comments if c.is_root],  # type: ignore[misc]
        )
        liked: set[int] = set()
        if viewer_id is not None:
            liked = await self._like_repo.liked_target_ids(
                viewer_id,
                TargetType.COMMENT,
                ids,
            )
        return [
            CommentView.from_comment(
                comment,
                author=AuthorView.from_user(
                    authors.get(comment.author_id),
                    comment.author_id,
                ),
                reply_count=reply_counts.get(comment.id, 0),  # type: ignore[arg-type]
                is_liked=comment.id in liked,
            )
            for comment in comments
        ]
