"""Post use cases: create, read, update, delete and feeds."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Optional

from plaza.application.dtos import AuthorView, PostView
from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.social import Post, PostNotFoundError, TargetType, Visibility
from plaza.domain.user import UserNotFoundError

if TYPE_CHECKING:
    from plaza.application.factories import RepositoryFactory
    from plaza.domain.social import LikeRepository, PostRepository
    from plaza.domain.user import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_POST_PAGE_SIZE = 10


class PostService:
    """
    Application service for posts.

    Hidden and deleted posts are reported as not found, so callers cannot
    tell a private post from a missing one.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        user_repository: UserRepository,
        like_repository: LikeRepository,
    ):
        self._post_repo = post_repository
        self._user_repo = user_repository
        self._like_repo = like_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> PostService:
        return cls(
            post_repository=factory.post_repository(),
            user_repository=factory.user_repository(),
            like_repository=factory.like_repository(),
        )

    async def create_post(
        self,
        author_id: int,
        content: str,
        visibility: Visibility = Visibility.PUBLIC,
    ) -> PostView:
        post = Post.create(author_id=author_id, content=content, visibility=visibility)
        await self._post_repo.save(post)
        logger.info("Post %s created by user %s", post.id, author_id)
        views = await self._to_views([post], viewer_id=author_id)
        return views[0]

    async def get_post(self, post_id: int, viewer_id: Optional[int]) -> PostView:
        post = await self.get_visible_post(post_id, viewer_id)

        view_count = post.view_count
        if viewer_id is None or not post.is_authored_by(viewer_id):
            view_count = await self._post_repo.increment_view_count(post_id)

        views = await self._to_views([post], viewer_id)
        return dataclasses.replace(views[0], view_count=view_count)

    async def update_post(
        self,
        post_id: int,
        user_id: int,
        content: Optional[str] = None,
        visibility: Optional[Visibility] = None,
    ) -> PostView:
        post = await self._get_live_post(post_id)
        post.ensure_author(user_id)
        post.update(content=content, visibility=visibility)
        await self._post_repo.save(post)
        logger.info("Post %s updated by user %s", post_id, user_id)
        views = await self._to_views([post], viewer_id=user_id)
        return views[0]

    async def delete_post(self, post_id: int, user_id: int) -> None:
        post = await self._get_live_post(post_id)
        post.ensure_author(user_id)
        post.soft_delete()
        await self._post_repo.save(post)
        logger.info("Post %s deleted by user %s", post_id, user_id)

    async def list_public(
        self,
        page_request: PageRequest,
        viewer_id: Optional[int] = None,
    ) -> Page[PostView]:
        page = await self._post_repo.list_public(page_request)
        return await self._to_page(page, viewer_id)

    async def list_mine(self, user_id: int, page_request: PageRequest) -> Page[PostView]:
        page = await self._post_repo.list_by_author(
            user_id,
            page_request,
            public_only=False,
        )
        return await self._to_page(page, user_id)

    async def list_by_user(
        self,
        author_id: int,
        page_request: PageRequest,
        viewer_id: Optional[int] = None,
    ) -> Page[PostView]:
        if await self._user_repo.find_by_id(author_id) is None:
            raise UserNotFoundError(author_id)
        page = await self._post_repo.list_by_author(
            author_id,
            page_request,
            public_only=viewer_id != author_id,
        )
        return await self._to_page(page, viewer_id)

    async def get_visible_post(self, post_id: int, viewer_id: Optional[int]) -> Post:
        """Load a post the viewer may see, else raise PostNotFoundError."""
        post = await self._post_repo.find_by_id(post_id)
        if post is None or not post.is_visible_to(viewer_id):
            raise PostNotFoundError(post_id)
        return post

    async def _get_live_post(self, post_id: int) -> Post:
        post = await self._post_repo.find_by_id(post_id)
        if post is None or post.is_deleted:
            raise PostNotFoundError(post_id)
        return post

    async def _to_page(
        self,
        page: Page[Post],
        viewer_id: Optional[int],
    ) -> Page[PostView]:
        views = await self._to_views(page.items, viewer_id)
        return Page(items=views, total=page.total, request=page.request)

    async def _to_views(
        self,
        posts: list[Post],
        viewer_id: Optional[int],
    ) -> list[PostView]:
        if not posts:
            return []
        authors = await self._user_repo.find_by_ids([p.author_id for p in posts])
        liked: set[int] = set()
        if viewer_id is not None:
            liked = await self._like_repo.liked_target_ids(
                viewer_id,
                TargetType.POST,
                [p.id for p in posts],  # type: ignore[misc]
            )
        return [
            PostView.from_post(
                post,
                author=AuthorView.from_user(authors.get(post.author_id), post.author_id),
                is_liked=post.id in liked,
            )
            for post in posts
        ]
