"""SQLAlchemy implementation of PostRepository."""

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.social import Post, PostRepository, Visibility
from plaza.infrastructure.persistence.sqlalchemy.models import PostModel
from plaza.infrastructure.persistence.sqlalchemy.repositories._utils import (
    as_utc,
    fetch_page,
)

logger = logging.getLogger(__name__)


class PostRepositorySQLAlchemy(PostRepository):
    """
    SQLAlchemy implementation of PostRepository.

    Counters are only ever changed through single UPDATE statements, never
    by writing back a value read earlier. ``save`` therefore leaves the
    counter columns alone.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_id(self, post_id: int) -> Optional[Post]:
        model = await self._find_model_by_id(post_id)
        return self._map_to_domain(model) if model else None

    async def save(self, post: Post) -> None:
        model = None
        if post.id is not None:
            model = await self._find_model_by_id(post.id)

        if model:
            model.content = post.content
            model.visibility = post.visibility.value
            model.is_deleted = post.is_deleted
            model.updated_at = post.updated_at
            await self._session.flush()
            logger.debug("Updated post: %s", post.id)
            return

        model = PostModel(
            author_id=post.author_id,
            content=post.content,
            visibility=post.visibility.value,
            like_count=post.like_count,
            comment_count=post.comment_count,
            view_count=post.view_count,
            is_deleted=post.is_deleted,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        post.assign_id(model.id)
        logger.info("Created post: %s (author: %s)", post.id, post.author_id)

    async def list_public(self, page_request: PageRequest) -> Page[Post]:
        stmt = (
            select(PostModel)
            .where(
                PostModel.is_deleted.is_(False),
                PostModel.visibility == Visibility.PUBLIC.value,
            )
            .order_by(PostModel.created_at.desc(), PostModel.id.desc())
        )
        return await self._page(stmt, page_request)

    async def list_by_author(
        self,
        author_id: int,
        page_request: PageRequest,
        public_only: bool = True,
    ) -> Page[Post]:
        stmt = select(PostModel).where(
            PostModel.author_id == author_id,
            PostModel.is_deleted.is_(False),
        )
        if public_only:
            stmt = stmt.where(PostModel.visibility == Visibility.PUBLIC.value)
        stmt = stmt.order_by(PostModel.created_at.desc(), PostModel.id.desc())
        return await self._page(stmt, page_request)

    async def increment_view_count(self, post_id: int) -> int:
        return await self._bump(post_id, PostModel.view_count, 1)

    async def increment_comment_count(self, post_id: int) -> int:
        return await self._bump(post_id, PostModel.comment_count, 1)

    async def decrement_comment_count(self, post_id: int) -> int:
        return await self._bump(post_id, PostModel.comment_count, -1)

    async def increment_like_count(self, post_id: int) -> int:
        return await self._bump(post_id, PostModel.like_count, 1)

    async def decrement_like_count(self, post_id: int) -> int:
        return await self._bump(post_id, PostModel.like_count, -1)

    async def _bump(
        self,
        post_id: int,
        column: InstrumentedAttribute[int],
        delta: int,
    ) -> int:
        stmt = (
            update(PostModel)
            .where(PostModel.id == post_id)
            # Counter changes are not edits
            .values({column: column + delta, PostModel.updated_at: PostModel.updated_at})
            .execution_options(synchronize_session=False)
        )
        if delta < 0:
            stmt = stmt.where(column > 0)
        await self._session.execute(stmt)

        result = await self._session.execute(
            select(column).where(PostModel.id == post_id),
        )
        return result.scalar_one_or_none() or 0

    async def _page(self, stmt, page_request: PageRequest) -> Page[Post]:
        models, total = await fetch_page(self._session, stmt, page_request)
        return Page(
            items=[self._map_to_domain(model) for model in models],
            total=total,
            request=page_request,
        )

    async def _find_model_by_id(self, post_id: int) -> Optional[PostModel]:
        stmt = select(PostModel).where(PostModel.id == post_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: PostModel) -> Post:
        return Post.reconstitute(
            id=model.id,
            author_id=model.author_id,
            content=model.content,
            visibility=model.visibility,
            like_count=model.like_count,
            comment_count=model.comment_count,
            view_count=model.view_count,
            is_deleted=model.is_deleted,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
