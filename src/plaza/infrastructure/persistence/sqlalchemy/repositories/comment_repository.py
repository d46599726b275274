"""SQLAlchemy implementation of CommentRepository."""

import logging
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.social import Comment, CommentRepository
from plaza.infrastructure.persistence.sqlalchemy.models import CommentModel
from plaza.infrastructure.persistence.sqlalchemy.repositories._utils import (
    as_utc,
    fetch_page,
)

logger = logging.getLogger(__name__)


class CommentRepositorySQLAlchemy(CommentRepository):
    """SQLAlchemy implementation of CommentRepository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_id(self, comment_id: int) -> Optional[Comment]:
        model = await self._find_model_by_id(comment_id)
        return self._map_to_domain(model) if model else None

    async def save(self, comment: Comment) -> None:
        model = None
        if comment.id is not None:
            model = await self._find_model_by_id(comment.id)

        if model:
            model.content = comment.content
            model.is_deleted = comment.is_deleted
            model.updated_at = comment.updated_at
            await self._session.flush()
            logger.debug("Updated comment: %s", comment.id)
            return

        model = CommentModel(
            post_id=comment.post_id,
            author_id=comment.author_id,
            parent_id=comment.parent_id,
            content=comment.content,
            like_count=comment.like_count,
            is_deleted=comment.is_deleted,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        comment.assign_id(model.id)
        logger.info(
            "Created comment: %s (post: %s, parent: %s)",
            comment.id,
            comment.post_id,
            comment.parent_id,
        )

    async def list_roots_by_post(
        self,
        post_id: int,
        page_request: PageRequest,
    ) -> Page[Comment]:
        stmt = (
            select(CommentModel)
            .where(
                CommentModel.post_id == post_id,
                CommentModel.parent_id.is_(None),
            )
            .order_by(CommentModel.created_at, CommentModel.id)
        )
        return await self._page(stmt, page_request)

    async def list_replies(
        self,
        parent_id: int,
        page_request: PageRequest,
    ) -> Page[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.parent_id == parent_id)
            .order_by(CommentModel.created_at, CommentModel.id)
        )
        return await self._page(stmt, page_request)

    async def count_replies(self, parent_ids: list[int]) -> dict[int, int]:
        counts = dict.fromkeys(parent_ids, 0)
        if not parent_ids:
            return counts
        stmt = (
            select(CommentModel.parent_id, func.count())
            .where(
                CommentModel.parent_id.in_(set(parent_ids)),
                CommentModel.is_deleted.is_(False),
            )
            .group_by(CommentModel.parent_id)
        )
        result = await self._session.execute(stmt)
        for parent_id, count in result.all():
            counts[parent_id] = count
        return counts

    async def increment_like_count(self, comment_id: int) -> int:
        return await self._bump_likes(comment_id, 1)

    async def decrement_like_count(self, comment_id: int) -> int:
        return await self._bump_likes(comment_id, -1)

    async def _bump_likes(self, comment_id: int, delta: int) -> int:
        stmt = (
            update(CommentModel)
            .where(CommentModel.id == comment_id)
            .values(
                like_count=CommentModel.like_count + delta,
                updated_at=CommentModel.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        if delta < 0:
            stmt = stmt.where(CommentModel.like_count > 0)
        await self._session.execute(stmt)

        result = await self._session.execute(
            select(CommentModel.like_count).where(CommentModel.id == comment_id),
        )
        return result.scalar_one_or_none() or 0

    async def _page(self, stmt, page_request: PageRequest) -> Page[Comment]:
        models, total = await fetch_page(self._session, stmt, page_request)
        return Page(
            items=[self._map_to_domain(model) for model in models],
            total=total,
            request=page_request,
        )

    async def _find_model_by_id(self, comment_id: int) -> Optional[CommentModel]:
        stmt = select(CommentModel).where(CommentModel.id == comment_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: CommentModel) -> Comment:
        return Comment.reconstitute(
            id=model.id,
            post_id=model.post_id,
            author_id=model.author_id,
            parent_id=model.parent_id,
            content=model.content,
            like_count=model.like_count,
            is_deleted=model.is_deleted,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
