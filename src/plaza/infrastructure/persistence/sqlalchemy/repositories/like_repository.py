"""SQLAlchemy implementation of LikeRepository."""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.social import (
    DuplicateLikeError,
    Like,
    LikeRepository,
    LikeTarget,
    TargetType,
    like_target_from,
)
from plaza.infrastructure.persistence.sqlalchemy.models import LikeModel
from plaza.infrastructure.persistence.sqlalchemy.repositories._utils import (
    as_utc,
    fetch_page,
)

logger = logging.getLogger(__name__)


class LikeRepositorySQLAlchemy(LikeRepository):
    """
    SQLAlchemy implementation of LikeRepository.

    Duplicate likes are rejected by the ``uq_likes_user_target`` constraint,
    not by a read-before-write check.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, like: Like) -> Like:
        model = LikeModel(
            user_id=like.user_id,
            target_type=like.target.target_type.value,
            target_id=like.target.target_id,
            created_at=like.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # Keep session usable after a failed flush
            await self._session.rollback()
            logger.debug(
                "Duplicate like by user %s on %s:%s",
                like.user_id,
                like.target.target_type.value,
                like.target.target_id,
            )
            raise DuplicateLikeError(
                like.target.target_type.value,
                like.target.target_id,
            ) from exc

        return self._map_to_domain(model)

    async def find(self, user_id: int, target: LikeTarget) -> Optional[Like]:
        stmt = select(LikeModel).where(
            LikeModel.user_id == user_id,
            LikeModel.target_type == target.target_type.value,
            LikeModel.target_id == target.target_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def remove(self, like: Like) -> bool:
        stmt = delete(LikeModel).where(
            LikeModel.user_id == like.user_id,
            LikeModel.target_type == like.target.target_type.value,
            LikeModel.target_id == like.target.target_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def exists(self, user_id: int, target: LikeTarget) -> bool:
        return await self.find(user_id, target) is not None

    async def liked_target_ids(
        self,
        user_id: int,
        target_type: TargetType,
        target_ids: list[int],
    ) -> set[int]:
        if not target_ids:
            return set()
        stmt = select(LikeModel.target_id).where(
            LikeModel.user_id == user_id,
            LikeModel.target_type == target_type.value,
            LikeModel.target_id.in_(set(target_ids)),
        )
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def list_liker_ids(
        self,
        target: LikeTarget,
        page_request: PageRequest,
    ) -> Page[int]:
        stmt = (
            select(LikeModel.user_id)
            .where(
                LikeModel.target_type == target.target_type.value,
                LikeModel.target_id == target.target_id,
            )
            .order_by(LikeModel.created_at.desc(), LikeModel.id.desc())
        )
        user_ids, total = await fetch_page(self._session, stmt, page_request)
        return Page(items=user_ids, total=total, request=page_request)

    def _map_to_domain(self, model: LikeModel) -> Like:
        return Like(
            id=model.id,
            user_id=model.user_id,
            target=like_target_from(model.target_type, model.target_id),
            created_at=as_utc(model.created_at),
        )
