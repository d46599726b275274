"""SQLAlchemy implementation of RefreshTokenRepository.

Tokens are looked up by their sha256 digest. State transitions that must
not race (rotation) are single conditional UPDATE statements.
"""

import hashlib
import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from plaza_auth.persistence.sqlalchemy.models import RefreshTokenModel
from plaza_auth.repositories import RefreshTokenData, RefreshTokenRepository

logger = logging.getLogger(__name__)


def hash_token(token: str) -> str:
    """Return the sha256 hex digest used as the lookup key for a token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class RefreshTokenRepositorySQLAlchemy(RefreshTokenRepository):
    """
    SQLAlchemy implementation of RefreshTokenRepository.

    The session is owned by the caller; this repository only flushes.
    """

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Parameters
        ----------
        session
            SQLAlchemy async session
        """
        self._session = session

    def _to_data(self, model: RefreshTokenModel) -> RefreshTokenData:
        """Map SQLAlchemy model to data transfer object."""
        return RefreshTokenData(
            id=model.id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            created_at=_as_utc(model.created_at),
            expires_at=_as_utc(model.expires_at),
            revoked=model.revoked,
            last_used_at=_as_utc(model.last_used_at),
        )

    async def save(
        self,
        user_id: int,
        token: str,
        expires_at: datetime,
    ) -> RefreshTokenData:
        model = RefreshTokenModel(
            user_id=user_id,
            token_hash=hash_token(token),
            expires_at=expires_at,
            revoked=False,
            last_used_at=None,
        )
        self._session.add(model)
        await self._session.flush()
        logger.debug("Stored refresh token %s for user %s", model.id, user_id)
        return self._to_data(model)

    async def find_valid(self, token: str) -> RefreshTokenData | None:
        stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.token_hash == hash_token(token),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None

        data = self._to_data(model)
        if not data.is_valid():
            logger.debug("Refresh token %s is revoked or expired", data.id)
            return None
        return data

    async def revoke(self, record: RefreshTokenData) -> None:
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.id == record.id)
            .values(revoked=True)
        )
        await self._session.execute(stmt)
        await self._session.flush()

    async def touch_last_used(self, record: RefreshTokenData) -> None:
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.id == record.id)
            .values(last_used_at=datetime.now(tz=timezone.utc))
        )
        await self._session.execute(stmt)
        await self._session.flush()

    async def consume(self, record: RefreshTokenData) -> bool:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.id == record.id,
                RefreshTokenModel.revoked.is_(False),
            )
            .values(revoked=True, last_used_at=datetime.now(tz=timezone.utc))
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        consumed = result.rowcount == 1
        if not consumed:
            logger.warning(
                "Refresh token %s for user %s was already consumed",
                record.id,
                record.user_id,
            )
        return consumed

    async def revoke_all_for_user(self, user_id: int) -> int:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.revoked.is_(False),
            )
            .values(revoked=True)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        if result.rowcount:
            logger.info(
                "Revoked %d refresh tokens for user %s",
                result.rowcount,
                user_id,
            )
        return result.rowcount

    async def prune_expired(self, now: datetime | None = None) -> int:
        cutoff = now or datetime.now(tz=timezone.utc)
        stmt = delete(RefreshTokenModel).where(RefreshTokenModel.expires_at <= cutoff)
        result = await self._session.execute(stmt)
        await self._session.flush()
        logger.info("Pruned %d expired refresh tokens", result.rowcount)
        return result.rowcount
