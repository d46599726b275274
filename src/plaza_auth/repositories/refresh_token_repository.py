"""Abstract repository interface for refresh token sessions.

This interface defines the contract for refresh token persistence.
Implementations can use SQLAlchemy or any other storage. Callers always
pass the raw token string; implementations decide how it is stored.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class RefreshTokenData:
    """Immutable refresh token record returned by the repository."""

    id: int
    user_id: int
    token_hash: str
    created_at: datetime
    expires_at: datetime
    revoked: bool
    last_used_at: datetime | None

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(tz=timezone.utc)
        return now >= self.expires_at

    def is_valid(self, now: datetime | None = None) -> bool:
        return not self.revoked and not self.is_expired(now)


class RefreshTokenRepository(ABC):
    """
    Abstract repository interface for refresh token sessions.

    A record is valid iff it is not revoked and not yet expired. The
    signed token carries its own expiry as well; this store adds the
    ability to revoke a token that is still cryptographically valid.
    """

    @abstractmethod
    async def save(
        self,
        user_id: int,
        token: str,
        expires_at: datetime,
    ) -> RefreshTokenData:
        """
        Persist a new, unrevoked refresh token for a user.

        Parameters
        ----------
        user_id
            The owning user's identifier
        token
            The raw refresh token string
        expires_at
            When the token stops being valid

        Returns
        -------
        The saved record
        """

    @abstractmethod
    async def find_valid(self, token: str) -> RefreshTokenData | None:
        """
        Find a record that is neither revoked nor expired.

        Unknown, revoked and expired tokens all return None.
        """

    @abstractmethod
    async def revoke(self, record: RefreshTokenData) -> None:
        """Mark the record revoked. Revoking twice is a no-op."""

    @abstractmethod
    async def touch_last_used(self, record: RefreshTokenData) -> None:
        """Set the record's last-used timestamp to now."""

    @abstractmethod
    async def consume(self, record: RefreshTokenData) -> bool:
        """
        Atomically revoke a still-active record and mark it used.

        Returns
        -------
        True for the single caller that performed the transition, False
        if the record had already been revoked (e.g. by a concurrent
        refresh using the same token)
        """

    @abstractmethod
    async def revoke_all_for_user(self, user_id: int) -> int:
        """
        Revoke every active token of a user.

        Returns
        -------
        Number of records revoked
        """

    @abstractmethod
    async def prune_expired(self, now: datetime | None = None) -> int:
        """
        Delete records whose expiry has passed.

        Returns
        -------
        Number of records deleted
        """
