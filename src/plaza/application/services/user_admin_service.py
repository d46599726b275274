"""Administrative user management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from plaza.application.dtos import AdminUserView
from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.user import (
    CannotChangeOwnStatusError,
    User,
    UserNotFoundError,
    UserRole,
    UserStatus,
)

if TYPE_CHECKING:
    from plaza.application.factories import RepositoryFactory
    from plaza.domain.user import UserRepository
    from plaza_auth import PasswordHashingService, RefreshTokenRepository

logger = logging.getLogger(__name__)


class UserAdminService:
    """Status changes, user listings and session housekeeping for admins."""

    def __init__(
        self,
        user_repository: UserRepository,
        refresh_token_repository: RefreshTokenRepository,
        password_service: Optional[PasswordHashingService] = None,
    ):
        self._user_repo = user_repository
        self._token_repo = refresh_token_repository
        self._password_service = password_service

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        password_service: Optional[PasswordHashingService] = None,
    ) -> UserAdminService:
        return cls(
            user_repository=factory.user_repository(),
            refresh_token_repository=factory.refresh_token_repository(),
            password_service=password_service,
        )

    async def list_users(self, page_request: PageRequest) -> Page[AdminUserView]:
        page = await self._user_repo.list_page(page_request)
        return page.map(AdminUserView.from_user)

    async def change_status(
        self,
        admin_id: int,
        user_id: int,
        status: UserStatus,
        is_active: Optional[bool] = None,
    ) -> AdminUserView:
        """
        Change a user's lifecycle status.

        Parameters
        ----------
        admin_id
            The administrator performing the change
        user_id
            The user to change
        status
            The new lifecycle status
        is_active
            New value for the active flag, left unchanged when None

        Raises
        ------
        CannotChangeOwnStatusError
            If an administrator targets their own account
        UserNotFoundError
            If the user does not exist
        """
        if admin_id == user_id:
            raise CannotChangeOwnStatusError

        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        user.change_status(status, is_active=is_active)
        await self._user_repo.save(user)

        if not user.can_login:
            revoked = await self._token_repo.revoke_all_for_user(user_id)
            logger.info("Revoked %d sessions of user %s", revoked, user_id)

        logger.info(
            "User %s status set to %s (active=%s) by admin %s",
            user_id,
            status.value,
            user.is_active,
            admin_id,
        )
        return AdminUserView.from_user(user)

    async def prune_expired_tokens(self) -> int:
        deleted = await self._token_repo.prune_expired()
        logger.info("Pruned %d expired refresh tokens", deleted)
        return deleted

    async def create_admin(self, email: str, password: str, name: str) -> User:
        """Create an ACTIVE administrator.

        Raises EmailAlreadyExistsError or WeakPasswordError.
        """
        if self._password_service is None:
            msg = "A password service is required to create users"
            raise RuntimeError(msg)

        password_hash = self._password_service.hash(password)
        user = User.create(
            email,
            password_hash=password_hash,
            name=name,
            role=UserRole.ADMIN,
        )
        await self._user_repo.save(user)
        logger.info("Admin user created: %s (id: %s)", user.email, user.id)
        return user
