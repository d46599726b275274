"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional, Union

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.user import (
    Email,
    EmailAlreadyExistsError,
    User,
    UserRepository,
)
from plaza.infrastructure.persistence.sqlalchemy.models import UserModel
from plaza.infrastructure.persistence.sqlalchemy.repositories._utils import (
    as_utc,
    fetch_page,
)

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> Optional[User]:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        # Normalize email for lookup
        email_value = email.value if isinstance(email, Email) else Email(email).value

        stmt = select(UserModel).where(UserModel.email == email_value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_ids(self, user_ids: list[int]) -> dict[int, User]:
        if not user_ids:
            return {}
        stmt = select(UserModel).where(UserModel.id.in_(set(user_ids)))
        result = await self._session.execute(stmt)
        return {model.id: self._map_to_domain(model) for model in result.scalars()}

    async def save(self, user: User) -> None:
        existing = None
        if user.id is not None:
            existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                self._update_model(existing, user)
                await self._session.flush()
                logger.debug("Updated user: %s", user.id)
            else:
                model = self._map_to_model(user)
                self._session.add(model)
                await self._session.flush()
                user.assign_id(model.id)
                logger.info("Created user: %s (email: %s)", user.id, user.email)
        except IntegrityError as e:
            # Keep session usable after a failed flush
            await self._session.rollback()
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyExistsError(user.email) from e
            raise

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def list_page(self, page_request: PageRequest) -> Page[User]:
        stmt = select(UserModel).order_by(UserModel.created_at, UserModel.id)
        models, total = await fetch_page(self._session, stmt, page_request)
        return Page(
            items=[self._map_to_domain(model) for model in models],
            total=total,
            request=page_request,
        )

    async def _find_model_by_id(self, user_id: int) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            name=model.name,
            role=model.role,
            status=model.status,
            is_active=model.is_active,
            failed_login_attempts=model.failed_login_attempts,
            account_locked_until=as_utc(model.account_locked_until),
            last_login_at=as_utc(model.last_login_at),
            last_login_ip=model.last_login_ip,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            email=user.email,
            password_hash=user.password_hash,
            name=user.name,
            role=user.role.value,
            status=user.status.value,
            is_active=user.is_active,
            failed_login_attempts=user.failed_login_attempts,
            account_locked_until=user.account_locked_until,
            last_login_at=user.last_login_at,
            last_login_ip=user.last_login_ip,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        # Note: id and email never change after signup
        model.password_hash = user.password_hash
        model.name = user.name
        model.role = user.role.value
        model.status = user.status.value
        model.is_active = user.is_active
        model.failed_login_attempts = user.failed_login_attempts
        model.account_locked_until = user.account_locked_until
        model.last_login_at = user.last_login_at
        model.last_login_ip = user.last_login_ip
        model.updated_at = user.updated_at
