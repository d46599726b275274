"""FastAPI dependency injection for the Plaza API.

Provides dependencies for:
- Database sessions
- Authentication services
- The request identity set by IdentityMiddleware
- Repository factory and pagination parameters

Process-wide objects (engine, session maker, JWT and password services)
are created once in ``create_app`` and kept on ``app.state``.
"""

import logging
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from plaza.application.context import AuthenticatedIdentity
from plaza.application.services import AuthenticationService, CredentialVerifier
from plaza.domain.shared.pagination import PageRequest
from plaza.domain.user import User
from plaza.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from plaza.presentation.api.config import get_api_settings
from plaza.presentation.api.errors import AccessDeniedError, AuthenticationRequiredError
from plaza_auth import JWTService, PasswordHashingService
from plaza_config.settings import Settings

logger = logging.getLogger(__name__)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Routers commit or roll back explicitly.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_repository_factory(session: DBSession) -> SQLAlchemyRepositoryFactory:
    """Repositories sharing the request session."""
    return SQLAlchemyRepositoryFactory(session)


# Type alias for injected repository factory
RepoFactory = Annotated[SQLAlchemyRepositoryFactory, Depends(get_repository_factory)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(request: Request) -> JWTService:
    """Get the JWT service built from the application settings."""
    return request.app.state.jwt_service


def get_password_service(request: Request) -> PasswordHashingService:
    """Get the password hashing service."""
    return request.app.state.password_service


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]


async def get_authentication_service(
    factory: RepoFactory,
    settings: SettingsDep,
    jwt_service: JWTServiceDep,
    password_service: PasswordServiceDep,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates signup, login, and token management.
    """
    return AuthenticationService(
        user_repository=factory.user_repository(),
        refresh_token_repository=factory.refresh_token_repository(),
        password_service=password_service,
        jwt_service=jwt_service,
        credential_verifier=CredentialVerifier(password_service),
        max_failed_attempts=settings.login_max_failed_attempts,
        lockout_minutes=settings.login_lockout_minutes,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current Identity (resolved by IdentityMiddleware)
# -----------------------------------------------------------------------------


def get_optional_identity(request: Request) -> Optional[AuthenticatedIdentity]:
    """The caller's identity, or None for anonymous requests. Never fails."""
    return getattr(request.state, "identity", None)


OptionalIdentity = Annotated[
    Optional[AuthenticatedIdentity],
    Depends(get_optional_identity),
]


def get_current_identity(identity: OptionalIdentity) -> AuthenticatedIdentity:
    """Require an authenticated identity."""
    if identity is None:
        raise AuthenticationRequiredError
    return identity


CurrentIdentity = Annotated[AuthenticatedIdentity, Depends(get_current_identity)]


def get_current_user(identity: CurrentIdentity) -> User:
    return identity.user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_admin(identity: CurrentIdentity) -> AuthenticatedIdentity:
    """Require the ROLE_ADMIN authority."""
    if not identity.is_admin:
        logger.warning("Admin route denied for user %s", identity.user_id)
        raise AccessDeniedError
    return identity


AdminUser = Annotated[AuthenticatedIdentity, Depends(require_admin)]


# -----------------------------------------------------------------------------
# Pagination
# -----------------------------------------------------------------------------


def page_params(default_size: int):
    """Build a dependency reading zero-based ``page`` and ``size`` queries."""

    def dependency(
        page: int = Query(default=0, description="Page number (zero-based)"),
        size: int = Query(default=default_size, description="Items per page"),
    ) -> PageRequest:
        return PageRequest(page=page, size=size)

    return dependency
