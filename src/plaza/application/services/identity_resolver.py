"""Resolve the caller's identity from an Authorization header."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from plaza.application.context import AuthenticatedIdentity
from plaza_auth import InvalidTokenError, TokenExpiredError

if TYPE_CHECKING:
    from plaza.domain.user import User, UserRepository
    from plaza_auth import JWTService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class RejectionReason(str, Enum):
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"

    @property
    def message(self) -> str:
        if self is RejectionReason.TOKEN_EXPIRED:
            return "access token has expired"
        return "access token is invalid"


@dataclass(frozen=True)
class Authenticated:
    identity: AuthenticatedIdentity


@dataclass(frozen=True)
class Anonymous:
    pass


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason


IdentityResolution = Union[Authenticated, Anonymous, Rejected]


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of a ``Bearer <token>`` header, else None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


class RequestIdentityResolver:
    """
    Turns an Authorization header into an IdentityResolution.

    Token problems are rejections. A valid token whose user is gone or
    deactivated resolves to Anonymous, so protected routes answer with
    the generic authentication-required error.
    """

    def __init__(self, jwt_service: JWTService, user_repository: UserRepository):
        self._jwt_service = jwt_service
        self._user_repo = user_repository

    async def resolve(self, authorization: Optional[str]) -> IdentityResolution:
        token = extract_bearer_token(authorization)
        if token is None:
            return Anonymous()

        try:
            return await self._resolve_token(token)
        except Exception:
            logger.exception("Unexpected error while resolving request identity")
            return Anonymous()

    async def _resolve_token(self, token: str) -> IdentityResolution:
        try:
            payload = self._jwt_service.verify_token(token)
        except TokenExpiredError:
            logger.debug("Rejected expired access token")
            return Rejected(RejectionReason.TOKEN_EXPIRED)
        except InvalidTokenError as e:
            logger.debug("Rejected invalid access token: %s", e.message)
            return Rejected(RejectionReason.TOKEN_INVALID)

        if not payload.is_access_token():
            logger.debug("Rejected %s token used as bearer", payload.token_type)
            return Rejected(RejectionReason.TOKEN_INVALID)

        user = await self._load_user(payload.user_id, payload.subject)
        if user is None or not user.is_active:
            return Anonymous()

        return Authenticated(AuthenticatedIdentity.create(user))

    async def _load_user(self, user_id: Optional[int], email: str) -> Optional[User]:
        if user_id is not None:
            return await self._user_repo.find_by_id(user_id)
        return await self._user_repo.find_by_email(email)
