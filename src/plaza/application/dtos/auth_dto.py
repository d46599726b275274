"""DTOs returned by the authentication service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from plaza.domain.user import User


class AuthFailure(str, Enum):
    """Why an auth operation did not succeed."""

    EMAIL_TAKEN = "EMAIL_TAKEN"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    INVALID_INPUT = "INVALID_INPUT"
    BAD_CREDENTIALS = "BAD_CREDENTIALS"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    ACCOUNT_GATE = "ACCOUNT_GATE"
    INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"
    UNEXPECTED = "UNEXPECTED"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class UserSummary:
    """Public view of a user: id, email, name and role."""

    id: int
    email: str
    name: str
    role: str

    @classmethod
    def from_user(cls, user: User) -> UserSummary:
        return cls(
            id=user.id,  # type: ignore[arg-type]
            email=user.email,
            name=user.name,
            role=user.role.value,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }


@dataclass(frozen=True)
class AuthResult:
    """
    Outcome of signup, login, refresh or logout.

    Expected failures (taken email, wrong password, gated account) are
    reported here instead of being raised.
    """

    success: bool
    message: str
    failure: Optional[AuthFailure] = None
    tokens: Optional[TokenPair] = None
    user: Optional[UserSummary] = None

    @classmethod
    def ok(
        cls,
        message: str,
        tokens: Optional[TokenPair] = None,
        user: Optional[UserSummary] = None,
    ) -> AuthResult:
        return cls(success=True, message=message, tokens=tokens, user=user)

    @classmethod
    def fail(cls, failure: AuthFailure, message: str) -> AuthResult:
        return cls(success=False, message=message, failure=failure)
