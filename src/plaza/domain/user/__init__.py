"""User domain manages user identity and login bookkeeping.

This domain handles:
- User aggregate (identity, password hash, role, lifecycle status)
- Failed-login counting and temporary lockout
- Status transitions performed by administrators
"""

from plaza.domain.user.aggregates import User
from plaza.domain.user.exceptions import (
    CannotChangeOwnStatusError,
    EmailAlreadyExistsError,
    InvalidEmailError,
    UserNotFoundError,
)
from plaza.domain.user.repositories import UserRepository
from plaza.domain.user.value_objects import (
    Email,
    UserRole,
    UserStatus,
    normalize_email,
)

__all__ = [
    "CannotChangeOwnStatusError",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "UserStatus",
    "normalize_email",
]
