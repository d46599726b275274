"""Plaza Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the social domain. It handles:
- Password hashing (bcrypt)
- JWT token creation and verification
- Refresh token session storage (with pluggable persistence)

Architecture:
    plaza_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── repositories/       # Abstract interfaces
    ├── persistence/        # Implementations by technology
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from plaza_auth import PasswordHashingService, JWTService

    from plaza_auth.persistence.sqlalchemy import (
        RefreshTokenRepositorySQLAlchemy,
        AuthBase,
    )
"""

from plaza_auth.exceptions import (
    AuthError,
    InvalidTokenError,
    TokenExpiredError,
    TokenMalformedError,
    WeakPasswordError,
)
from plaza_auth.repositories import RefreshTokenData, RefreshTokenRepository
from plaza_auth.schemas import TokenPayload
from plaza_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Repositories (interfaces)
    "RefreshTokenData",
    "RefreshTokenRepository",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenMalformedError",
    "WeakPasswordError",
]
