"""SQLAlchemy implementation for plaza_auth persistence.

Provides:
- AuthBase: Declarative base for auth models
- RefreshTokenModel: SQLAlchemy model for refresh token sessions
- RefreshTokenRepositorySQLAlchemy: Repository implementation

Note: The consuming application must create AuthBase.metadata together
with its own tables.
"""

from plaza_auth.persistence.sqlalchemy.base import AuthBase
from plaza_auth.persistence.sqlalchemy.models import RefreshTokenModel
from plaza_auth.persistence.sqlalchemy.repositories import (
    RefreshTokenRepositorySQLAlchemy,
    hash_token,
)

__all__ = [
    "AuthBase",
    "RefreshTokenModel",
    "RefreshTokenRepositorySQLAlchemy",
    "hash_token",
]
