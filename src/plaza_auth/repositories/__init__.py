"""Repository interfaces for plaza_auth.

This package defines abstract repository interfaces that can be implemented
by different persistence technologies. The SQLAlchemy implementation lives
in plaza_auth.persistence.sqlalchemy.
"""

from plaza_auth.repositories.refresh_token_repository import (
    RefreshTokenData,
    RefreshTokenRepository,
)

__all__ = ["RefreshTokenData", "RefreshTokenRepository"]
