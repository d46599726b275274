from plaza_auth.persistence.sqlalchemy.repositories.refresh_token_repository import (
    RefreshTokenRepositorySQLAlchemy,
    hash_token,
)

__all__ = ["RefreshTokenRepositorySQLAlchemy", "hash_token"]
