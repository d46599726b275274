"""Persistence implementations for plaza_auth.

This package contains database-specific implementations of the
repository interfaces defined in plaza_auth.repositories.

Usage:
    from plaza_auth.persistence.sqlalchemy import (
        RefreshTokenRepositorySQLAlchemy,
        RefreshTokenModel,
        AuthBase,
    )
"""
