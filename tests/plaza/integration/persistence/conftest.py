"""Fixtures for repository tests.

SQLite tests run by default; PostgreSQL tests need ``--run-integration``.
"""

from tests.shared.fixtures.database import (
    pg_engine,
    pg_session,
    pg_url,
    postgres_container,
    sqlite_engine,
    sqlite_session,
)

# Make fixtures available to tests in this directory
__all__ = [
    "pg_engine",
    "pg_session",
    "pg_url",
    "postgres_container",
    "sqlite_engine",
    "sqlite_session",
]
