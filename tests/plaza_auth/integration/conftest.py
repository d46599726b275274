"""Fixtures for plaza_auth persistence tests."""

from tests.shared.fixtures.database import sqlite_engine, sqlite_session

__all__ = ["sqlite_engine", "sqlite_session"]
