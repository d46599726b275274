"""Shared domain components.

This module exports shared exceptions, paging primitives and time
helpers used across domain boundaries.
"""

from plaza.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    PermissionDeniedError,
    ValidationError,
)
from plaza.domain.shared.pagination import MAX_PAGE_SIZE, Page, PageRequest
from plaza.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "BusinessRuleViolation",
    "PermissionDeniedError",
    "EntityNotFoundError",
    "ConflictError",
    # Paging
    "MAX_PAGE_SIZE",
    "Page",
    "PageRequest",
    # Utilities
    "ensure_tz_aware",
    "utc_now",
]
