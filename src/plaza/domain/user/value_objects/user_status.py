from enum import Enum


class UserStatus(str, Enum):
    """Account lifecycle status. Users are never hard-deleted."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
