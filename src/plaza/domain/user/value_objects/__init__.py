"""Value objects for the user domain."""

from plaza.domain.user.value_objects.email import Email, normalize_email
from plaza.domain.user.value_objects.user_role import UserRole
from plaza.domain.user.value_objects.user_status import UserStatus

__all__ = [
    "Email",
    "UserRole",
    "UserStatus",
    "normalize_email",
]
