from enum import Enum


class UserRole(str, Enum):
    """User roles (who will be admin and who not)."""

    USER = "USER"
    ADMIN = "ADMIN"

    @property
    def authority(self) -> str:
        """Granted authority name, e.g. ROLE_ADMIN."""
        return f"ROLE_{self.value}"
