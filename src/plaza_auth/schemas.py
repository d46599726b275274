"""Auth schemas and data structures.

These are simple data classes used for transferring token data
between components.
"""

from dataclasses import dataclass
from datetime import datetime

ACCESS_TOKEN_TYPE = "access"  # NOQA: S105
REFRESH_TOKEN_TYPE = "refresh"  # NOQA: S105


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    This represents the data extracted from a verified JWT token.

    Attributes
    ----------
    subject
        The user's email address (``sub`` claim)
    token_type
        Either "access" or "refresh"
    issued_at
        Token issue timestamp
    expires_at
        Token expiration timestamp
    user_id
        The numeric user id (access tokens only)
    token_id
        Unique token id (refresh tokens only)
    """

    subject: str
    token_type: str
    issued_at: datetime
    expires_at: datetime
    user_id: int | None = None
    token_id: str | None = None

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.expires_at.tzinfo) >= self.expires_at

    def is_access_token(self) -> bool:
        """Check if this is an access token."""
        return self.token_type == ACCESS_TOKEN_TYPE

    def is_refresh_token(self) -> bool:
        """Check if this is a refresh token."""
        return self.token_type == REFRESH_TOKEN_TYPE
