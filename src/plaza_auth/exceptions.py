"""Authentication exceptions.

These exceptions are raised by the plaza_auth package and should be
caught and handled by the application layer.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token cannot be trusted."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when a correctly signed token is past its expiry.

    Kept apart from malformed tokens so clients can be told to refresh
    instead of logging in again.
    """

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class TokenMalformedError(InvalidTokenError):
    """Raised for bad signatures, corrupt structure or empty tokens."""

    def __init__(self, message: str = "Malformed token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)
