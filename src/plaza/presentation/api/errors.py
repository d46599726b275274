"""Authorization failures raised by API dependencies."""


class AuthenticationRequiredError(Exception):  # NOQA: N818
    """No authenticated identity on a protected route."""

    message = "authentication required"


class AccessDeniedError(Exception):  # NOQA: N818
    """Authenticated, but lacking the required role."""

    message = "insufficient permission"
