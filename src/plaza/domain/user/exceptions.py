"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from plaza.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_EMAIL)


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "email already registered",
            code=ErrorCode.EMAIL_ALREADY_EXISTS,
            details={"email": email},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: int | str) -> None:
        self.user_id = user_id
        super().__init__(
            f"User not found: {user_id}",
            code=ErrorCode.USER_NOT_FOUND,
            details={"user_id": user_id},
        )


class CannotChangeOwnStatusError(BusinessRuleViolation):
    """An admin cannot change the lifecycle status of their own account."""

    def __init__(self) -> None:
        super().__init__(
            "Cannot change the status of your own account",
            code=ErrorCode.CANNOT_CHANGE_OWN_STATUS,
        )
