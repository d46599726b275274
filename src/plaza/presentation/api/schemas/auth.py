"""Authentication schemas for request/response models."""

from typing import Annotated, Optional

from pydantic import BeforeValidator, ConfigDict, EmailStr, Field

from plaza.application.dtos import UserSummary
from plaza.presentation.api.schemas.common import CamelModel


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


StrippedEmail = Annotated[EmailStr, BeforeValidator(_strip)]


class SignupRequest(CamelModel):
    """Request schema for user signup."""

    email: StrippedEmail = Field(..., description="User's email address")
    password: str = Field(..., description="Password (8-128 characters)")
    name: str = Field(..., description="Display name (1-50 characters)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
                "name": "Kim",
            },
        },
    )


class LoginRequest(CamelModel):
    """Request schema for user login.

    The email is not format-checked here, so malformed and unknown
    addresses get the same answer.
    """

    email: str
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
            },
        },
    )


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., description="Refresh token from login")


class LogoutRequest(CamelModel):
    refresh_token: Optional[str] = Field(
        default=None,
        description="Session to end; ignored when allSessions is true",
    )
    all_sessions: bool = Field(default=False, description="End every session")


class UserSummaryResponse(CamelModel):
    id: int
    email: str
    name: str
    role: str

    @classmethod
    def from_summary(cls, summary: UserSummary) -> "UserSummaryResponse":
        return cls(
            id=summary.id,
            email=summary.email,
            name=summary.name,
            role=summary.role,
        )


class LoginResponse(CamelModel):
    """Response schema for a successful login."""

    success: bool
    message: str
    access_token: str
    refresh_token: str
    user: UserSummaryResponse


class TokenRefreshResponse(CamelModel):
    success: bool
    message: str
    access_token: str
    refresh_token: str
