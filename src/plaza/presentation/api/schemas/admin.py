"""Admin schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from plaza.application.dtos import AdminUserView
from plaza.domain.user import UserStatus
from plaza.presentation.api.schemas.common import CamelModel


class AdminUserResponse(CamelModel):
    id: int
    email: str
    name: str
    role: str
    status: str
    active: bool
    failed_login_attempts: int
    account_locked_until: Optional[datetime]
    last_login_at: Optional[datetime]
    created_at: datetime

    @classmethod
    def from_view(cls, view: AdminUserView) -> "AdminUserResponse":
        return cls(
            id=view.id,
            email=view.email,
            name=view.name,
            role=view.role,
            status=view.status,
            active=view.is_active,
            failed_login_attempts=view.failed_login_attempts,
            account_locked_until=view.account_locked_until,
            last_login_at=view.last_login_at,
            created_at=view.created_at,
        )


class StatusUpdateRequest(CamelModel):
    status: UserStatus = Field(..., description="New lifecycle status")
    active: Optional[bool] = Field(
        default=None,
        description="New active flag, unchanged when omitted",
    )


class PruneTokensResponse(CamelModel):
    deleted: int
