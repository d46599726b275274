"""Password checks and account eligibility gates."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from plaza.domain.shared.time import utc_now
from plaza.domain.user import User, UserStatus
from plaza_auth import PasswordHashingService


class AccountGateReason(str, Enum):
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    CANNOT_LOGIN = "CANNOT_LOGIN"
    LOCKED = "LOCKED"


_GATE_MESSAGES = {
    AccountGateReason.INACTIVE: "account is inactive",
    AccountGateReason.SUSPENDED: "account is suspended",
    AccountGateReason.DELETED: "account has been deleted",
    AccountGateReason.PENDING_VERIFICATION: "email verification required",
    AccountGateReason.CANNOT_LOGIN: "account cannot login",
    AccountGateReason.LOCKED: "account is temporarily locked, try again later",
}

_STATUS_REASONS = {
    UserStatus.INACTIVE: AccountGateReason.INACTIVE,
    UserStatus.SUSPENDED: AccountGateReason.SUSPENDED,
    UserStatus.DELETED: AccountGateReason.DELETED,
    UserStatus.PENDING_VERIFICATION: AccountGateReason.PENDING_VERIFICATION,
}


@dataclass(frozen=True)
class AccountGateResult:
    passed: bool
    reason: Optional[AccountGateReason] = None

    @property
    def message(self) -> str:
        if self.reason is None:
            return ""
        return _GATE_MESSAGES[self.reason]

    @classmethod
    def ok(cls) -> "AccountGateResult":
        return cls(passed=True)

    @classmethod
    def blocked(cls, reason: AccountGateReason) -> "AccountGateResult":
        return cls(passed=False, reason=reason)


class CredentialVerifier:
    """
    Decides whether a presented password and an account may log in.

    Never logs the plaintext password or the stored hash.
    """

    def __init__(self, password_service: PasswordHashingService):
        self._password_service = password_service

    def verify(self, password: str, password_hash: str) -> bool:
        return self._password_service.verify(password, password_hash)

    def check_account_gates(self, user: User) -> AccountGateResult:
        """Evaluate the active flag first, then the lifecycle status."""
        if not user.is_active:
            return AccountGateResult.blocked(AccountGateReason.INACTIVE)
        if user.status == UserStatus.ACTIVE:
            return AccountGateResult.ok()
        reason = _STATUS_REASONS.get(user.status, AccountGateReason.CANNOT_LOGIN)
        return AccountGateResult.blocked(reason)

    def check_lockout(
        self,
        user: User,
        now: datetime | None = None,
    ) -> AccountGateResult:
        if user.is_locked(now or utc_now()):
            return AccountGateResult.blocked(AccountGateReason.LOCKED)
        return AccountGateResult.ok()
