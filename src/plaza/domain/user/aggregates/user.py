"""User aggregate: identity, credentials and login bookkeeping."""

from datetime import datetime, timedelta
from typing import Union

from plaza.domain.shared.exceptions import ValidationError
from plaza.domain.shared.time import ensure_tz_aware, utc_now
from plaza.domain.user.value_objects import Email, UserRole, UserStatus

NAME_MAX_LENGTH = 50
IP_MAX_LENGTH = 45


class User:
    """
    User aggregate root.

    Ids are assigned by the database, so a freshly created user has
    ``id is None`` until the repository has saved it.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        password_hash: str,
        name: str,
        role: Union[str, UserRole] = UserRole.USER,
        status: Union[str, UserStatus] = UserStatus.ACTIVE,
        is_active: bool = True,
        id: int | None = None,
        failed_login_attempts: int = 0,
        account_locked_until: datetime | None = None,
        last_login_at: datetime | None = None,
        last_login_ip: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._name = self._validate_name(name)
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._status = status if isinstance(status, UserStatus) else UserStatus(status)
        self._is_active = is_active
        self._id = id
        self._failed_login_attempts = failed_login_attempts
        self._account_locked_until = (
            ensure_tz_aware(account_locked_until) if account_locked_until else None
        )
        self._last_login_at = ensure_tz_aware(last_login_at) if last_login_at else None
        self._last_login_ip = last_login_ip
        self._created_at = ensure_tz_aware(created_at) if created_at else utc_now()
        self._updated_at = ensure_tz_aware(updated_at) if updated_at else utc_now()

    @staticmethod
    def _validate_name(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            msg = "Name cannot be empty"
            raise ValidationError(msg)
        if len(cleaned) > NAME_MAX_LENGTH:
            msg = f"Name cannot exceed {NAME_MAX_LENGTH} characters"
            raise ValidationError(msg)
        return cleaned

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def name(self) -> str:
        return self._name

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def status(self) -> UserStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def can_login(self) -> bool:
        return self._is_active and self._status == UserStatus.ACTIVE

    @property
    def failed_login_attempts(self) -> int:
        return self._failed_login_attempts

    @property
    def account_locked_until(self) -> datetime | None:
        return self._account_locked_until

    @property
    def last_login_at(self) -> datetime | None:
        return self._last_login_at

    @property
    def last_login_ip(self) -> str | None:
        return self._last_login_ip

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def assign_id(self, user_id: int) -> None:
        if self._id is not None and self._id != user_id:
            msg = f"User already has id {self._id}"
            raise ValueError(msg)
        self._id = user_id

    def is_locked(self, now: datetime | None = None) -> bool:
        if self._account_locked_until is None:
            return False
        return (now or utc_now()) < self._account_locked_until

    def record_failed_login(
        self,
        max_attempts: int,
        lockout: timedelta,
    ) -> int:
        """Count a wrong password; lock the account once max_attempts is hit."""
        self._failed_login_attempts += 1
        if self._failed_login_attempts >= max_attempts:
            self._account_locked_until = utc_now() + lockout
        self._updated_at = utc_now()
        return self._failed_login_attempts

    def record_successful_login(self, client_ip: str | None = None) -> None:
        self._failed_login_attempts = 0
        self._account_locked_until = None
        self._last_login_at = utc_now()
        self._last_login_ip = client_ip[:IP_MAX_LENGTH] if client_ip else None
        self._updated_at = utc_now()

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    def change_status(
        self,
        status: UserStatus,
        is_active: bool | None = None,
    ) -> None:
        self._status = status
        if is_active is not None:
            self._is_active = is_active
        self._updated_at = utc_now()

    def promote_to_admin(self) -> None:
        self._role = UserRole.ADMIN
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        password_hash: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> "User":
        return cls(
            email=email,
            password_hash=password_hash,
            name=name,
            role=role,
            status=UserStatus.ACTIVE,
            is_active=True,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: int,
        email: Union[str, Email],
        password_hash: str,
        name: str,
        role: Union[str, UserRole],
        status: Union[str, UserStatus],
        is_active: bool,
        failed_login_attempts: int,
        account_locked_until: datetime | None,
        last_login_at: datetime | None,
        last_login_ip: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            password_hash=password_hash,
            name=name,
            role=role,
            status=status,
            is_active=is_active,
            failed_login_attempts=failed_login_attempts,
            account_locked_until=account_locked_until,
            last_login_at=last_login_at,
            last_login_ip=last_login_ip,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value})"
