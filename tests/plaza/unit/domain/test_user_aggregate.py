"""Unit tests for the User aggregate and Email value object."""

from datetime import timedelta

import pytest

from plaza.domain.shared.exceptions import ValidationError
from plaza.domain.user import (
    Email,
    InvalidEmailError,
    User,
    UserRole,
    UserStatus,
    normalize_email,
)
from tests.shared.fixtures.factories import make_user


class TestEmail:
    def test_email_is_trimmed_and_lower_cased(self):
        assert Email("  A@Test.com ").value == "a@test.com"

    def test_normalize_email_does_not_validate(self):
        assert normalize_email(" Not An Email ") == "not an email"

    @pytest.mark.parametrize("value", ["", "   ", "no-at-sign", "a@b", "a@@b.com"])
    def test_invalid_emails_raise(self, value):
        with pytest.raises(InvalidEmailError):
            Email(value)


class TestUserCreation:
    def test_create_defaults(self):
        user = User.create("Kim@Example.com", password_hash="h", name="Kim")

        assert user.id is None
        assert user.email == "kim@example.com"
        assert user.role == UserRole.USER
        assert user.status == UserStatus.ACTIVE
        assert user.is_active
        assert user.can_login
        assert user.failed_login_attempts == 0

    def test_name_is_trimmed(self):
        user = User.create("kim@example.com", password_hash="h", name="  Kim ")

        assert user.name == "Kim"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 51])
    def test_invalid_name_raises(self, name):
        with pytest.raises(ValidationError):
            User.create("kim@example.com", password_hash="h", name=name)

    def test_assign_id_once(self):
        user = User.create("kim@example.com", password_hash="h", name="Kim")
        user.assign_id(7)

        assert user.id == 7
        with pytest.raises(ValueError, match="already has id"):
            user.assign_id(8)

    def test_role_authority(self):
        assert UserRole.ADMIN.authority == "ROLE_ADMIN"
        assert UserRole.USER.authority == "ROLE_USER"


class TestLoginBookkeeping:
    def test_failed_logins_lock_at_threshold(self):
        user = make_user()

        for _ in range(4):
            user.record_failed_login(5, timedelta(minutes=15))
        assert not user.is_locked()

        attempts = user.record_failed_login(5, timedelta(minutes=15))

        assert attempts == 5
        assert user.is_locked()

    def test_successful_login_resets_counters(self):
        user = make_user()
        for _ in range(5):
            user.record_failed_login(5, timedelta(minutes=15))

        user.record_successful_login("10.0.0.1")

        assert user.failed_login_attempts == 0
        assert user.account_locked_until is None
        assert user.last_login_at is not None
        assert user.last_login_ip == "10.0.0.1"

    def test_lock_expires(self):
        user = make_user()
        user.record_failed_login(1, timedelta(minutes=15))

        assert user.is_locked()
        assert not user.is_locked(user.account_locked_until + timedelta(seconds=1))


class TestStatusChanges:
    @pytest.mark.parametrize(
        "status",
        [
            UserStatus.INACTIVE,
            UserStatus.SUSPENDED,
            UserStatus.DELETED,
            UserStatus.PENDING_VERIFICATION,
        ],
    )
    def test_non_active_status_cannot_login(self, status):
        user = make_user()
        user.change_status(status)

        assert user.status == status
        assert user.is_active
        assert not user.can_login

    def test_active_flag_is_optional(self):
        user = make_user()

        user.change_status(UserStatus.ACTIVE, is_active=False)

        assert not user.is_active
        assert not user.can_login
