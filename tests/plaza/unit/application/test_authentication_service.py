"""Unit tests for AuthenticationService."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from plaza.application.dtos import AuthFailure
from plaza.application.services import AuthenticationService, CredentialVerifier
from plaza.domain.shared.time import utc_now
from plaza.domain.user import EmailAlreadyExistsError, InvalidEmailError, UserStatus
from plaza_auth import JWTService, PasswordHashingService, RefreshTokenData
from tests.shared.fixtures.factories import (
    TEST_EMAIL,
    TEST_PASSWORD,
    locked_until,
    make_user,
)

BAD_CREDENTIALS = "email or password incorrect"
INVALID_REFRESH = "invalid or expired refresh token"


def _token_record(user_id: int = 1, revoked: bool = False) -> RefreshTokenData:
    now = utc_now()
    return RefreshTokenData(
        id=5,
        user_id=user_id,
        token_hash="hash",
        created_at=now,
        expires_at=now + timedelta(days=7),
        revoked=revoked,
        last_used_at=None,
    )


class _AuthServiceTestBase:
    def setup_method(self):
        self.user_repo = AsyncMock()
        self.token_repo = AsyncMock()
        self.password_service = PasswordHashingService(rounds=4)
        self.jwt_service = JWTService(secret_key="auth-service-test-secret")
        self.service = AuthenticationService(
            user_repository=self.user_repo,
            refresh_token_repository=self.token_repo,
            password_service=self.password_service,
            jwt_service=self.jwt_service,
            credential_verifier=CredentialVerifier(self.password_service),
            max_failed_attempts=5,
            lockout_minutes=15,
        )

        async def assign_id(user):
            if user.id is None:
                user.assign_id(1)

        self.user_repo.save.side_effect = assign_id

    def stored_user(self, **kwargs):
        kwargs.setdefault("password_hash", self.password_service.hash(TEST_PASSWORD))
        return make_user(**kwargs)


class TestSignup(_AuthServiceTestBase):
    @pytest.mark.asyncio
    async def test_signup_normalizes_email(self):
        result = await self.service.signup("A@Test.com ", TEST_PASSWORD, "Kim")

        assert result.success
        assert result.message == "signup successful"
        assert result.user.email == "a@test.com"
        assert result.user.role == "USER"
        saved = self.user_repo.save.call_args[0][0]
        assert saved.email == "a@test.com"
        assert self.password_service.verify(TEST_PASSWORD, saved.password_hash)

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self):
        self.user_repo.save.side_effect = EmailAlreadyExistsError("a@test.com")

        result = await self.service.signup("a@test.com", TEST_PASSWORD, "Kim")

        assert not result.success
        assert result.failure == AuthFailure.EMAIL_TAKEN
        assert "already registered" in result.message

    @pytest.mark.asyncio
    async def test_signup_weak_password(self):
        result = await self.service.signup("a@test.com", "short", "Kim")

        assert result.failure == AuthFailure.WEAK_PASSWORD
        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_signup_invalid_name(self):
        result = await self.service.signup("a@test.com", TEST_PASSWORD, "   ")

        assert result.failure == AuthFailure.INVALID_INPUT

    @pytest.mark.asyncio
    async def test_signup_unexpected_error(self):
        self.user_repo.save.side_effect = RuntimeError("connection reset")

        result = await self.service.signup("a@test.com", TEST_PASSWORD, "Kim")

        assert result.failure == AuthFailure.UNEXPECTED
        assert result.message == "signup failed"


class TestLogin(_AuthServiceTestBase):
    @pytest.mark.asyncio
    async def test_login_success_issues_tokens(self):
        user = self.stored_user()
        self.user_repo.find_by_email.return_value = user

        result = await self.service.login(" KIM@example.com", TEST_PASSWORD, "10.0.0.1")

        assert result.success
        assert result.message == "login successful"
        self.user_repo.find_by_email.assert_awaited_once_with(TEST_EMAIL)
        access = self.jwt_service.verify_token(result.tokens.access_token)
        refresh = self.jwt_service.verify_token(result.tokens.refresh_token)
        assert access.is_access_token()
        assert access.user_id == 1
        assert refresh.is_refresh_token()
        assert result.user.to_dict() == {
            "id": 1,
            "email": TEST_EMAIL,
            "name": "Kim",
            "role": "USER",
        }
        assert user.last_login_ip == "10.0.0.1"

    @pytest.mark.asyncio
    async def test_login_persists_refresh_token_with_ttl(self):
        self.user_repo.find_by_email.return_value = self.stored_user()

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        kwargs = self.token_repo.save.call_args.kwargs
        assert kwargs["user_id"] == 1
        assert kwargs["token"] == result.tokens.refresh_token
        expected = utc_now() + timedelta(days=7)
        assert abs((kwargs["expires_at"] - expected).total_seconds()) < 5

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_share_message(self):
        self.user_repo.find_by_email.return_value = None
        unknown = await self.service.login("nobody@example.com", TEST_PASSWORD)

        self.user_repo.find_by_email.return_value = self.stored_user()
        wrong = await self.service.login(TEST_EMAIL, "wrong-password")

        assert unknown.failure == wrong.failure == AuthFailure.BAD_CREDENTIALS
        assert unknown.message == wrong.message == BAD_CREDENTIALS

    @pytest.mark.asyncio
    async def test_wrong_password_counts_attempt(self):
        user = self.stored_user()
        self.user_repo.find_by_email.return_value = user

        await self.service.login(TEST_EMAIL, "wrong-password")

        assert user.failed_login_attempts == 1
        self.user_repo.save.assert_awaited_once_with(user)
        self.token_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_five_failures_lock_the_account(self):
        user = self.stored_user()
        self.user_repo.find_by_email.return_value = user

        for _ in range(5):
            await self.service.login(TEST_EMAIL, "wrong-password")
        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert user.is_locked()
        assert result.failure == AuthFailure.ACCOUNT_LOCKED

    @pytest.mark.asyncio
    async def test_locked_account_with_wrong_password_looks_like_bad_credentials(self):
        user = self.stored_user(failed_login_attempts=5, account_locked_until=locked_until())
        self.user_repo.find_by_email.return_value = user
        result = await self.service.login(TEST_EMAIL, "wrong-password")

        self.user_repo.find_by_email.return_value = None
        unknown = await self.service.login("nobody@example.com", "wrong-password")

        assert result.failure == unknown.failure == AuthFailure.BAD_CREDENTIALS
        assert result.message == unknown.message == BAD_CREDENTIALS
        assert user.failed_login_attempts == 5
        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_locked_account_with_correct_password_reports_lock(self):
        user = self.stored_user(failed_login_attempts=5, account_locked_until=locked_until())
        self.user_repo.find_by_email.return_value = user

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert result.failure == AuthFailure.ACCOUNT_LOCKED
        assert "locked" in result.message
        self.token_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_email_is_bad_credentials(self):
        self.user_repo.find_by_email.side_effect = InvalidEmailError("not-an-email")

        result = await self.service.login("not-an-email", TEST_PASSWORD)

        assert result.failure == AuthFailure.BAD_CREDENTIALS
        assert result.message == BAD_CREDENTIALS

    @pytest.mark.asyncio
    async def test_suspended_account_gets_specific_message(self):
        self.user_repo.find_by_email.return_value = self.stored_user(
            status=UserStatus.SUSPENDED,
        )

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert result.failure == AuthFailure.ACCOUNT_GATE
        assert result.message == "account is suspended"
        self.token_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_outdated_hash_is_upgraded(self):
        old_hash = PasswordHashingService(rounds=5).hash(TEST_PASSWORD)
        user = self.stored_user(password_hash=old_hash)
        self.user_repo.find_by_email.return_value = user

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert result.success
        assert user.password_hash != old_hash
        assert not self.password_service.needs_rehash(user.password_hash)

    @pytest.mark.asyncio
    async def test_unexpected_error(self):
        self.user_repo.find_by_email.side_effect = RuntimeError("db down")

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert result.failure == AuthFailure.UNEXPECTED
        assert result.message == "login failed"


class TestRefresh(_AuthServiceTestBase):
    @pytest.mark.asyncio
    async def test_refresh_rotates_tokens(self):
        self.token_repo.find_valid.return_value = _token_record()
        self.token_repo.consume.return_value = True
        self.user_repo.find_by_id.return_value = self.stored_user()
        token = self.jwt_service.create_refresh_token(TEST_EMAIL)

        result = await self.service.refresh(token)

        assert result.success
        assert result.message == "token refreshed"
        assert result.tokens.refresh_token != token
        self.token_repo.consume.assert_awaited_once()
        self.token_repo.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(self):
        token = self.jwt_service.create_access_token(TEST_EMAIL, 1)

        result = await self.service.refresh(token)

        assert result.failure == AuthFailure.INVALID_REFRESH_TOKEN
        assert result.message == INVALID_REFRESH
        self.token_repo.find_valid.assert_not_called()

    @pytest.mark.asyncio
    async def test_garbage_token(self):
        result = await self.service.refresh("garbage")

        assert result.failure == AuthFailure.INVALID_REFRESH_TOKEN

    @pytest.mark.asyncio
    async def test_revoked_or_unknown_session(self):
        self.token_repo.find_valid.return_value = None
        token = self.jwt_service.create_refresh_token(TEST_EMAIL)

        result = await self.service.refresh(token)

        assert result.failure == AuthFailure.INVALID_REFRESH_TOKEN

    @pytest.mark.asyncio
    async def test_owner_mismatch(self):
        self.token_repo.find_valid.return_value = _token_record()
        self.user_repo.find_by_id.return_value = self.stored_user(email="other@example.com")
        token = self.jwt_service.create_refresh_token(TEST_EMAIL)

        result = await self.service.refresh(token)

        assert result.failure == AuthFailure.INVALID_REFRESH_TOKEN
        self.token_repo.consume.assert_not_called()

    @pytest.mark.asyncio
    async def test_gated_owner(self):
        self.token_repo.find_valid.return_value = _token_record()
        self.user_repo.find_by_id.return_value = self.stored_user(is_active=False)
        token = self.jwt_service.create_refresh_token(TEST_EMAIL)

        result = await self.service.refresh(token)

        assert result.failure == AuthFailure.ACCOUNT_GATE
        assert result.message == "account is inactive"

    @pytest.mark.asyncio
    async def test_lost_consume_race(self):
        self.token_repo.find_valid.return_value = _token_record()
        self.token_repo.consume.return_value = False
        self.user_repo.find_by_id.return_value = self.stored_user()
        token = self.jwt_service.create_refresh_token(TEST_EMAIL)

        result = await self.service.refresh(token)

        assert result.failure == AuthFailure.INVALID_REFRESH_TOKEN
        self.token_repo.save.assert_not_called()


class TestLogout(_AuthServiceTestBase):
    @pytest.mark.asyncio
    async def test_logout_revokes_own_token(self):
        record = _token_record(user_id=1)
        self.token_repo.find_valid.return_value = record

        result = await self.service.logout(make_user(id=1), refresh_token="tok")

        assert result.success
        assert result.message == "logged out"
        self.token_repo.revoke.assert_awaited_once_with(record)

    @pytest.mark.asyncio
    async def test_logout_ignores_foreign_token(self):
        self.token_repo.find_valid.return_value = _token_record(user_id=2)

        result = await self.service.logout(make_user(id=1), refresh_token="tok")

        assert result.success
        self.token_repo.revoke.assert_not_called()

    @pytest.mark.asyncio
    async def test_logout_all_sessions(self):
        self.token_repo.revoke_all_for_user.return_value = 3

        result = await self.service.logout(make_user(id=1), all_sessions=True)

        assert result.message == "logged out from all sessions"
        self.token_repo.revoke_all_for_user.assert_awaited_once_with(1)
