"""Authentication service for signup, login, refresh and logout."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from plaza.application.dtos import AuthFailure, AuthResult, TokenPair, UserSummary
from plaza.domain.shared.exceptions import ValidationError
from plaza.domain.shared.time import utc_now
from plaza.domain.user import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    User,
    normalize_email,
)
from plaza_auth import InvalidTokenError, WeakPasswordError

if TYPE_CHECKING:
    from plaza.application.services.credential_verifier import CredentialVerifier
    from plaza.domain.user import UserRepository
    from plaza_auth import JWTService, PasswordHashingService, RefreshTokenRepository

logger = logging.getLogger(__name__)

BAD_CREDENTIALS_MESSAGE = "email or password incorrect"
INVALID_REFRESH_MESSAGE = "invalid or expired refresh token"


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates plaza_auth infrastructure (password hashing, JWT tokens,
    refresh token sessions) with the User domain to provide:
    - Signup
    - Login with password, lockout and account gates
    - Refresh token rotation
    - Logout (one session or all)

    Expected failures are returned as ``AuthResult`` values. The caller
    owns the transaction and decides whether to commit.
    """

    def __init__(  # NOQA: PLR0913
        self,
        user_repository: UserRepository,
        refresh_token_repository: RefreshTokenRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        credential_verifier: CredentialVerifier,
        max_failed_attempts: int = 5,
        lockout_minutes: int = 15,
    ):
        self._user_repo = user_repository
        self._token_repo = refresh_token_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._verifier = credential_verifier
        self._max_failed_attempts = max_failed_attempts
        self._lockout = timedelta(minutes=lockout_minutes)

    async def _issue_tokens(self, user: User) -> TokenPair:
        access_token = self._jwt_service.create_access_token(
            email=user.email,
            user_id=user.id,
        )
        refresh_token = self._jwt_service.create_refresh_token(email=user.email)
        await self._token_repo.save(
            user_id=user.id,
            token=refresh_token,
            expires_at=utc_now() + self._jwt_service.refresh_token_ttl,
        )
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def signup(self, email: str, password: str, name: str) -> AuthResult:
        normalized = normalize_email(email)
        try:
            password_hash = self._password_service.hash(password)
            user = User.create(normalized, password_hash=password_hash, name=name)
            await self._user_repo.save(user)
        except WeakPasswordError as e:
            return AuthResult.fail(AuthFailure.WEAK_PASSWORD, e.message)
        except EmailAlreadyExistsError as e:
            logger.info("Signup rejected, email already registered")
            return AuthResult.fail(AuthFailure.EMAIL_TAKEN, e.message)
        except ValidationError as e:
            return AuthResult.fail(AuthFailure.INVALID_INPUT, e.message)
        except Exception:
            logger.exception("Unexpected error during signup")
            return AuthResult.fail(AuthFailure.UNEXPECTED, "signup failed")

        logger.info("User signed up: %s (id: %s)", user.email, user.id)
        return AuthResult.ok("signup successful", user=UserSummary.from_user(user))

    async def login(
        self,
        email: str,
        password: str,
        client_ip: Optional[str] = None,
    ) -> AuthResult:
        try:
            return await self._login(email, password, client_ip)
        except Exception:
            logger.exception("Unexpected error during login")
            return AuthResult.fail(AuthFailure.UNEXPECTED, "login failed")

    async def _login(
        self,
        email: str,
        password: str,
        client_ip: Optional[str],
    ) -> AuthResult:
        normalized = normalize_email(email or "")
        try:
            user = (
                await self._user_repo.find_by_email(normalized) if normalized else None
            )
        except InvalidEmailError:
            user = None
        if user is None:
            logger.warning("Login failed: unknown email")
            return AuthResult.fail(AuthFailure.BAD_CREDENTIALS, BAD_CREDENTIALS_MESSAGE)

        # The lock reason is only disclosed once the password is proven.
        lockout = self._verifier.check_lockout(user)
        if not self._verifier.verify(password or "", user.password_hash):
            if not lockout.passed:
                logger.warning("Login rejected for locked account: %s", user.id)
                return AuthResult.fail(
                    AuthFailure.BAD_CREDENTIALS,
                    BAD_CREDENTIALS_MESSAGE,
                )
            attempts = user.record_failed_login(
                self._max_failed_attempts,
                self._lockout,
            )
            await self._user_repo.save(user)
            if attempts >= self._max_failed_attempts:
                logger.warning(
                    "Account %s locked after %d failed attempts",
                    user.id,
                    attempts,
                )
            else:
                logger.warning("Login failed: wrong password for user %s", user.id)
            return AuthResult.fail(AuthFailure.BAD_CREDENTIALS, BAD_CREDENTIALS_MESSAGE)

        if not lockout.passed:
            logger.warning("Login rejected for locked account: %s", user.id)
            return AuthResult.fail(AuthFailure.ACCOUNT_LOCKED, lockout.message)

        gate = self._verifier.check_account_gates(user)
        if not gate.passed:
            logger.warning(
                "Login rejected for user %s: %s",
                user.id,
                gate.reason.value if gate.reason else "unknown",
            )
            return AuthResult.fail(AuthFailure.ACCOUNT_GATE, gate.message)

        if self._password_service.needs_rehash(user.password_hash):
            user.change_password_hash(self._password_service.hash(password))
            logger.info("Rehashed password for user %s", user.id)

        user.record_successful_login(client_ip)
        await self._user_repo.save(user)
        tokens = await self._issue_tokens(user)

        logger.info("User logged in: %s", user.email)
        return AuthResult.ok(
            "login successful",
            tokens=tokens,
            user=UserSummary.from_user(user),
        )

    async def refresh(self, refresh_token: str) -> AuthResult:
        invalid = AuthResult.fail(
            AuthFailure.INVALID_REFRESH_TOKEN,
            INVALID_REFRESH_MESSAGE,
        )
        try:
            payload = self._jwt_service.verify_token(refresh_token)
        except InvalidTokenError as e:
            logger.debug("Refresh rejected: %s", e.message)
            return invalid
        if not payload.is_refresh_token():
            logger.debug("Refresh rejected: not a refresh token")
            return invalid

        record = await self._token_repo.find_valid(refresh_token)
        if record is None:
            logger.debug("Refresh rejected: unknown, revoked or expired session")
            return invalid

        user = await self._user_repo.find_by_id(record.user_id)
        if user is None or user.email != payload.subject:
            logger.warning("Refresh rejected: session owner mismatch")
            return invalid

        gate = self._verifier.check_account_gates(user)
        if not gate.passed:
            return AuthResult.fail(AuthFailure.ACCOUNT_GATE, gate.message)

        if not await self._token_repo.consume(record):
            # Lost the race against a concurrent refresh of the same token
            return invalid

        tokens = await self._issue_tokens(user)
        logger.debug("Tokens refreshed for user: %s", user.id)
        return AuthResult.ok("token refreshed", tokens=tokens)

    async def logout(
        self,
        user: User,
        refresh_token: Optional[str] = None,
        all_sessions: bool = False,
    ) -> AuthResult:
        if all_sessions:
            revoked = await self._token_repo.revoke_all_for_user(user.id)
            logger.info("Revoked %d sessions for user %s", revoked, user.id)
            return AuthResult.ok("logged out from all sessions")

        if refresh_token:
            record = await self._token_repo.find_valid(refresh_token)
            # Tokens of other users are ignored like unknown ones
            if record is not None and record.user_id == user.id:
                await self._token_repo.revoke(record)

        logger.info("User logged out: %s", user.id)
        return AuthResult.ok("logged out")
