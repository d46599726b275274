"""Unit tests for RequestIdentityResolver."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from plaza.application.services import (
    Anonymous,
    Authenticated,
    Rejected,
    RejectionReason,
    RequestIdentityResolver,
    extract_bearer_token,
)
from plaza.domain.user import UserRole
from plaza_auth import JWTService
from tests.shared.fixtures.factories import TEST_EMAIL, make_user


class TestExtractBearerToken:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            (None, None),
            ("", None),
            ("Basic abc", None),
            ("bearer abc", None),
            ("Bearer ", None),
            ("Bearer abc", "abc"),
        ],
    )
    def test_extract(self, header, expected):
        assert extract_bearer_token(header) == expected


class TestRequestIdentityResolver:
    def setup_method(self):
        self.jwt_service = JWTService(secret_key="resolver-test-secret")
        self.user_repo = AsyncMock()
        self.resolver = RequestIdentityResolver(self.jwt_service, self.user_repo)

    def _bearer(self, token: str) -> str:
        return f"Bearer {token}"

    @pytest.mark.asyncio
    async def test_missing_header_is_anonymous(self):
        result = await self.resolver.resolve(None)

        assert result == Anonymous()
        self.user_repo.find_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_valid_token_authenticates(self):
        user = make_user(id=1, role=UserRole.ADMIN)
        self.user_repo.find_by_id.return_value = user
        token = self.jwt_service.create_access_token(TEST_EMAIL, 1)

        result = await self.resolver.resolve(self._bearer(token))

        assert isinstance(result, Authenticated)
        assert result.identity.user is user
        assert result.identity.authority == "ROLE_ADMIN"
        assert result.identity.is_admin
        self.user_repo.find_by_id.assert_awaited_once_with(1)

    @pytest.mark.asyncio
    async def test_expired_token_is_rejected(self):
        token = self.jwt_service.create_access_token(
            TEST_EMAIL,
            1,
            expires_delta=timedelta(seconds=-1),
        )

        result = await self.resolver.resolve(self._bearer(token))

        assert result == Rejected(RejectionReason.TOKEN_EXPIRED)
        assert result.reason.message == "access token has expired"

    @pytest.mark.asyncio
    async def test_garbage_token_is_rejected(self):
        result = await self.resolver.resolve(self._bearer("not-a-jwt"))

        assert result == Rejected(RejectionReason.TOKEN_INVALID)

    @pytest.mark.asyncio
    async def test_refresh_token_as_bearer_is_rejected(self):
        token = self.jwt_service.create_refresh_token(TEST_EMAIL)

        result = await self.resolver.resolve(self._bearer(token))

        assert result == Rejected(RejectionReason.TOKEN_INVALID)

    @pytest.mark.asyncio
    async def test_unknown_user_is_anonymous(self):
        self.user_repo.find_by_id.return_value = None
        token = self.jwt_service.create_access_token(TEST_EMAIL, 99)

        result = await self.resolver.resolve(self._bearer(token))

        assert result == Anonymous()

    @pytest.mark.asyncio
    async def test_inactive_user_is_anonymous(self):
        self.user_repo.find_by_id.return_value = make_user(is_active=False)
        token = self.jwt_service.create_access_token(TEST_EMAIL, 1)

        result = await self.resolver.resolve(self._bearer(token))

        assert result == Anonymous()

    @pytest.mark.asyncio
    async def test_unexpected_error_fails_open(self):
        self.user_repo.find_by_id.side_effect = RuntimeError("db down")
        token = self.jwt_service.create_access_token(TEST_EMAIL, 1)

        result = await self.resolver.resolve(self._bearer(token))

        assert result == Anonymous()
