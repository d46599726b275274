"""Authentication router: signup, login, token refresh and logout."""

import logging
from typing import Union

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from plaza.application.dtos import AuthFailure, AuthResult, UserSummary
from plaza.presentation.api.dependencies import AuthService, CurrentUser, DBSession
from plaza.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshRequest,
    SignupRequest,
    TokenRefreshResponse,
    UserSummaryResponse,
)
from plaza.presentation.api.schemas.common import ApiResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _failure(status_code: int, result: AuthResult) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": result.message},
    )


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[UserSummaryResponse],
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Email taken, weak password or invalid input"},
        500: {"description": "Unexpected failure"},
    },
)
async def signup(
    request: SignupRequest,
    auth_service: AuthService,
    session: DBSession,
) -> Union[ApiResponse[UserSummaryResponse], JSONResponse]:
    """
    Create an account with role USER and status ACTIVE.

    Emails are trimmed and lower-cased before they are stored.
    """
    result = await auth_service.signup(
        email=request.email,
        password=request.password,
        name=request.name,
    )
    if not result.success:
        await session.rollback()
        if result.failure == AuthFailure.UNEXPECTED:
            return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, result)
        return _failure(status.HTTP_400_BAD_REQUEST, result)

    await session.commit()
    return ApiResponse.ok(
        result.message,
        UserSummaryResponse.from_summary(result.user),  # type: ignore[arg-type]
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        400: {"description": "Bad credentials, locked or ineligible account"},
    },
)
async def login(
    request: LoginRequest,
    http_request: Request,
    auth_service: AuthService,
    session: DBSession,
) -> Union[LoginResponse, JSONResponse]:
    """
    Authenticate with email and password.

    Unknown emails and wrong passwords get the same message. The account
    is locked for a while after repeated failures.
    """
    client_ip = http_request.client.host if http_request.client else None
    result = await auth_service.login(
        email=request.email,
        password=request.password,
        client_ip=client_ip,
    )

    if result.failure == AuthFailure.UNEXPECTED:
        await session.rollback()
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, result)

    # Failed-attempt bookkeeping is persisted as well
    await session.commit()

    if not result.success:
        return _failure(status.HTTP_400_BAD_REQUEST, result)

    return LoginResponse(
        success=True,
        message=result.message,
        access_token=result.tokens.access_token,  # type: ignore[union-attr]
        refresh_token=result.tokens.refresh_token,  # type: ignore[union-attr]
        user=UserSummaryResponse.from_summary(result.user),  # type: ignore[arg-type]
    )


@router.post(
    "/refresh",
    response_model=TokenRefreshResponse,
    summary="Rotate a refresh token",
    responses={
        200: {"description": "New token pair issued"},
        401: {"description": "Invalid, revoked or expired refresh token"},
    },
)
async def refresh(
    request: RefreshRequest,
    auth_service: AuthService,
    session: DBSession,
) -> Union[TokenRefreshResponse, JSONResponse]:
    """Exchange a refresh token for a new pair. The old one stops working."""
    result = await auth_service.refresh(request.refresh_token)
    if not result.success:
        await session.rollback()
        return _failure(status.HTTP_401_UNAUTHORIZED, result)

    await session.commit()
    return TokenRefreshResponse(
        success=True,
        message=result.message,
        access_token=result.tokens.access_token,  # type: ignore[union-attr]
        refresh_token=result.tokens.refresh_token,  # type: ignore[union-attr]
    )


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    summary="End one or all sessions",
)
async def logout(
    current_user: CurrentUser,
    auth_service: AuthService,
    session: DBSession,
    request: LogoutRequest | None = None,
) -> ApiResponse[None]:
    """Revoke the given refresh token, or every session with ``allSessions``."""
    body = request or LogoutRequest()
    try:
        result = await auth_service.logout(
            current_user,
            refresh_token=body.refresh_token,
            all_sessions=body.all_sessions,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    return ApiResponse.ok(result.message)


@router.get(
    "/me",
    response_model=ApiResponse[UserSummaryResponse],
    summary="Current user",
)
async def me(current_user: CurrentUser) -> ApiResponse[UserSummaryResponse]:
    summary = UserSummary.from_user(current_user)
    return ApiResponse.ok("ok", UserSummaryResponse.from_summary(summary))
