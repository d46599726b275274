"""Administration router (ROLE_ADMIN only)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from plaza.application.services import UserAdminService
from plaza.domain.shared.pagination import PageRequest
from plaza.presentation.api.dependencies import AdminUser, RepoFactory, page_params
from plaza.presentation.api.schemas.admin import (
    AdminUserResponse,
    PruneTokensResponse,
    StatusUpdateRequest,
)
from plaza.presentation.api.schemas.common import ApiResponse, PageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])

UserPage = Annotated[PageRequest, Depends(page_params(20))]


@router.get(
    "/users",
    response_model=ApiResponse[PageResponse[AdminUserResponse]],
    summary="List users",
    responses={403: {"description": "Admin access required"}},
)
async def list_users(
    _admin: AdminUser,  # Used for authorization check
    factory: RepoFactory,
    page_request: UserPage,
) -> ApiResponse[PageResponse[AdminUserResponse]]:
    page = await UserAdminService.from_factory(factory).list_users(page_request)
    return ApiResponse.ok(
        "ok",
        PageResponse.from_page(page, AdminUserResponse.from_view),
    )


@router.patch(
    "/users/{user_id}/status",
    response_model=ApiResponse[AdminUserResponse],
    summary="Change a user's status",
    responses={
        404: {"description": "User not found"},
        422: {"description": "Cannot change own status"},
    },
)
async def change_user_status(
    user_id: int,
    request: StatusUpdateRequest,
    admin: AdminUser,
    factory: RepoFactory,
) -> ApiResponse[AdminUserResponse]:
    """
    Change a user's lifecycle status and optionally the active flag.

    Users who can no longer log in lose all of their sessions.
    """
    service = UserAdminService.from_factory(factory)
    try:
        view = await service.change_status(
            admin_id=admin.user_id,
            user_id=user_id,
            status=request.status,
            is_active=request.active,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("status updated", AdminUserResponse.from_view(view))


@router.post(
    "/tokens/prune",
    response_model=ApiResponse[PruneTokensResponse],
    summary="Delete expired refresh tokens",
)
async def prune_tokens(
    _admin: AdminUser,
    factory: RepoFactory,
) -> ApiResponse[PruneTokensResponse]:
    service = UserAdminService.from_factory(factory)
    try:
        deleted = await service.prune_expired_tokens()
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("expired tokens pruned", PruneTokensResponse(deleted=deleted))
