"""Comments router: comments on posts and one level of replies."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from plaza.application.services import DEFAULT_COMMENT_PAGE_SIZE, CommentService
from plaza.domain.shared.pagination import PageRequest
from plaza.presentation.api.dependencies import (
    CurrentIdentity,
    RepoFactory,
    page_params,
)
from plaza.presentation.api.schemas.comments import (
    CommentCreateRequest,
    CommentResponse,
    CommentUpdateRequest,
)
from plaza.presentation.api.schemas.common import ApiResponse, PageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Comments"])

CommentPage = Annotated[PageRequest, Depends(page_params(DEFAULT_COMMENT_PAGE_SIZE))]


@router.post(
    "/posts/{post_id}/comments",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[CommentResponse],
    summary="Comment on a post",
)
async def create_comment(
    post_id: int,
    request: CommentCreateRequest,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[CommentResponse]:
    service = CommentService.from_factory(factory)
    try:
        view = await service.create_comment(post_id, identity.user_id, request.content)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("comment created", CommentResponse.from_view(view))


@router.get(
    "/posts/{post_id}/comments",
    response_model=ApiResponse[PageResponse[CommentResponse]],
    summary="Root comments of a post",
)
async def list_comments(
    post_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
    page_request: CommentPage,
) -> ApiResponse[PageResponse[CommentResponse]]:
    """Oldest first. Deleted comments stay in place with placeholder text."""
    page = await CommentService.from_factory(factory).list_comments(
        post_id,
        page_request,
        viewer_id=identity.user_id,
    )
    return ApiResponse.ok(
        "ok",
        PageResponse.from_page(page, CommentResponse.from_view),
    )


@router.get(
    "/comments/{comment_id}",
    response_model=ApiResponse[CommentResponse],
    summary="Get a comment",
)
async def get_comment(
    comment_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[CommentResponse]:
    view = await CommentService.from_factory(factory).get_comment(
        comment_id,
        viewer_id=identity.user_id,
    )
    return ApiResponse.ok("ok", CommentResponse.from_view(view))


@router.put(
    "/comments/{comment_id}",
    response_model=ApiResponse[CommentResponse],
    summary="Edit a comment",
    responses={403: {"description": "Not the author"}},
)
async def update_comment(
    comment_id: int,
    request: CommentUpdateRequest,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[CommentResponse]:
    service = CommentService.from_factory(factory)
    try:
        view = await service.update_comment(
            comment_id,
            identity.user_id,
            request.content,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("comment updated", CommentResponse.from_view(view))


@router.delete(
    "/comments/{comment_id}",
    response_model=ApiResponse[None],
    summary="Delete a comment",
    responses={403: {"description": "Not the author"}},
)
async def delete_comment(
    comment_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[None]:
    service = CommentService.from_factory(factory)
    try:
        await service.delete_comment(comment_id, identity.user_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("comment deleted")


@router.post(
    "/comments/{comment_id}/replies",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[CommentResponse],
    summary="Reply to a comment",
    responses={400: {"description": "Target is itself a reply"}},
)
async def create_reply(
    comment_id: int,
    request: CommentCreateRequest,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[CommentResponse]:
    service = CommentService.from_factory(factory)
    try:
        view = await service.create_reply(comment_id, identity.user_id, request.content)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("reply created", CommentResponse.from_view(view))


@router.get(
    "/comments/{comment_id}/replies",
    response_model=ApiResponse[PageResponse[CommentResponse]],
    summary="Replies to a comment",
)
async def list_replies(
    comment_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
    page_request: CommentPage,
) -> ApiResponse[PageResponse[CommentResponse]]:
    page = await CommentService.from_factory(factory).list_replies(
        comment_id,
        page_request,
        viewer_id=identity.user_id,
    )
    return ApiResponse.ok(
        "ok",
        PageResponse.from_page(page, CommentResponse.from_view),
    )
