"""Posts router: CRUD plus public, personal and per-user feeds."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from plaza.application.services import DEFAULT_POST_PAGE_SIZE, PostService
from plaza.domain.shared.pagination import PageRequest
from plaza.presentation.api.dependencies import (
    CurrentIdentity,
    RepoFactory,
    page_params,
)
from plaza.presentation.api.schemas.common import ApiResponse, PageResponse
from plaza.presentation.api.schemas.posts import (
    PostCreateRequest,
    PostResponse,
    PostUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts", tags=["Posts"])

PostPage = Annotated[PageRequest, Depends(page_params(DEFAULT_POST_PAGE_SIZE))]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[PostResponse],
    summary="Create a post",
)
async def create_post(
    request: PostCreateRequest,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[PostResponse]:
    service = PostService.from_factory(factory)
    try:
        view = await service.create_post(
            author_id=identity.user_id,
            content=request.content,
            visibility=request.visibility,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("post created", PostResponse.from_view(view))


@router.get(
    "",
    response_model=ApiResponse[PageResponse[PostResponse]],
    summary="Public feed",
)
async def list_posts(
    identity: CurrentIdentity,
    factory: RepoFactory,
    page_request: PostPage,
) -> ApiResponse[PageResponse[PostResponse]]:
    """Public, non-deleted posts, newest first."""
    page = await PostService.from_factory(factory).list_public(
        page_request,
        viewer_id=identity.user_id,
    )
    return ApiResponse.ok("ok", PageResponse.from_page(page, PostResponse.from_view))


@router.get(
    "/me",
    response_model=ApiResponse[PageResponse[PostResponse]],
    summary="Caller's posts",
)
async def list_my_posts(
    identity: CurrentIdentity,
    factory: RepoFactory,
    page_request: PostPage,
) -> ApiResponse[PageResponse[PostResponse]]:
    page = await PostService.from_factory(factory).list_mine(
        identity.user_id,
        page_request,
    )
    return ApiResponse.ok("ok", PageResponse.from_page(page, PostResponse.from_view))


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[PageResponse[PostResponse]],
    summary="A user's posts",
)
async def list_user_posts(
    user_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
    page_request: PostPage,
) -> ApiResponse[PageResponse[PostResponse]]:
    page = await PostService.from_factory(factory).list_by_user(
        user_id,
        page_request,
        viewer_id=identity.user_id,
    )
    return ApiResponse.ok("ok", PageResponse.from_page(page, PostResponse.from_view))


@router.get(
    "/{post_id}",
    response_model=ApiResponse[PostResponse],
    summary="Get a post",
    responses={404: {"description": "Post not found, deleted or hidden"}},
)
async def get_post(
    post_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[PostResponse]:
    """Viewing someone else's post counts as a view."""
    service = PostService.from_factory(factory)
    try:
        view = await service.get_post(post_id, viewer_id=identity.user_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("ok", PostResponse.from_view(view))


@router.put(
    "/{post_id}",
    response_model=ApiResponse[PostResponse],
    summary="Update a post",
    responses={403: {"description": "Not the author"}},
)
async def update_post(
    post_id: int,
    request: PostUpdateRequest,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[PostResponse]:
    service = PostService.from_factory(factory)
    try:
        view = await service.update_post(
            post_id,
            identity.user_id,
            content=request.content,
            visibility=request.visibility,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("post updated", PostResponse.from_view(view))


@router.delete(
    "/{post_id}",
    response_model=ApiResponse[None],
    summary="Delete a post",
    responses={403: {"description": "Not the author"}},
)
async def delete_post(
    post_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[None]:
    service = PostService.from_factory(factory)
    try:
        await service.delete_post(post_id, identity.user_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("post deleted")
