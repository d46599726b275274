"""Likes router for posts and comments."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from plaza.application.services import DEFAULT_LIKER_PAGE_SIZE, LikeService
from plaza.domain.shared.pagination import PageRequest
from plaza.domain.social import CommentTarget, LikeTarget, PostTarget
from plaza.presentation.api.dependencies import (
    CurrentIdentity,
    RepoFactory,
    page_params,
)
from plaza.presentation.api.schemas.common import ApiResponse, PageResponse
from plaza.presentation.api.schemas.likes import LikerResponse, LikeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Likes"])

LikerPage = Annotated[PageRequest, Depends(page_params(DEFAULT_LIKER_PAGE_SIZE))]


async def _like(
    target: LikeTarget,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[LikeResponse]:
    service = LikeService.from_factory(factory)
    try:
        result = await service.like(identity.user_id, target)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("liked", LikeResponse.from_result(result))


async def _unlike(
    target: LikeTarget,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[LikeResponse]:
    service = LikeService.from_factory(factory)
    try:
        result = await service.unlike(identity.user_id, target)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise
    return ApiResponse.ok("like removed", LikeResponse.from_result(result))


async def _likers(
    target: LikeTarget,
    identity: CurrentIdentity,
    factory: RepoFactory,
    page_request: PageRequest,
) -> ApiResponse[PageResponse[LikerResponse]]:
    page = await LikeService.from_factory(factory).list_likers(
        target,
        page_request,
        viewer_id=identity.user_id,
    )
    return ApiResponse.ok("ok", PageResponse.from_page(page, LikerResponse.from_view))


# -----------------------------------------------------------------------------
# Posts
# -----------------------------------------------------------------------------


@router.post(
    "/posts/{post_id}/like",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[LikeResponse],
    summary="Like a post",
    responses={409: {"description": "Already liked"}},
)
async def like_post(
    post_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[LikeResponse]:
    return await _like(PostTarget(post_id), identity, factory)


@router.delete(
    "/posts/{post_id}/like",
    response_model=ApiResponse[LikeResponse],
    summary="Unlike a post",
    responses={404: {"description": "Not liked"}},
)
async def unlike_post(
    post_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[LikeResponse]:
    return await _unlike(PostTarget(post_id), identity, factory)


@router.get(
    "/posts/{post_id}/likes",
    response_model=ApiResponse[PageResponse[LikerResponse]],
    summary="Users who liked a post",
)
async def list_post_likers(
    post_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
    page_request: LikerPage,
) -> ApiResponse[PageResponse[LikerResponse]]:
    return await _likers(PostTarget(post_id), identity, factory, page_request)


# -----------------------------------------------------------------------------
# Comments
# -----------------------------------------------------------------------------


@router.post(
    "/comments/{comment_id}/like",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[LikeResponse],
    summary="Like a comment",
    responses={409: {"description": "Already liked"}},
)
async def like_comment(
    comment_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[LikeResponse]:
    return await _like(CommentTarget(comment_id), identity, factory)


@router.delete(
    "/comments/{comment_id}/like",
    response_model=ApiResponse[LikeResponse],
    summary="Unlike a comment",
    responses={404: {"description": "Not liked"}},
)
async def unlike_comment(
    comment_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
) -> ApiResponse[LikeResponse]:
    return await _unlike(CommentTarget(comment_id), identity, factory)


@router.get(
    "/comments/{comment_id}/likes",
    response_model=ApiResponse[PageResponse[LikerResponse]],
    summary="Users who liked a comment",
)
async def list_comment_likers(
    comment_id: int,
    identity: CurrentIdentity,
    factory: RepoFactory,
    page_request: LikerPage,
) -> ApiResponse[PageResponse[LikerResponse]]:
    return await _likers(CommentTarget(comment_id), identity, factory, page_request)
