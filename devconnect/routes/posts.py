"""
DevConnect Backend — Post Route Handlers
==========================================

What:  /api/posts: posts, likes and comments. Every route is private.

Ids in paths are plain strings: PostService maps malformed ids to the same
404 as unknown ones.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.database import get_db_session
from devconnect.dependencies.auth import get_current_user_id
from devconnect.schemas.common import ErrorResponse, MessageResponse
from devconnect.schemas.post import (
    CommentCreate,
    CommentItem,
    LikeItem,
    PostCreate,
    PostResponse,
)
from devconnect.services.post_service import post_service


router = APIRouter(
    prefix="/api/posts",
    tags=["Posts"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)

NOT_FOUND = {404: {"description": "Post not found", "model": ErrorResponse}}


@router.post(
    "",
    response_model=PostResponse,
    responses={400: {"description": "Text is required", "model": ErrorResponse}},
    summary="Create a post",
)
async def create_post(
    data: PostCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create(db, user_id, data.text)


@router.get("", response_model=List[PostResponse], summary="Get all posts, newest first")
async def list_posts(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    return await post_service.list_posts(db)


@router.get("/{post_id}", response_model=PostResponse, responses=NOT_FOUND, summary="Get post by ID")
async def get_post(
    post_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.get(db, post_id)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses=NOT_FOUND,
    summary="Delete a post (owner only)",
)
async def delete_post(
    post_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await post_service.delete(db, post_id, user_id)
    return MessageResponse(msg="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=List[LikeItem],
    responses={**NOT_FOUND, 400: {"description": "Post already liked", "model": ErrorResponse}},
    summary="Like a post",
)
async def like_post(
    post_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[LikeItem]:
    return await post_service.like(db, post_id, user_id)


@router.put(
    "/unlike/{post_id}",
    response_model=List[LikeItem],
    responses={**NOT_FOUND, 400: {"description": "Post has not yet been liked", "model": ErrorResponse}},
    summary="Unlike a post",
)
async def unlike_post(
    post_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[LikeItem]:
    return await post_service.unlike(db, post_id, user_id)


@router.post(
    "/comment/{post_id}",
    response_model=List[CommentItem],
    responses={**NOT_FOUND, 400: {"description": "Text is required", "model": ErrorResponse}},
    summary="Comment on a post",
)
async def add_comment(
    post_id: str,
    data: CommentCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[CommentItem]:
    return await post_service.add_comment(db, post_id, user_id, data.text)


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=List[CommentItem],
    responses=NOT_FOUND,
    summary="Delete a comment (author only)",
)
async def remove_comment(
    post_id: str,
    comment_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[CommentItem]:
    return await post_service.remove_comment(db, post_id, comment_id, user_id)
