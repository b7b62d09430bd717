"""
DevConnect Backend — Post Service
===================================

What:  Posts, likes and comments.
Why:   All ownership checks and embedded-list edits live here, not in routes.
Who:   Called by the /api/posts routes.

Ordering & lookups:
    - Posts are listed newest first.
    - Likes and comments are prepended, so each list is newest first too.
    - A like is located by its user (one like per user per post).
    - A comment is located ONLY by its own id. The author check compares the
      found comment's user with the requester; it never drives which entry
      gets removed.

Concurrency:
    Like/unlike/comment are read-modify-write on a JSON column without
    locking. Two simultaneous writers on one post can lose an update.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.exceptions import (
    AuthorizationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
)
from devconnect.models.post import Post
from devconnect.models.user import User
from devconnect.schemas.post import CommentItem, LikeItem, PostResponse
from devconnect.utils.ids import new_subdocument_id, parse_resource_id

logger = logging.getLogger(__name__)

POST_NOT_FOUND_MESSAGE = "Post not found"


class PostService:
    """Business logic layer for posts and their embedded likes/comments."""

    async def _get_post(self, db: AsyncSession, raw_post_id: str) -> Post:
        post_id = parse_resource_id(raw_post_id, POST_NOT_FOUND_MESSAGE, "post")
        post = await db.get(Post, post_id)
        if post is None:
            raise NotFoundError(
                message=POST_NOT_FOUND_MESSAGE, resource="post", resource_id=str(post_id)
            )
        return post

    async def _get_author(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError(message="User not found", resource="user", resource_id=str(user_id))
        return user

    async def create(self, db: AsyncSession, user_id: uuid.UUID, text: str) -> PostResponse:
        """
        Create a post, snapshotting the author's current name and avatar.
        """
        try:
            author = await self._get_author(db, user_id)
            post = Post(
                user_id=author.id,
                text=text,
                name=author.name,
                avatar=author.avatar,
                likes=[],
                comments=[],
            )
            db.add(post)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating post for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(context={"user_id": str(user_id)})

        logger.info("User %s created post %s", user_id, post.id)
        return PostResponse.model_validate(post)

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        try:
            result = await db.execute(select(Post).order_by(desc(Post.date)))
            posts = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_posts"})
        return [PostResponse.model_validate(p) for p in posts]

    async def get(self, db: AsyncSession, raw_post_id: str) -> PostResponse:
        try:
            post = await self._get_post(db, raw_post_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", raw_post_id, str(e))
            raise DatabaseError(context={"post_id": raw_post_id})
        return PostResponse.model_validate(post)

    async def delete(self, db: AsyncSession, raw_post_id: str, requester_id: uuid.UUID) -> None:
        """
        Delete a post. Existence is checked before ownership, so a stranger
        probing an unknown id gets 404 rather than 401.
        """
        try:
            post = await self._get_post(db, raw_post_id)
            if post.user_id != requester_id:
                raise AuthorizationError(
                    context={"post_id": str(post.id), "requester": str(requester_id)}
                )
            await db.delete(post)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", raw_post_id, str(e))
            raise DatabaseError(context={"post_id": raw_post_id})

        logger.info("User %s deleted post %s", requester_id, raw_post_id)

    # ── Likes ─────────────────────────────────────────────────────────────

    async def like(
        self, db: AsyncSession, raw_post_id: str, requester_id: uuid.UUID
    ) -> List[LikeItem]:
        """Add the requester's like. Liking twice is rejected, not ignored."""
        user_key = str(requester_id)
        try:
            post = await self._get_post(db, raw_post_id)
            likes = post.likes or []
            if any(like.get("user") == user_key for like in likes):
                raise ConflictError(message="Post already liked")
            post.likes = [{"id": new_subdocument_id(), "user": user_key}, *likes]
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error liking post %s: %s", raw_post_id, str(e))
            raise DatabaseError(context={"post_id": raw_post_id})
        return [LikeItem.model_validate(like) for like in post.likes]

    async def unlike(
        self, db: AsyncSession, raw_post_id: str, requester_id: uuid.UUID
    ) -> List[LikeItem]:
        """Remove the requester's like. Unliking a post not liked is rejected."""
        user_key = str(requester_id)
        try:
            post = await self._get_post(db, raw_post_id)
            likes = post.likes or []
            remaining = [like for like in likes if like.get("user") != user_key]
            if len(remaining) == len(likes):
                raise ConflictError(message="Post has not yet been liked")
            post.likes = remaining
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error unliking post %s: %s", raw_post_id, str(e))
            raise DatabaseError(context={"post_id": raw_post_id})
        return [LikeItem.model_validate(like) for like in post.likes]

    # ── Comments ──────────────────────────────────────────────────────────

    async def add_comment(
        self, db: AsyncSession, raw_post_id: str, user_id: uuid.UUID, text: str
    ) -> List[CommentItem]:
        try:
            post = await self._get_post(db, raw_post_id)
            author = await self._get_author(db, user_id)
            comment = {
                "id": new_subdocument_id(),
                "user": str(author.id),
                "text": text,
                "name": author.name,
                "avatar": author.avatar,
                "date": datetime.now(timezone.utc).isoformat(),
            }
            post.comments = [comment, *(post.comments or [])]
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error commenting on post %s: %s", raw_post_id, str(e))
            raise DatabaseError(context={"post_id": raw_post_id})
        return [CommentItem.model_validate(c) for c in post.comments]

    async def remove_comment(
        self,
        db: AsyncSession,
        raw_post_id: str,
        comment_id: str,
        requester_id: uuid.UUID,
    ) -> List[CommentItem]:
        """
        Remove one comment, found by its own id, if the requester wrote it.

        Raises:
            NotFoundError: unknown post, or no comment with that id.
            AuthorizationError: the comment belongs to someone else.
        """
        try:
            post = await self._get_post(db, raw_post_id)
            comments = post.comments or []
            comment = next((c for c in comments if c.get("id") == comment_id), None)
            if comment is None:
                raise NotFoundError(
                    message="Comment does not exist", resource="comment", resource_id=comment_id
                )
            if comment.get("user") != str(requester_id):
                raise AuthorizationError(
                    context={"comment_id": comment_id, "requester": str(requester_id)}
                )
            post.comments = [c for c in comments if c.get("id") != comment_id]
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error removing comment %s: %s", comment_id, str(e))
            raise DatabaseError(context={"post_id": raw_post_id, "comment_id": comment_id})
        return [CommentItem.model_validate(c) for c in post.comments]


post_service = PostService()
