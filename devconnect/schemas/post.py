"""
DevConnect Backend — Post Schemas
===================================

What:  Request bodies for posts and comments, and the post response shape.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class PostCreate(BaseModel):
    """Body of POST /api/posts."""
    text: str

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text is required")
        return v


class CommentCreate(PostCreate):
    """Body of POST /api/posts/comment/{id}."""


class LikeItem(BaseModel):
    id: str
    user: uuid.UUID


class CommentItem(BaseModel):
    id: str
    user: uuid.UUID
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime


class PostResponse(BaseModel):
    """
    What:  A post with its embedded likes and comments (newest first).
    Note:  `name` and `avatar` are the author's values at creation time.
    """
    id: uuid.UUID
    user: uuid.UUID = Field(validation_alias=AliasChoices("user", "user_id"))
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: List[LikeItem] = Field(default_factory=list)
    comments: List[CommentItem] = Field(default_factory=list)
    date: datetime

    model_config = {"from_attributes": True}
