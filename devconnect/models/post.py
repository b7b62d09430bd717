"""
DevConnect Backend — Post SQLAlchemy Model
============================================

What:  ORM model representing the `posts` table.
How:   The author's name and avatar are copied onto the row when the post is
       created (a snapshot, not a join), so renaming a user never rewrites
       old posts. Likes and comments are embedded JSON lists, newest first.

Sub-record shapes:
    like:    {"id": str, "user": str}
    comment: {"id": str, "user": str, "text": str, "name": str,
              "avatar": str | None, "date": ISO 8601 str}
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from devconnect.database import Base


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)

    likes: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    comments: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Feed query: ORDER BY date DESC
    __table_args__ = (
        Index("idx_posts_date", date.desc()),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, likes={len(self.likes or [])})>"
