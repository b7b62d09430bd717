"""
DevConnect Backend — User SQLAlchemy Model
============================================

What:  ORM model representing the `users` table.
Why:   Identity record referenced by profiles and posts.
Who:   Created by UserService on registration; read by the auth guard's
       callers and by post creation (author snapshot).

Table Design Rationale:
    - UUID primary key: Non-sequential (can't enumerate accounts by id)
    - email: Unique, stored lower-cased so "A@x.io" and "a@x.io" collide
    - password: bcrypt hash only; never returned by any schema
    - avatar: Gravatar URL derived from the email at registration time
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from devconnect.database import Base


class User(Base):
    """
    A registered account.

    Lifecycle:
        1. Created by POST /api/users
        2. Never updated
        3. Deleted together with its profile and posts by DELETE /api/profile
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
