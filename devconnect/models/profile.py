"""
DevConnect Backend — Profile SQLAlchemy Model
===============================================

What:  ORM model representing the `profiles` table.
Why:   One developer profile per user, with embedded sub-document lists.
How:   Scalar fields are plain columns. `skills`, `social`, `experience` and
       `education` are JSON columns holding ordered lists / dicts of plain
       values, so a profile reads back exactly like a document.

Embedded lists:
    JSON columns are not mutation-tracked. Services always assign a NEW list
    (e.g. `profile.experience = [item, *profile.experience]`) so the ORM sees
    the attribute change and writes it on flush.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devconnect.database import Base
from devconnect.models.user import User


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # unique=True enforces the one-profile-per-user invariant at the database level
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(255), nullable=False)
    githubusername: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    skills: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    social: Mapped[Dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    experience: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    education: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # lazy="joined": every profile response embeds the user's name and avatar
    user: Mapped[User] = relationship(User, lazy="joined")

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, user_id={self.user_id}, status='{self.status}')>"
