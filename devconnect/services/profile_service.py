"""
DevConnect Backend — Profile Service
======================================

What:  Profile upsert/lookup, account deletion, experience & education entries.
Why:   Keeps document manipulation (partial updates, embedded lists) out of
       the route handlers.
Who:   Called by the /api/profile routes.

Upsert semantics:
    - Keyed by the owning user; at most one profile per user.
    - Provided fields overwrite stored ones; omitted fields keep their value.
    - Social links merge key by key in the same way.

Embedded entries:
    Experience and education entries are prepended (most recent first) and
    removed by their own id. Removing an id that is not present is an explicit
    not-found error rather than a silent no-op.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.exceptions import DatabaseError, NotFoundError
from devconnect.models.post import Post
from devconnect.models.profile import Profile
from devconnect.models.user import User
from devconnect.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
)
from devconnect.utils.ids import new_subdocument_id, parse_resource_id

logger = logging.getLogger(__name__)

NO_PROFILE_MESSAGE = "There is no profile for this user"
PROFILE_NOT_FOUND_MESSAGE = "Profile not found"


class ProfileService:
    """
    Business logic layer for profile operations.

    Every public method wraps SQLAlchemy failures in DatabaseError and lets
    the application's own exceptions propagate unchanged.
    """

    async def _find_by_user(self, db: AsyncSession, user_id: uuid.UUID) -> Optional[Profile]:
        result = await db.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()

    async def _require_own_profile(self, db: AsyncSession, user_id: uuid.UUID) -> Profile:
        profile = await self._find_by_user(db, user_id)
        if profile is None:
            raise NotFoundError(
                message=NO_PROFILE_MESSAGE, resource="profile", resource_id=str(user_id)
            )
        return profile

    async def get_current(self, db: AsyncSession, user_id: uuid.UUID) -> ProfileResponse:
        """Profile of the authenticated user (GET /api/profile/me)."""
        try:
            profile = await self._require_own_profile(db, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching profile for %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})
        return ProfileResponse.model_validate(profile)

    async def upsert(
        self, db: AsyncSession, user_id: uuid.UUID, data: ProfileUpsert
    ) -> ProfileResponse:
        """
        Create the user's profile, or update it in place.

        Validation already happened in ProfileUpsert, so by the time we get
        here the write either fully applies or (on a database error) is
        rolled back by the session dependency.
        """
        fields = data.profile_fields()
        social = data.social_fields()

        try:
            profile = await self._find_by_user(db, user_id)

            if profile is not None:
                for name, value in fields.items():
                    setattr(profile, name, value)
                if social:
                    profile.social = {**(profile.social or {}), **social}
                await db.flush()
                logger.info("Updated profile %s for user %s", profile.id, user_id)
                return ProfileResponse.model_validate(profile)

            user = await db.get(User, user_id)
            if user is None:
                raise NotFoundError(
                    message="User not found", resource="user", resource_id=str(user_id)
                )

            profile = Profile(
                user=user,
                social=social,
                experience=[],
                education=[],
                **fields,
            )
            db.add(profile)
            await db.flush()
            logger.info("Created profile %s for user %s", profile.id, user_id)
            return ProfileResponse.model_validate(profile)

        except IntegrityError as e:
            # Concurrent first-time upserts for the same user; the unique
            # constraint on user_id kept the invariant, this request lost.
            logger.warning("Concurrent profile creation for user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Profile was modified concurrently. Please try again.",
                context={"user_id": str(user_id)},
            )
        except SQLAlchemyError as e:
            logger.error("Database error upserting profile for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(context={"user_id": str(user_id)})

    async def list_all(self, db: AsyncSession) -> List[ProfileResponse]:
        """All profiles, newest first, each with the owner's name and avatar."""
        try:
            result = await db.execute(select(Profile).order_by(desc(Profile.date)))
            profiles = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing profiles: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_profiles"})
        return [ProfileResponse.model_validate(p) for p in profiles]

    async def get_by_user(self, db: AsyncSession, raw_user_id: str) -> ProfileResponse:
        """
        Public profile lookup by user id (GET /api/profile/user/{user_id}).

        A malformed id yields the same 404 as an unknown one.
        """
        user_id = parse_resource_id(raw_user_id, PROFILE_NOT_FOUND_MESSAGE, "profile")
        try:
            profile = await self._find_by_user(db, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching profile for %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})

        if profile is None:
            raise NotFoundError(
                message=PROFILE_NOT_FOUND_MESSAGE, resource="profile", resource_id=str(user_id)
            )
        return ProfileResponse.model_validate(profile)

    async def delete_account(self, db: AsyncSession, user_id: uuid.UUID) -> None:
        """
        Remove the user's posts, profile and account.

        Likes and comments the user left on other people's posts are kept;
        they carry their own name/avatar snapshot.
        """
        try:
            posts = await db.execute(delete(Post).where(Post.user_id == user_id))
            await db.execute(delete(Profile).where(Profile.user_id == user_id))
            await db.execute(delete(User).where(User.id == user_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting account %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(context={"user_id": str(user_id)})

        logger.info("Deleted account %s (%d posts removed)", user_id, posts.rowcount or 0)

    # ── Experience ────────────────────────────────────────────────────────

    async def add_experience(
        self, db: AsyncSession, user_id: uuid.UUID, entry: ExperienceCreate
    ) -> ProfileResponse:
        item = {"id": new_subdocument_id(), **entry.model_dump(mode="json", by_alias=True)}
        try:
            profile = await self._require_own_profile(db, user_id)
            profile.experience = [item, *(profile.experience or [])]
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error adding experience for %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})
        return ProfileResponse.model_validate(profile)

    async def remove_experience(
        self, db: AsyncSession, user_id: uuid.UUID, exp_id: str
    ) -> ProfileResponse:
        try:
            profile = await self._require_own_profile(db, user_id)
            remaining = [e for e in (profile.experience or []) if e.get("id") != exp_id]
            if len(remaining) == len(profile.experience or []):
                raise NotFoundError(
                    message="Experience not found", resource="experience", resource_id=exp_id
                )
            profile.experience = remaining
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error removing experience %s: %s", exp_id, str(e))
            raise DatabaseError(context={"exp_id": exp_id})
        return ProfileResponse.model_validate(profile)

    # ── Education ─────────────────────────────────────────────────────────

    async def add_education(
        self, db: AsyncSession, user_id: uuid.UUID, entry: EducationCreate
    ) -> ProfileResponse:
        item = {"id": new_subdocument_id(), **entry.model_dump(mode="json", by_alias=True)}
        try:
            profile = await self._require_own_profile(db, user_id)
            profile.education = [item, *(profile.education or [])]
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error adding education for %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})
        return ProfileResponse.model_validate(profile)

    async def remove_education(
        self, db: AsyncSession, user_id: uuid.UUID, edu_id: str
    ) -> ProfileResponse:
        try:
            profile = await self._require_own_profile(db, user_id)
            remaining = [e for e in (profile.education or []) if e.get("id") != edu_id]
            if len(remaining) == len(profile.education or []):
                raise NotFoundError(
                    message="Education not found", resource="education", resource_id=edu_id
                )
            profile.education = remaining
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error removing education %s: %s", edu_id, str(e))
            raise DatabaseError(context={"edu_id": edu_id})
        return ProfileResponse.model_validate(profile)


profile_service = ProfileService()
