"""
DevConnect Backend — User Service
===================================

What:  Registration, login, and current-user lookup.
Why:   Keeps password hashing, duplicate-email checks and token issuing out
       of the route handlers.
Who:   Called by the /api/users and /api/auth routes.

Error Handling Strategy:
    Business-rule failures raise our own exceptions (ValidationError,
    AuthenticationError, NotFoundError). SQLAlchemy errors are wrapped in
    DatabaseError so no SQL detail reaches the client.
"""

import hashlib
import logging
import uuid
from urllib.parse import urlencode

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.config import Settings
from devconnect.exceptions import (
    AuthenticationError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from devconnect.models.user import User
from devconnect.schemas.user import LoginRequest, TokenResponse, UserCreate, UserResponse
from devconnect.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


def gravatar_url(email: str) -> str:
    """Gravatar for an email: 200px, PG-rated, 'mystery man' fallback."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?" + urlencode({"s": "200", "r": "pg", "d": "mm"})


class UserService:
    """
    Business logic for user accounts.

    Stateless apart from the settings it was built with (token secret,
    bcrypt rounds); the session is passed to every call.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    async def register(self, db: AsyncSession, data: UserCreate) -> TokenResponse:
        """
        Create an account and return a token for it.

        Raises:
            ValidationError: The email is already registered.
        """
        try:
            existing = await db.execute(select(User.id).where(User.email == data.email))
            if existing.scalar_one_or_none() is not None:
                raise ValidationError(message="User already exists", field="email")

            user = User(
                name=data.name,
                email=data.email,
                avatar=gravatar_url(data.email),
                password=hash_password(data.password, rounds=self.settings.bcrypt_rounds),
            )
            db.add(user)
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise ValidationError(message="User already exists", field="email")
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "register"})

        logger.info("Registered user %s", user.id)
        return TokenResponse(token=create_access_token(user.id, self.settings))

    async def login(self, db: AsyncSession, data: LoginRequest) -> TokenResponse:
        """
        Exchange credentials for a token.

        Unknown email and wrong password raise the same error so the response
        does not reveal which accounts exist.
        """
        try:
            result = await db.execute(select(User).where(User.email == data.email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "login"})

        if user is None or not verify_password(data.password, user.password):
            raise AuthenticationError(message="Invalid credentials")

        return TokenResponse(token=create_access_token(user.id, self.settings))

    async def get_current(self, db: AsyncSession, user_id: uuid.UUID) -> UserResponse:
        try:
            user = await db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error loading user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})

        if user is None:
            # Valid token for an account that has since been deleted
            raise NotFoundError(message="User not found", resource="user", resource_id=str(user_id))
        return UserResponse.model_validate(user)
