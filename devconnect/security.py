"""
DevConnect Backend — Password Hashing & Bearer Tokens
=======================================================

What:  bcrypt password hashing and HS256 JWT issue/verify helpers.
Why:   Authentication is stateless: the signed token is the only session
       state, so signing and verification live in one small module that
       both the user service (issue) and the auth guard (verify) share.

Token payload:
    {"user": {"id": "<uuid>"}, "iat": <issued>, "exp": <expiry>}
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from devconnect.config import Settings
from devconnect.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Stored password hash has an unexpected format")
        return False


def create_access_token(user_id: uuid.UUID, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "user": {"id": str(user_id)},
        "iat": now,
        "exp": now + timedelta(seconds=settings.jwt_expires_seconds),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> uuid.UUID:
    """
    Verify a bearer token and return the user id it carries.

    Raises:
        AuthenticationError: bad signature, expired, malformed, or a payload
            without a valid user id. The client always sees the same message.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return uuid.UUID(str(payload["user"]["id"]))
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(message="Token is not valid", context={"reason": "expired"})
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(
            message="Token is not valid",
            context={"reason": type(e).__name__},
        )
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError(message="Token is not valid", context={"reason": "payload"})
