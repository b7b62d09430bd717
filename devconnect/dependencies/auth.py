"""
DevConnect Backend — Auth Guard Dependency
============================================

What:  FastAPI dependency that authenticates the caller from a bearer token.
How:   Reads `Authorization: Bearer <token>` (or the legacy `x-auth-token`
       header the original web client sends), verifies it with the app's
       settings, and returns the user id embedded in the token.
Who:   Declared by every private route: `user_id = Depends(get_current_user_id)`.
"""

import logging
import uuid
from typing import Optional

from fastapi import Header, Request

from devconnect.exceptions import AuthenticationError
from devconnect.security import decode_access_token

logger = logging.getLogger(__name__)


def _extract_token(authorization: Optional[str], x_auth_token: Optional[str]) -> Optional[str]:
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError(message="Token is not valid", context={"reason": "scheme"})
        return token.strip()
    if x_auth_token:
        return x_auth_token.strip()
    return None


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    x_auth_token: Optional[str] = Header(default=None),
) -> uuid.UUID:
    token = _extract_token(authorization, x_auth_token)
    if not token:
        raise AuthenticationError(message="No token, authorization denied")

    user_id = decode_access_token(token, request.app.state.settings)
    logger.debug("Authenticated user %s", user_id)
    return user_id
