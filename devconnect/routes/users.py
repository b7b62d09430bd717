"""
DevConnect Backend — User Registration Route
==============================================

What:  POST /api/users (public): create an account and return a token.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.database import get_db_session
from devconnect.dependencies.services import get_user_service
from devconnect.schemas.common import ErrorResponse
from devconnect.schemas.user import TokenResponse, UserCreate
from devconnect.services.user_service import UserService


router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post(
    "",
    response_model=TokenResponse,
    responses={400: {"description": "Invalid input or email taken", "model": ErrorResponse}},
    summary="Register a user",
)
async def register_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> TokenResponse:
    return await users.register(db, data)
