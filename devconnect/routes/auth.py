"""
DevConnect Backend — Authentication Routes
============================================

What:  POST /api/auth (public) exchanges credentials for a token;
       GET /api/auth (private) returns the caller's identity record.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.database import get_db_session
from devconnect.dependencies.auth import get_current_user_id
from devconnect.dependencies.services import get_user_service
from devconnect.schemas.common import ErrorResponse
from devconnect.schemas.user import LoginRequest, TokenResponse, UserResponse
from devconnect.services.user_service import UserService


router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.get(
    "",
    response_model=UserResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Get the authenticated user",
)
async def get_authenticated_user(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    return await users.get_current(db, user_id)


@router.post(
    "",
    response_model=TokenResponse,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Authenticate user and get token",
)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> TokenResponse:
    return await users.login(db, data)
