"""
DevConnect Backend — Profile Route Handlers
=============================================

What:  /api/profile: profile upsert and lookup, account deletion,
       experience and education entries, GitHub repositories.
How:   Thin handlers: authenticate (where private), let Pydantic validate the
       body, delegate to ProfileService / GithubService.

Route Inventory:
    GET    /api/profile/me                   private  caller's profile
    POST   /api/profile                      private  create or update
    GET    /api/profile                      public   all profiles
    GET    /api/profile/user/{user_id}       public   one profile
    DELETE /api/profile                      private  posts + profile + user
    PUT    /api/profile/experience           private  prepend experience
    DELETE /api/profile/experience/{exp_id}  private
    PUT    /api/profile/education            private  prepend education
    DELETE /api/profile/education/{edu_id}   private
    GET    /api/profile/github/{username}    public   latest GitHub repos
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.database import get_db_session
from devconnect.dependencies.auth import get_current_user_id
from devconnect.dependencies.services import get_github_service
from devconnect.schemas.common import ErrorResponse, MessageResponse
from devconnect.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    GithubRepo,
    ProfileResponse,
    ProfileUpsert,
)
from devconnect.services.github_service import GithubService
from devconnect.services.profile_service import profile_service


router = APIRouter(prefix="/api/profile", tags=["Profile"])

NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}
UNAUTHORIZED = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}
INVALID = {400: {"description": "Validation failed", "model": ErrorResponse}}


@router.get(
    "/me",
    response_model=ProfileResponse,
    responses={**UNAUTHORIZED, **NOT_FOUND},
    summary="Get current user's profile",
)
async def get_my_profile(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.get_current(db, user_id)


@router.post(
    "",
    response_model=ProfileResponse,
    responses={**INVALID, **UNAUTHORIZED},
    summary="Create or update user profile",
)
async def upsert_profile(
    data: ProfileUpsert,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.upsert(db, user_id, data)


@router.get("", response_model=List[ProfileResponse], summary="Get all profiles")
async def list_profiles(db: AsyncSession = Depends(get_db_session)) -> List[ProfileResponse]:
    return await profile_service.list_all(db)


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    responses=NOT_FOUND,
    summary="Get profile by user ID",
)
async def get_profile_by_user(
    user_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    # user_id stays a plain string: a malformed id must produce 404, not 422
    return await profile_service.get_by_user(db, user_id)


@router.delete(
    "",
    response_model=MessageResponse,
    responses=UNAUTHORIZED,
    summary="Delete profile, user and posts",
)
async def delete_account(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await profile_service.delete_account(db, user_id)
    return MessageResponse(msg="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    responses={**INVALID, **UNAUTHORIZED, **NOT_FOUND},
    summary="Add profile experience",
)
async def add_experience(
    entry: ExperienceCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.add_experience(db, user_id, entry)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    responses={**UNAUTHORIZED, **NOT_FOUND},
    summary="Delete experience from profile",
)
async def remove_experience(
    exp_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.remove_experience(db, user_id, exp_id)


@router.put(
    "/education",
    response_model=ProfileResponse,
    responses={**INVALID, **UNAUTHORIZED, **NOT_FOUND},
    summary="Add profile education",
)
async def add_education(
    entry: EducationCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.add_education(db, user_id, entry)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    responses={**UNAUTHORIZED, **NOT_FOUND},
    summary="Delete education from profile",
)
async def remove_education(
    edu_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.remove_education(db, user_id, edu_id)


@router.get(
    "/github/{username}",
    response_model=List[GithubRepo],
    responses={
        **NOT_FOUND,
        503: {"description": "GitHub unavailable", "model": ErrorResponse},
    },
    summary="Get user repos from GitHub",
)
async def get_github_repos(
    username: str = Path(pattern=r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$"),
    github: GithubService = Depends(get_github_service),
) -> List[GithubRepo]:
    return await github.get_repos(username)
