"""Dependencies returning the per-application service instances built in create_app()."""

from fastapi import Request

from devconnect.services.github_service import GithubService
from devconnect.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_github_service(request: Request) -> GithubService:
    return request.app.state.github_service
