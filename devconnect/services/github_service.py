"""
DevConnect Backend — GitHub Repository Service
================================================

What:  Fetches a developer's latest public repositories from the GitHub API.
Why:   Profiles show the five most recent repos next to the GitHub username.
How:   httpx.AsyncClient with a per-request timeout, wrapped in a tenacity
       retry loop for transport errors and 5xx responses.
Who:   Called by GET /api/profile/github/{username}.

Resilience Strategy:
    - Timeout:  settings.github_timeout seconds per attempt
    - Retries:  settings.retry_max_attempts, exponential backoff with jitter
    - Retried:  connection errors, timeouts, 5xx from GitHub
    - Not retried: 404 (no such user) and other 4xx, which won't change
"""

import logging
import time
from typing import List, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from devconnect.config import Settings
from devconnect.exceptions import ExternalServiceError, NotFoundError
from devconnect.schemas.profile import GithubRepo

logger = logging.getLogger(__name__)


class GithubUnavailable(Exception):
    """Transient upstream failure (5xx) that is worth retrying."""


class GithubService:
    """
    Thin async client for the one GitHub endpoint we use.

    A shared httpx client is created lazily and closed on app shutdown, so
    connections to api.github.com are pooled across requests.
    """

    REPO_LIMIT = 5

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        # Tests inject httpx.MockTransport here
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {
                "Accept": "application/vnd.github+json",
                "User-Agent": "devconnect-api",
            }
            if self.settings.github_token:
                headers["Authorization"] = f"Bearer {self.settings.github_token}"
            self._client = httpx.AsyncClient(
                base_url=self.settings.github_api_url,
                headers=headers,
                timeout=self.settings.github_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_repos(self, username: str) -> List[GithubRepo]:
        """
        Latest public repositories of a GitHub user.

        Raises:
            NotFoundError: GitHub has no such user.
            ExternalServiceError: GitHub unreachable or failing after retries.
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception_type((httpx.TransportError, GithubUnavailable)),
            stop=stop_after_attempt(self.settings.retry_max_attempts),
            wait=wait_exponential_jitter(
                initial=self.settings.retry_min_wait,
                max=self.settings.retry_max_wait,
                jitter=1,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._fetch(username)
        except RetryError as e:
            last = e.last_attempt.exception() if e.last_attempt else None
            logger.error("GitHub retries exhausted for %s: %s", username, last)
            raise ExternalServiceError(
                message="GitHub is temporarily unavailable. Please try again later.",
                context={"username": username, "attempts": self.settings.retry_max_attempts},
            )

        if response.status_code == 404:
            raise NotFoundError(
                message="No Github profile found", resource="github", resource_id=username
            )
        if response.status_code != 200:
            logger.warning("GitHub returned %d for %s", response.status_code, username)
            raise ExternalServiceError(
                message="Could not fetch GitHub repositories",
                context={"username": username, "status": response.status_code},
            )

        return [GithubRepo.model_validate(repo) for repo in response.json()]

    async def _fetch(self, username: str) -> httpx.Response:
        start = time.perf_counter()
        response = await self._get_client().get(
            f"/users/{username}/repos",
            params={"per_page": self.REPO_LIMIT, "sort": "created:asc"},
        )
        logger.info(
            "GitHub repos for %s: %d in %.0fms",
            username,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        if response.status_code >= 500:
            raise GithubUnavailable(f"GitHub responded {response.status_code}")
        return response
