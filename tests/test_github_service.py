"""
DevConnect Backend — GitHub Service Tests
===========================================

What we test:
    ✅ Transient 5xx is retried and then succeeds
    ✅ 404 → NotFoundError, without retrying
    ✅ Persistent 5xx → ExternalServiceError after the retry budget
"""

import httpx
import pytest

from devconnect.config import Settings
from devconnect.exceptions import ExternalServiceError, NotFoundError
from devconnect.services.github_service import GithubService

REPOS = [
    {"id": 1, "name": "hello-world", "html_url": "https://github.com/octocat/hello-world", "stargazers_count": 7},
    {"id": 2, "name": "spoon-knife", "html_url": "https://github.com/octocat/spoon-knife", "forks_count": 3},
]


@pytest.fixture
def settings():
    return Settings(retry_max_attempts=3, retry_min_wait=0, retry_max_wait=1)


def _service(settings, statuses):
    """GithubService whose transport answers with `statuses` in order."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        status = statuses[min(len(calls), len(statuses)) - 1]
        if status == 200:
            return httpx.Response(200, json=REPOS)
        return httpx.Response(status, json={"message": "error"})

    return GithubService(settings, transport=httpx.MockTransport(handler)), calls


class TestGetRepos:

    @pytest.mark.asyncio
    async def test_success(self, settings):
        service, calls = _service(settings, [200])
        repos = await service.get_repos("octocat")
        await service.close()

        assert [r.name for r in repos] == ["hello-world", "spoon-knife"]
        assert repos[1].forks_count == 3
        assert calls[0].url.path == "/users/octocat/repos"
        assert calls[0].url.params["per_page"] == "5"

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self, settings):
        service, calls = _service(settings, [502, 200])
        repos = await service.get_repos("octocat")
        await service.close()

        assert len(repos) == 2
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_unknown_user(self, settings):
        service, calls = _service(settings, [404])
        with pytest.raises(NotFoundError, match="No Github profile found"):
            await service.get_repos("ghost")
        await service.close()
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_persistent_failure(self, settings):
        service, calls = _service(settings, [500])
        with pytest.raises(ExternalServiceError):
            await service.get_repos("octocat")
        await service.close()
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self, settings):
        service, calls = _service(settings, [403])
        with pytest.raises(ExternalServiceError):
            await service.get_repos("octocat")
        await service.close()
        assert len(calls) == 1
