"""Tests for the GitHub repository listing client."""

import httpx
import pytest

from repogate.models.repository import RepositorySummary
from repogate.services.github import (
    GitHubAuthError,
    GitHubClient,
    GitHubConnectionError,
    GitHubError,
)
from repogate.utils.http_client import create_provider_client
from tests.conftest import VALID_TOKEN, FakeGitHub


def _client(handler) -> GitHubClient:
    return GitHubClient(create_provider_client(transport=httpx.MockTransport(handler)))


class TestListRepositories:
    """Tests for GitHubClient.list_repositories."""

    @pytest.mark.asyncio
    async def test_lists_full_names(self, fake_github: FakeGitHub):
        page = await _client(fake_github.handler).list_repositories(VALID_TOKEN)
        assert page == [
            RepositorySummary(full_name="octocat/Hello-World"),
            RepositorySummary(full_name="octocat/Spoon-Knife"),
        ]

        request = fake_github.requests[0]
        assert request.url.path == "/user/repos"
        assert request.headers["authorization"] == f"Bearer {VALID_TOKEN}"
        assert request.url.params["per_page"] == "5"

    @pytest.mark.asyncio
    async def test_capped_at_page_size(self):
        repos = [{"full_name": f"octocat/repo-{i}"} for i in range(10)]
        client = _client(lambda request: httpx.Response(200, json=repos))
        page = await client.list_repositories(VALID_TOKEN, page_size=3)
        assert [repo.full_name for repo in page] == ["octocat/repo-0", "octocat/repo-1", "octocat/repo-2"]

    @pytest.mark.asyncio
    async def test_admin_only(self, fake_github: FakeGitHub):
        page = await _client(fake_github.handler).list_repositories(VALID_TOKEN, admin_only=True)
        assert page == [RepositorySummary(full_name="octocat/Hello-World")]

    @pytest.mark.asyncio
    async def test_admin_only_filters_before_capping(self, fake_github: FakeGitHub):
        fake_github.repos = [
            {"full_name": f"octocat/fork-{i}", "permissions": {"admin": False}} for i in range(5)
        ]
        fake_github.repos.append({"full_name": "octocat/mine", "permissions": {"admin": True}})

        page = await _client(fake_github.handler).list_repositories(
            VALID_TOKEN, page_size=5, admin_only=True
        )
        assert page == [RepositorySummary(full_name="octocat/mine")]
        assert fake_github.requests[0].url.params["per_page"] == "100"

    @pytest.mark.asyncio
    async def test_skips_entries_without_full_name(self):
        repos = [{"name": "nameless"}, {"full_name": "octocat/Hello-World"}, "junk"]
        client = _client(lambda request: httpx.Response(200, json=repos))
        page = await client.list_repositories(VALID_TOKEN)
        assert page == [RepositorySummary(full_name="octocat/Hello-World")]

    @pytest.mark.asyncio
    async def test_revoked_token(self, fake_github: FakeGitHub):
        fake_github.revoked.add(VALID_TOKEN)
        with pytest.raises(GitHubAuthError):
            await _client(fake_github.handler).list_repositories(VALID_TOKEN)

    @pytest.mark.asyncio
    async def test_server_error(self):
        client = _client(lambda request: httpx.Response(503, text="unavailable"))
        with pytest.raises(GitHubError) as exc_info:
            await client.list_repositories(VALID_TOKEN)
        assert not isinstance(exc_info.value, GitHubAuthError)

    @pytest.mark.asyncio
    async def test_unexpected_body(self):
        client = _client(lambda request: httpx.Response(200, json={"message": "not a list"}))
        with pytest.raises(GitHubError):
            await client.list_repositories(VALID_TOKEN)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out")

        with pytest.raises(GitHubConnectionError):
            await _client(handler).list_repositories(VALID_TOKEN)
