"""GitHub REST API client.

Lists the repositories visible to the authenticated user.
Documentation: https://docs.github.com/en/rest/repos/repos#list-repositories-for-the-authenticated-user
"""

import logging
from typing import Any

import httpx

from repogate.constants import GITHUB_API_BASE_URL, GITHUB_MAX_PER_PAGE, REPO_PAGE_SIZE
from repogate.models.repository import RepositoryPage, RepositorySummary

logger = logging.getLogger(__name__)


class GitHubError(Exception):
    """Base exception for GitHub API errors."""

    pass


class GitHubAuthError(GitHubError):
    """The access token was rejected (revoked or expired)."""

    pass


class GitHubConnectionError(GitHubError):
    """Transport failure or timeout."""

    pass


class GitHubClient:
    """Client for the GitHub REST API.

    Usage:
        client = GitHubClient(http_client)
        page = await client.list_repositories(access_token, page_size=5)
    """

    def __init__(self, http_client: httpx.AsyncClient, api_base_url: str = GITHUB_API_BASE_URL):
        self.api_base_url = api_base_url.rstrip("/")
        self._http = http_client

    async def _request(
        self,
        method: str,
        endpoint: str,
        access_token: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated API request.

        Raises:
            GitHubAuthError: On 401 errors
            GitHubConnectionError: On connection errors and timeouts
            GitHubError: On other errors
        """
        url = f"{self.api_base_url}{endpoint}"

        try:
            response = await self._http.request(
                method=method,
                url=url,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                },
                params=params,
            )
        except httpx.TimeoutException as e:
            raise GitHubConnectionError(f"GitHub request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise GitHubConnectionError(f"Cannot reach GitHub: {e}") from e

        if response.status_code == 401:
            raise GitHubAuthError("Access token rejected")

        if response.status_code >= 400:
            raise GitHubError(f"API error {response.status_code}: {response.text[:200]}")

        try:
            return response.json()
        except ValueError as e:
            raise GitHubError("Malformed response from GitHub") from e

    async def list_repositories(
        self,
        access_token: str,
        page_size: int = REPO_PAGE_SIZE,
        admin_only: bool = False,
    ) -> RepositoryPage:
        """List repositories for the authenticated user.

        Only the first page is fetched, in GitHub's default order. With
        ``admin_only`` the largest page GitHub serves is requested so the
        filter runs before the cap.

        Args:
            access_token: OAuth bearer token from the session
            page_size: Maximum number of repositories returned
            admin_only: Drop repositories the user cannot administer

        Returns:
            At most ``page_size`` repository summaries
        """
        data = await self._request(
            "GET",
            "/user/repos",
            access_token,
            params={"per_page": GITHUB_MAX_PER_PAGE if admin_only else page_size},
        )
        if not isinstance(data, list):
            raise GitHubError("Expected a list of repositories")

        page: RepositoryPage = []
        for item in data:
            if not isinstance(item, dict) or not item.get("full_name"):
                continue
            if admin_only and not (item.get("permissions") or {}).get("admin"):
                continue
            page.append(RepositorySummary(full_name=item["full_name"]))

        logger.debug(f"Fetched {len(data)} repositories, kept {min(len(page), page_size)}")
        return page[:page_size]
