"""Merge the provider's repository page with the enablement marker from the session."""

from collections.abc import Sequence

from repogate.auth.models import Session
from repogate.config import Settings
from repogate.constants import REPO_PAGE_SIZE
from repogate.models.repository import RepositorySummary, ViewRepo
from repogate.services.github import GitHubClient


async def list_view_repos(
    github: GitHubClient, session: Session, settings: Settings
) -> list[ViewRepo]:
    """Fetch the user's repository page and mark the enabled one."""
    page = await github.list_repositories(
        session.access_token or "",
        page_size=settings.repo_page_size,
        admin_only=settings.repos_admin_only,
    )
    return reconcile(page, session.enabled_repo, settings.repo_page_size)


def reconcile(
    page: Sequence[RepositorySummary],
    enabled_repo: str | None,
    page_size: int = REPO_PAGE_SIZE,
) -> list[ViewRepo]:
    """Build the list shown to the user.

    Every repository of the (capped) page is kept in provider order and marked
    enabled when its full name equals ``enabled_repo``.
    """
    return [
        ViewRepo(full_name=repo.full_name, enabled=repo.full_name == enabled_repo)
        for repo in page[:page_size]
    ]


def set_enabled(session: Session, full_name: str) -> Session:
    """Record ``full_name`` as the only enabled repository (last write wins)."""
    return session.with_enabled_repo(full_name)
