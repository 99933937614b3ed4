"""Repository and session API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from repogate.auth.dependencies import (
    get_app_settings,
    get_current_session,
    get_github_client,
    get_session,
    get_session_store,
)
from repogate.auth.models import Session
from repogate.auth.session import SessionStore
from repogate.config import Settings
from repogate.models.repository import EnablementRequest, SessionState, ViewRepo
from repogate.services.enablement import list_view_repos, set_enabled
from repogate.services.github import GitHubClient

router = APIRouter()


def _state(session: Session) -> SessionState:
    return SessionState(authenticated=session.is_authenticated, enabled_repo=session.enabled_repo)


@router.get("/session")
async def get_session_state(
    session: Annotated[Session, Depends(get_session)],
) -> SessionState:
    """Get the authentication state and enabled repository."""
    return _state(session)


@router.get("/repos")
async def get_repos(
    session: Annotated[Session, Depends(get_current_session)],
    github: Annotated[GitHubClient, Depends(get_github_client)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> list[ViewRepo]:
    """List the first page of repositories with the enabled one marked."""
    return await list_view_repos(github, session, settings)


@router.post("/repos/enablement")
async def enable_repo(
    body: EnablementRequest,
    response: Response,
    session: Annotated[Session, Depends(get_current_session)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> SessionState:
    """Record a repository as the enabled one."""
    updated = set_enabled(session, body.repo)
    store.write(response, updated)
    return _state(updated)
