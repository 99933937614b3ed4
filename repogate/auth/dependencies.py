"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, Request

from repogate.auth.models import Session
from repogate.auth.oauth import OAuthFlow
from repogate.auth.session import SessionStore
from repogate.config import Settings
from repogate.services.github import GitHubClient


class NotAuthenticated(Exception):
    """A protected route was reached without an access token."""

    pass


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_oauth_flow(request: Request) -> OAuthFlow:
    return request.app.state.oauth_flow


def get_github_client(request: Request) -> GitHubClient:
    return request.app.state.github_client


def get_session(
    request: Request,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> Session:
    """Get the session decoded from the request cookies (possibly empty)."""
    return store.load(request.cookies)


def get_current_session(
    session: Annotated[Session, Depends(get_session)],
) -> Session:
    """Get the session, raising NotAuthenticated if there is no access token."""
    if not session.is_authenticated:
        raise NotAuthenticated()
    return session
