"""Web routes for Jinja2 templates."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from repogate.auth.dependencies import (
    get_app_settings,
    get_current_session,
    get_github_client,
    get_oauth_flow,
    get_session,
    get_session_store,
)
from repogate.auth.models import Session
from repogate.auth.oauth import AuthError, AuthErrorKind, OAuthFlow
from repogate.auth.session import SessionStore
from repogate.config import Settings
from repogate.services.enablement import list_view_repos, set_enabled
from repogate.services.github import GitHubClient
from repogate.web.context import get_base_context

logger = logging.getLogger(__name__)

web_router = APIRouter()
templates = Jinja2Templates(directory=Path(__file__).resolve().parent.parent / "templates")


@web_router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
) -> HTMLResponse:
    """Render home page."""
    logger.debug(f"GET / enabled repo: {session.enabled_repo!r}")
    context = get_base_context(request, session)
    return templates.TemplateResponse(request, "home.html", context)


@web_router.get("/oauth")
async def oauth_start(
    flow: Annotated[OAuthFlow, Depends(get_oauth_flow)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RedirectResponse:
    """Send the user to GitHub to grant access."""
    url = flow.build_authorization_url(settings.oauth_scopes)
    return RedirectResponse(url=url, status_code=302)


@web_router.get("/callback")
async def oauth_callback(
    session: Annotated[Session, Depends(get_session)],
    flow: Annotated[OAuthFlow, Depends(get_oauth_flow)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    code: Annotated[str | None, Query()] = None,
    error: Annotated[str | None, Query()] = None,
) -> RedirectResponse:
    """Handle the OAuth redirect from GitHub.

    Any failure is raised as AuthError, which the application turns into a
    redirect back to the home page.
    """
    if error:
        raise AuthError(AuthErrorKind.INVALID_CODE, f"authorization denied: {error}")

    access_token = await flow.exchange_code_for_token(code or "")

    response = RedirectResponse(url="/repos", status_code=302)
    store.write(response, session.with_access_token(access_token))
    return response


@web_router.get("/repos", response_class=HTMLResponse)
async def repos_page(
    request: Request,
    session: Annotated[Session, Depends(get_current_session)],
    github: Annotated[GitHubClient, Depends(get_github_client)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HTMLResponse:
    """Render the repository page with the enabled repository marked."""
    logger.debug(f"GET /repos enabled repo: {session.enabled_repo!r}")
    repos = await list_view_repos(github, session, settings)

    context = get_base_context(request, session)
    context["repos"] = repos
    return templates.TemplateResponse(request, "repos.html", context)


@web_router.post("/enablement", response_class=HTMLResponse, response_model=None)
async def enablement(
    request: Request,
    session: Annotated[Session, Depends(get_current_session)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    repo: Annotated[str | None, Form()] = None,
) -> HTMLResponse | RedirectResponse:
    """Record the submitted repository as the enabled one."""
    full_name = (repo or "").strip()
    if not full_name:
        return RedirectResponse(url="/repos", status_code=303)

    if session.enabled_repo and session.enabled_repo != full_name:
        logger.info(f"POST /enablement: replacing {session.enabled_repo} with {full_name}")
    else:
        logger.info(f"POST /enablement: enabling {full_name}")

    updated = set_enabled(session, full_name)
    context = get_base_context(request, updated)
    response = templates.TemplateResponse(request, "enabled.html", context)
    store.write(response, updated)
    return response


@web_router.get("/logout")
async def logout(
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> RedirectResponse:
    """Forget the access token and the enabled repository."""
    response = RedirectResponse(url="/", status_code=302)
    store.clear(response)
    return response
