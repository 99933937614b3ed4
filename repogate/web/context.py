"""Template context helpers."""

from typing import Any

from fastapi import Request

from repogate.auth.models import Session


def get_base_context(request: Request, session: Session) -> dict[str, Any]:
    """Get base context for all templates."""
    path = request.url.path
    if path == "/":
        current_page = "home"
    elif path.startswith("/repos"):
        current_page = "repos"
    else:
        current_page = None

    return {
        "request": request,
        "authenticated": session.is_authenticated,
        "enabled_repo": session.enabled_repo,
        "app_name": request.app.state.settings.app_name,
        "current_page": current_page,
    }
