"""Main FastAPI application.

Run with ``repogate`` or ``uvicorn --factory repogate.main:create_app``.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from repogate import __version__
from repogate.api import api_router
from repogate.auth.cookies import SignedCookieCodec
from repogate.auth.dependencies import NotAuthenticated
from repogate.auth.oauth import AuthError, OAuthFlow
from repogate.auth.session import SessionStore
from repogate.config import ConfigurationError, Settings, get_settings
from repogate.constants import SESSION_TIMEOUT_DAYS
from repogate.services.github import GitHubAuthError, GitHubClient, GitHubError
from repogate.utils.http_client import create_provider_client
from repogate.utils.logging import setup_logging
from repogate.utils.secrets import validate_secret_strength
from repogate.web import web_router

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    def __init__(self, app, is_production: bool = False) -> None:
        super().__init__(app)
        self.is_production = is_production

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "img-src 'self' https: data:; "
            "frame-ancestors 'none';"
        )
        # HSTS (only in production)
        if self.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=302)


async def not_authenticated_handler(request: Request, exc: Exception) -> RedirectResponse:
    """Redirect to the entry point when a protected route has no session."""
    logger.debug(f"{request.url.path}: not authenticated, redirecting home")
    return _redirect_home()


async def auth_error_handler(request: Request, exc: Exception) -> RedirectResponse:
    """Send the user back to the start of the OAuth flow."""
    logger.warning(f"OAuth callback failed: {exc}")
    return _redirect_home()


async def github_auth_error_handler(request: Request, exc: Exception) -> RedirectResponse:
    """The token no longer works: drop the session and start over."""
    logger.info(f"{request.url.path}: access token rejected by GitHub, clearing session")
    response = _redirect_home()
    request.app.state.session_store.clear(response)
    return response


async def github_error_handler(request: Request, exc: Exception) -> RedirectResponse:
    logger.error(f"{request.url.path}: GitHub request failed: {exc}")
    return _redirect_home()


def create_app(
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the application.

    Settings are loaded once here and shared read-only by every request.

    Raises:
        ConfigurationError: if required settings are missing.
    """
    if settings is None:
        settings = get_settings()
    setup_logging(settings)

    strong, issues = validate_secret_strength(settings.secret)
    if not strong:
        logger.warning(f"Weak SECRET: {'; '.join(issues)}")

    if http_client is None:
        http_client = create_provider_client(timeout=settings.http_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        logger.info(f"{settings.app_name} started ({settings.app_env})")
        yield
        await http_client.aclose()
        logger.info("HTTP client closed")

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.session_store = SessionStore(
        SignedCookieCodec(settings.secret),
        secure=settings.is_production,
        max_age=60 * 60 * 24 * SESSION_TIMEOUT_DAYS,
    )
    app.state.oauth_flow = OAuthFlow.from_settings(settings, http_client)
    app.state.github_client = GitHubClient(http_client)
    app.state.started_at = datetime.now(UTC)

    app.add_middleware(SecurityHeadersMiddleware, is_production=settings.is_production)

    app.add_exception_handler(NotAuthenticated, not_authenticated_handler)
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(GitHubAuthError, github_auth_error_handler)
    app.add_exception_handler(GitHubError, github_error_handler)

    app.include_router(api_router)
    app.include_router(web_router)

    @app.get("/health", include_in_schema=True, tags=["monitoring"])
    async def health_check() -> JSONResponse:
        """Health check endpoint for monitoring and load balancers."""
        return JSONResponse(
            content={
                "status": "healthy",
                "timestamp": datetime.now(UTC).isoformat(),
                "uptime_seconds": (datetime.now(UTC) - app.state.started_at).total_seconds(),
                "version": __version__,
            }
        )

    return app


def run() -> None:
    """Start the server with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except ConfigurationError as e:
        raise SystemExit(f"Refusing to start: {e}") from e

    uvicorn.run(
        "repogate.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )
