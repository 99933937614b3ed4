"""Authentication module."""

from repogate.auth.cookies import SignedCookieCodec
from repogate.auth.dependencies import NotAuthenticated, get_current_session, get_session
from repogate.auth.models import Session
from repogate.auth.oauth import AuthError, AuthErrorKind, OAuthFlow
from repogate.auth.session import SessionStore

__all__ = [
    "AuthError",
    "AuthErrorKind",
    "NotAuthenticated",
    "OAuthFlow",
    "Session",
    "SessionStore",
    "SignedCookieCodec",
    "get_current_session",
    "get_session",
]
