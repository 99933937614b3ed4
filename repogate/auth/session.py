"""Session persistence in signed cookies."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from starlette.responses import Response

from repogate.auth.cookies import SESSION_COOKIES, SignedCookieCodec
from repogate.auth.models import Session

logger = logging.getLogger(__name__)


class SessionStore:
    """Load and save a Session through the request/response cookie jars.

    ``load`` never raises: anything that cannot be verified is treated as
    absent. ``save`` emits every field that is set, so a handler that changed
    only one field still re-emits the other unchanged.
    """

    def __init__(
        self,
        codec: SignedCookieCodec,
        *,
        secure: bool = False,
        max_age: int | None = None,
    ) -> None:
        self.codec = codec
        self.secure = secure
        self.max_age = max_age

    def load(self, cookies: Mapping[str, str] | Iterable[tuple[str, str]]) -> Session:
        """Decode the incoming cookies into a Session."""
        return self.codec.decode(cookies)

    def save(self, session: Session) -> list[dict[str, Any]]:
        """Return ``set_cookie`` keyword arguments for every field that is set."""
        return [self._cookie_kwargs(name, value) for name, value in self.codec.encode(session)]

    def write(self, response: Response, session: Session) -> Response:
        """Attach the session cookies to ``response``."""
        for kwargs in self.save(session):
            response.set_cookie(**kwargs)
        return response

    def clear(self, response: Response) -> Response:
        """Expire every session cookie on ``response``."""
        for name in SESSION_COOKIES.values():
            response.delete_cookie(
                key=name,
                path="/",
                secure=self.secure,
                httponly=True,
                samesite="lax",
            )
        return response

    def _cookie_kwargs(self, name: str, value: str) -> dict[str, Any]:
        return {
            "key": name,
            "value": value,
            "max_age": self.max_age,
            "path": "/",
            "httponly": True,
            "secure": self.secure,
            "samesite": "lax",
        }
