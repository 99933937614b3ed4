"""Tamper-evident cookie values signed with the server secret."""

import hmac
import logging
from collections.abc import Iterable, Mapping

from itsdangerous import BadData, URLSafeSerializer

from repogate.auth.models import Session
from repogate.constants import ACCESS_TOKEN_COOKIE, COOKIE_SALT, ENABLED_REPO_COOKIE

logger = logging.getLogger(__name__)

# Session field -> cookie name
SESSION_COOKIES = {
    "access_token": ACCESS_TOKEN_COOKIE,
    "enabled_repo": ENABLED_REPO_COOKIE,
}

CookieItems = Mapping[str, str] | Iterable[tuple[str, str]]


class SessionDecodeFailure(Exception):
    """A cookie value was malformed or carried an invalid signature."""

    pass


class SignedCookieCodec:
    """Encode and decode a Session as a set of signed cookie values.

    Values are signed, not encrypted. Each cookie name gets its own salt so a
    value signed for one cookie does not verify under another. Changing the
    secret invalidates every outstanding cookie.
    """

    def __init__(self, secret: str, salt: str = COOKIE_SALT) -> None:
        self._serializers = {
            name: URLSafeSerializer(secret_key=secret, salt=f"{salt}.{name}")
            for name in SESSION_COOKIES.values()
        }

    def sign(self, name: str, value: str) -> str:
        """Sign a single value for the cookie ``name``."""
        return self._serializers[name].dumps(value)

    def unsign(self, name: str, signed: str) -> str:
        """Verify and return the value of the cookie ``name``.

        Raises:
            SessionDecodeFailure: if the signature or payload is invalid.
        """
        serializer = self._serializers.get(name)
        if serializer is None:
            raise SessionDecodeFailure(f"Unknown session cookie: {name}")
        try:
            value = serializer.loads(signed)
        except (BadData, UnicodeError) as e:
            raise SessionDecodeFailure(f"Bad signature for cookie {name}") from e
        if not isinstance(value, str) or not value:
            raise SessionDecodeFailure(f"Unexpected payload for cookie {name}")
        # base64 ignores trailing pad bits, so only the canonical encoding is accepted
        if not hmac.compare_digest(serializer.dumps(value).encode(), signed.encode()):
            raise SessionDecodeFailure(f"Non-canonical value for cookie {name}")
        return value

    def encode(self, session: Session) -> list[tuple[str, str]]:
        """Return one ``(name, signed_value)`` pair per field that is set."""
        pairs = []
        for field, name in SESSION_COOKIES.items():
            value = getattr(session, field)
            if value:
                pairs.append((name, self.sign(name, value)))
        return pairs

    def decode(self, cookies: CookieItems) -> Session:
        """Build a Session from raw cookies. Never raises.

        Missing or unverifiable cookies leave the matching field empty.
        """
        items = cookies.items() if isinstance(cookies, Mapping) else cookies
        raw = {name: value for name, value in items if name in SESSION_COOKIES.values()}

        fields: dict[str, str] = {}
        for field, name in SESSION_COOKIES.items():
            if name not in raw:
                continue
            try:
                fields[field] = self.unsign(name, raw[name])
            except SessionDecodeFailure as e:
                logger.debug(f"Ignoring cookie: {e}")
        return Session(**fields)
