"""Pooled httpx client for GitHub calls.

One client is created per application and shared by the OAuth flow and the
API client. Each call is still a single request with its own timeout; nothing
is cached or retried.
"""

import httpx

from repogate.constants import HTTPX_TIMEOUT, USER_AGENT

# Connection pool limits
_POOL_LIMITS = httpx.Limits(
    max_connections=20,
    max_keepalive_connections=10,
    keepalive_expiry=30,
)


def create_provider_client(
    timeout: float = HTTPX_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the httpx client used for every GitHub request."""
    return httpx.AsyncClient(
        timeout=timeout,
        limits=_POOL_LIMITS,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )
