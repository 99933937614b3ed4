"""JSON API."""

from repogate.api.router import api_router

__all__ = ["api_router"]
