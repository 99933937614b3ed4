"""Server-rendered pages."""

from repogate.web.router import web_router

__all__ = ["web_router"]
