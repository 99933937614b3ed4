"""Pydantic models."""

from repogate.models.repository import (
    EnablementRequest,
    RepositoryPage,
    RepositorySummary,
    SessionState,
    ViewRepo,
)

__all__ = [
    "EnablementRequest",
    "RepositoryPage",
    "RepositorySummary",
    "SessionState",
    "ViewRepo",
]
