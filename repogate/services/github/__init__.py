"""GitHub integration module."""

from repogate.services.github.client import (
    GitHubAuthError,
    GitHubClient,
    GitHubConnectionError,
    GitHubError,
)

__all__ = [
    "GitHubAuthError",
    "GitHubClient",
    "GitHubConnectionError",
    "GitHubError",
]
