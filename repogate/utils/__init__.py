"""Utility modules for Repogate."""

from repogate.utils.http_client import create_provider_client
from repogate.utils.logging import setup_logging
from repogate.utils.secrets import mask_token, validate_secret_strength

__all__ = [
    # HTTP
    "create_provider_client",
    # Logging
    "setup_logging",
    # Secrets
    "mask_token",
    "validate_secret_strength",
]
