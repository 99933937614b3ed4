"""Helpers for handling secrets safely.

This module provides utilities for:
- Checking the cookie-signing key at startup
- Masking tokens before they reach the logs
"""


def validate_secret_strength(secret: str, min_length: int = 32) -> tuple[bool, list[str]]:
    """Validate the strength of a secret.

    Args:
        secret: Secret to validate
        min_length: Minimum recommended length

    Returns:
        Tuple of (is_valid, list of issues)
    """
    issues = []

    if len(secret) < min_length:
        issues.append(f"Secret should be at least {min_length} characters")

    weak_patterns = [
        "password",
        "secret",
        "12345",
        "qwerty",
        "changeme",
    ]
    secret_lower = secret.lower()
    for pattern in weak_patterns:
        if pattern in secret_lower:
            issues.append(f"Secret contains weak pattern: {pattern}")

    return len(issues) == 0, issues


def mask_token(token: str) -> str:
    """Hide an access token for logging, keeping its last four characters.

    Tokens too short to hide anything are replaced entirely.
    """
    if len(token) <= 8:
        return "****"
    return f"****{token[-4:]}"
