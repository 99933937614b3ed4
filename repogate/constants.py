"""Application constants - centralized configuration values."""

# =============================================================================
# Pagination
# =============================================================================
REPO_PAGE_SIZE = 5  # TODO: follow GitHub's Link header once a page cursor is carried
GITHUB_MAX_PER_PAGE = 100

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
HTTPX_TIMEOUT = 10.0

# =============================================================================
# Session & Security
# =============================================================================
SESSION_TIMEOUT_DAYS = 30
ACCESS_TOKEN_COOKIE = "access_token"
ENABLED_REPO_COOKIE = "datastore"
COOKIE_SALT = "repogate-cookie-v1"

# =============================================================================
# OAuth
# =============================================================================
DEFAULT_OAUTH_SCOPES = ("write:repo_hook", "public_repo")

# =============================================================================
# External API URLs
# =============================================================================
GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_API_BASE_URL = "https://api.github.com"
USER_AGENT = "repogate/0.1.0"
