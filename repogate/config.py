"""Application configuration using Pydantic Settings."""

import json
import re
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict, SettingsError

from repogate.constants import DEFAULT_OAUTH_SCOPES, HTTPX_TIMEOUT, REPO_PAGE_SIZE


class ConfigurationError(Exception):
    """Required configuration is missing or invalid. Fatal at startup."""

    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_name: str = "Repogate"
    host: str = "localhost"
    port: int = 3000

    # Cookie signing key
    secret: str

    # GitHub OAuth
    client_id: str
    client_secret: str
    redirect_uri: str | None = None
    oauth_scopes: Annotated[list[str], NoDecode] = list(DEFAULT_OAUTH_SCOPES)

    # Provider API
    http_timeout: float = HTTPX_TIMEOUT
    repo_page_size: int = REPO_PAGE_SIZE
    repos_admin_only: bool = False

    @field_validator("secret", "client_id", "client_secret")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only values."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("redirect_uri")
    @classmethod
    def normalize_redirect_uri(cls, v: str | None) -> str | None:
        """Treat an empty REDIRECT_URI as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("oauth_scopes", mode="before")
    @classmethod
    def split_scopes(cls, v: object) -> object:
        """Accept OAUTH_SCOPES as a JSON list or a comma- or space-separated string."""
        if isinstance(v, str):
            if v.lstrip().startswith("["):
                return json.loads(v)
            return [scope for scope in re.split(r"[,\s]+", v) if scope]
        return v

    @field_validator("oauth_scopes")
    @classmethod
    def validate_scopes(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one scope is required")
        return v

    @field_validator("repo_page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """GitHub caps per_page at 100."""
        if not 1 <= v <= 100:
            raise ValueError("REPO_PAGE_SIZE must be between 1 and 100")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


def load_settings(**overrides) -> Settings:
    """Build settings, turning validation failures into ConfigurationError."""
    try:
        return Settings(**overrides)  # type: ignore[call-arg]
    except ValidationError as e:
        missing = ", ".join(
            ".".join(str(part) for part in err["loc"]).upper() for err in e.errors()
        )
        raise ConfigurationError(f"Invalid or missing configuration: {missing}") from e
    except SettingsError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
