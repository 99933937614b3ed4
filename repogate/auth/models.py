"""Authentication-related Pydantic models."""

from pydantic import BaseModel, ConfigDict, field_validator


class Session(BaseModel):
    """Per-request view of the state carried in the signed cookies.

    Instances are immutable. Use the ``with_*`` helpers to derive an updated
    session; they copy every field that is not being changed.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str | None = None
    enabled_repo: str | None = None

    @field_validator("access_token", "enabled_repo")
    @classmethod
    def empty_as_none(cls, v: str | None) -> str | None:
        """An empty value is the same as no value."""
        return v or None

    @property
    def is_authenticated(self) -> bool:
        """Check if the session carries a bearer token."""
        return bool(self.access_token)

    def with_access_token(self, access_token: str) -> "Session":
        """Return a copy holding a new access token."""
        return Session(access_token=access_token, enabled_repo=self.enabled_repo)

    def with_enabled_repo(self, full_name: str) -> "Session":
        """Return a copy with ``full_name`` as the single enabled repository."""
        return Session(access_token=self.access_token, enabled_repo=full_name)
