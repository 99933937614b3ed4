"""Repository schemas shared by the GitHub client, reconciliation and views."""

from pydantic import BaseModel, ConfigDict, Field


class RepositorySummary(BaseModel):
    """The part of a GitHub repository needed to list and enable it."""

    model_config = ConfigDict(frozen=True)

    full_name: str  # owner/name, unique on GitHub


class ViewRepo(RepositorySummary):
    """A repository as shown to the user."""

    enabled: bool = False


# A bounded, ordered page as returned by the provider
RepositoryPage = list[RepositorySummary]


class EnablementRequest(BaseModel):
    """Body of an enablement request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    repo: str = Field(min_length=1)


class SessionState(BaseModel):
    """Session as exposed to API clients. Never includes the token."""

    authenticated: bool
    enabled_repo: str | None = None
