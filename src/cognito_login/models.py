"""Data models for projects, accounts and authentication results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DefaultAccount(BaseModel):
    """A pre-configured username/password pair offered for quick selection."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)


class ProjectConfig(BaseModel):
    """Identity-provider coordinates of one project.

    Attributes:
        name: Project name (the prefix shared by the project's env vars).
        region: Raw region value as found in the environment.
        pool_id: Cognito user pool ID.
        client_id: Cognito app client ID.
        default_accounts: Pre-filled accounts, or None if the project has none
            (or they could not be parsed).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    region: str
    pool_id: str
    client_id: str
    default_accounts: tuple[DefaultAccount, ...] | None = None


class AuthConfig(BaseModel):
    """Coordinates for a single authentication attempt."""

    model_config = ConfigDict(frozen=True)

    pool_id: str
    client_id: str
    region: str


class TokenBundle(BaseModel):
    """Tokens returned by a successful authentication.

    Every field falls back to an empty placeholder when the provider omits it.
    """

    id_token: str = ""
    access_token: str = ""
    refresh_token: str = ""
    expires_in: int = 0
    token_type: str = ""


ProjectCatalog = dict[str, ProjectConfig]
