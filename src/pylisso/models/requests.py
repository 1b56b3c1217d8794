"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used by :class:`pylisso.client.LiSsoClient` and the HTTP glue.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthTokenRequest(BaseModel):
    """Identity claims for one token.

    Parameters
    ----------
    unique_id : str
        Non-changeable id that uniquely identifies the user globally.
    login : str
        Login or screen name; usually publicly visible.
    email : str
        E-mail address, or a PrivacyGuard-encrypted value of it.
    settings : dict
        Profile setting → value pairs (e.g. ``roles.grant``,
        ``profile.name_first``). Insertion order is kept.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )

    unique_id: str
    login: str
    email: str
    settings: dict[str, Any] = Field(default_factory=dict)

    @field_validator("unique_id", "login", "email")
    @classmethod
    def _claim_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("value required")
        return value

    @field_validator("settings", mode="before")
    @classmethod
    def _settings_default(cls, value: Any) -> Any:
        return {} if value is None else value


class RequestContext(BaseModel):
    """Security identification fields taken from the end user's HTTP request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_agent: str = ""
    referer: str = ""
    remote_addr: str = ""

    @field_validator("user_agent", "referer", "remote_addr", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value
