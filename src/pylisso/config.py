"""Client configuration for pylisso."""

from __future__ import annotations

import dataclasses
import os
from typing import Any


@dataclasses.dataclass(frozen=True)
class LiSsoConfig:
    """Deployment configuration.

    Parameters
    ----------
    client_id : str
        The client or community id to create SSO tokens for.
    client_domain : str
        Domain the token is valid for, used when transporting via
        cookies (e.g. ``".example.com"``).
    sso_key : str or bytes
        128-bit or 256-bit secret key, raw or hex-encoded.
    server_id : str
        Optional hint identifying this server inside the token.
    privacy_guard_key : str, bytes or None
        Optional 128-bit or 256-bit PrivacyGuard key. Never shared with
        the token consumer.
    """

    client_id: str
    client_domain: str
    sso_key: str | bytes = dataclasses.field(repr=False)
    server_id: str = ""
    privacy_guard_key: str | bytes | None = dataclasses.field(default=None, repr=False)

    @classmethod
    def from_env(cls, **overrides: Any) -> LiSsoConfig:
        """Create configuration from environment variables.

        Reads ``LITHIUM_SSO_CLIENT_ID``, ``LITHIUM_SSO_CLIENT_DOMAIN``,
        ``LITHIUM_SSO_KEY`` and the optional ``LITHIUM_SSO_SERVER_ID`` and
        ``LITHIUM_SSO_PG_KEY``. Explicit keyword arguments override
        environment values.

        Missing required values become empty strings so that
        :class:`~pylisso.client.LiSsoClient` reports which one is absent.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "LITHIUM_SSO_CLIENT_ID": "client_id",
            "LITHIUM_SSO_CLIENT_DOMAIN": "client_domain",
            "LITHIUM_SSO_KEY": "sso_key",
            "LITHIUM_SSO_SERVER_ID": "server_id",
            "LITHIUM_SSO_PG_KEY": "privacy_guard_key",
        }
        config_kwargs: dict[str, Any] = {"client_id": "", "client_domain": "", "sso_key": ""}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # An empty PG key in the environment means "not configured"
        if not config_kwargs.get("privacy_guard_key"):
            config_kwargs.pop("privacy_guard_key", None)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
