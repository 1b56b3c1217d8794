"""Canonical record assembly.

The record is the plaintext that gets compressed and encrypted into a
token::

    Li|<version>|<server_id>|<seq>|<ts_ms>|<ua>|<referer>|<addr>|<domain>|<client_id>|<unique_id>|<login>|<email>|<settings>iL
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pylisso._constants import (
    PROTOCOL_VERSION,
    RECORD_CLOSE,
    RECORD_OPEN,
    SEPARATOR,
    SEPARATOR_SUBSTITUTE,
)


def token_safe_string(value: str | None) -> str:
    """Return *value* with every separator replaced, so it can sit inside a record."""
    if not value:
        return ""
    return value.replace(SEPARATOR, SEPARATOR_SUBSTITUTE)


def serialize_settings(settings: Mapping[str, Any] | None) -> str:
    """Flatten profile settings into ``key=value|key=value``.

    Keys and values are not escaped; the consumer expects them verbatim.
    """
    if not settings:
        return ""
    return SEPARATOR.join(f"{key}={value}" for key, value in settings.items())


def build_record(
    *,
    server_id: str,
    sequence: int,
    timestamp_ms: int,
    user_agent: str | None,
    referer: str | None,
    remote_addr: str | None,
    client_domain: str,
    client_id: str,
    unique_id: str,
    login: str,
    email: str,
    settings: Mapping[str, Any] | None,
) -> str:
    """Assemble the canonical record for one token."""
    fields = [
        RECORD_OPEN,
        PROTOCOL_VERSION,
        server_id,
        str(int(sequence)),
        str(int(timestamp_ms)),
        token_safe_string(user_agent),
        token_safe_string(referer),
        token_safe_string(remote_addr),
        client_domain,
        client_id,
        token_safe_string(unique_id),
        token_safe_string(login),
        token_safe_string(email),
        serialize_settings(settings),
    ]
    return SEPARATOR.join(fields) + RECORD_CLOSE
