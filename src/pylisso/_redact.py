"""Masking of secrets and identity claims before DEBUG logging.

Key material, issued tokens and the user's identity claims never reach the
log. Profile settings keep their names (``roles.grant`` is useful when
debugging) but their values are hidden, since fields such as
``profile.name_first`` carry personal data.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"

_SECRET_FIELDS: frozenset[str] = frozenset(
    {
        "key",
        "sso_key",
        "privacy_guard_key",
        "pg_key",
        "token",
        "sso_token",
        "cookie",
        "unique_id",
        "login",
        "email",
    }
)

# Mappings whose keys are safe to show but whose values are not.
_VALUE_MASKED_FIELDS: frozenset[str] = frozenset({"settings"})

_MAX_DEPTH = 8


def _scrub(value: Any, max_string: int, depth: int) -> Any:
    if depth > _MAX_DEPTH:
        return "<max-depth>"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, Mapping):
        scrubbed: dict[str, Any] = {}
        for raw_name, item in value.items():
            name = str(raw_name)
            lowered = name.lower()
            if lowered in _SECRET_FIELDS:
                scrubbed[name] = REDACTED
            elif lowered in _VALUE_MASKED_FIELDS and isinstance(item, Mapping):
                scrubbed[name] = dict.fromkeys((str(k) for k in item), REDACTED)
            else:
                scrubbed[name] = _scrub(item, max_string, depth + 1)
        return scrubbed
    if isinstance(value, (list, tuple)):
        return [_scrub(item, max_string, depth + 1) for item in value]
    return f"<{type(value).__name__}>"


def redact_for_log(value: Any, *, max_string: int = 256) -> Any:
    """Return a copy of *value* that is safe to pass to ``_logger.debug``."""
    return _scrub(value, max_string, 0)
