"""Per-client server identity."""

from __future__ import annotations

import secrets

from pylisso._constants import DEFAULT_SERVER_ID, SERVER_ID_SUFFIX_BYTES
from pylisso._record import token_safe_string


def random_hex_suffix(nbytes: int = SERVER_ID_SUFFIX_BYTES) -> str:
    """Uppercase hex of *nbytes* random bytes (two digits per byte)."""
    return secrets.token_hex(nbytes).upper()


def parse_server_id(server_id: str | None) -> str:
    """Combine a caller hint with a random suffix: ``"<id>-<HEX32>"``.

    Blank or missing hints fall back to ``"34"``.
    """
    hint = (server_id or "").strip()
    hint = token_safe_string(hint) if hint else DEFAULT_SERVER_ID
    return f"{hint}-{random_hex_suffix()}"
