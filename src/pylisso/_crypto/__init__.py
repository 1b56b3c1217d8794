"""Cryptographic primitives for SSO token encoding."""

from __future__ import annotations

from pylisso._crypto.aes import aes_cbc_encrypt, parse_key
from pylisso._crypto.codec import encode_token, random_iv, url_safe_b64encode

__all__ = [
    "aes_cbc_encrypt",
    "encode_token",
    "parse_key",
    "random_iv",
    "url_safe_b64encode",
]
