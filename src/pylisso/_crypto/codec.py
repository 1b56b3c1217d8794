"""Token encoding: deflate, AES-CBC, URL-safe base64 and the ``~2`` prefix."""

from __future__ import annotations

import base64
import secrets
import zlib

from pylisso._constants import IV_ALPHABET, IV_LENGTH, TOKEN_FORMAT_TAG, TOKEN_IV_SEPARATOR
from pylisso._crypto.aes import aes_cbc_encrypt
from pylisso.exceptions import LiSsoCryptoError

_URL_SAFE = str.maketrans({"+": "-", "/": "_", "=": "."})


def random_iv(length: int = IV_LENGTH) -> str:
    """Return a URL-safe IV of *length* alphanumeric characters."""
    return "".join(secrets.choice(IV_ALPHABET) for _ in range(length))


def url_safe_b64encode(data: bytes) -> str:
    """Base64 with ``+``, ``/`` and ``=`` mapped to ``-``, ``_`` and ``.``."""
    return base64.b64encode(data).decode("ascii").translate(_URL_SAFE)


def encode_token(payload: str | bytes, key: bytes, *, iv: str | None = None) -> str:
    """Compress, encrypt and format *payload* as a token string.

    Parameters
    ----------
    payload : str or bytes
        Plaintext to encode. Strings are UTF-8 encoded.
    key : bytes
        16- or 32-byte AES key, already validated.
    iv : str or None
        Explicit 16-character IV. A fresh random IV is drawn when omitted.

    Returns
    -------
    str
        ``"~2" + iv + "~" + url_safe_base64(ciphertext)``.

    Raises
    ------
    LiSsoCryptoError
        If compression or encryption fails.
    """
    raw = payload.encode("utf-8") if isinstance(payload, str) else payload
    try:
        compressed = zlib.compress(raw)
    except zlib.error as exc:
        raise LiSsoCryptoError(f"deflate failed: {exc}") from exc

    if iv is None:
        iv = random_iv()
    elif len(iv) != IV_LENGTH:
        raise LiSsoCryptoError(f"IV must be {IV_LENGTH} characters (got {len(iv)})")

    ciphertext = aes_cbc_encrypt(compressed, key, iv.encode("ascii"))
    return f"{TOKEN_FORMAT_TAG}{iv}{TOKEN_IV_SEPARATOR}{url_safe_b64encode(ciphertext)}"
