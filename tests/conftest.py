from __future__ import annotations

import base64
import re
import zlib
from collections.abc import Callable

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

TOKEN_RE = re.compile(r"^~2[0-9A-Za-z]{16}~[A-Za-z0-9\-_.]+$")


def _decode_token(token: str, key: bytes) -> str:
    """Inverse of the token encoder; exists only for assertions."""
    assert token.startswith("~2")
    iv = token[2:18]
    assert token[18] == "~"
    body = token[19:].replace("-", "+").replace("_", "/").replace(".", "=")
    ciphertext = base64.b64decode(body)
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv.encode("ascii"))).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(128).unpadder()
    compressed = unpadder.update(padded) + unpadder.finalize()
    return zlib.decompress(compressed).decode("utf-8")


@pytest.fixture
def decode_token() -> Callable[[str, bytes], str]:
    return _decode_token


@pytest.fixture
def token_re() -> re.Pattern[str]:
    return TOKEN_RE
