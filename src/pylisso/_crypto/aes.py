"""AES-CBC encryption and key parsing for SSO tokens.

The key length selects the cipher: 16 bytes for AES-128, 32 bytes for
AES-256.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from pylisso._constants import VALID_KEY_LENGTHS
from pylisso.exceptions import ConfigErrorReason, LiSsoConfigurationError, LiSsoCryptoError


def _parse_hex_bytes(value: str, *, name: str) -> bytes:
    text = value.strip()
    if text.startswith("0x") or text.startswith("0X"):
        text = text[2:]
    if len(text) % 2 != 0:
        raise LiSsoConfigurationError(
            f"{name} hex length must be even (got {len(text)})",
            reason=ConfigErrorReason.INVALID_KEY_ENCODING,
        )
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise LiSsoConfigurationError(
            f"{name} must be hex-encoded",
            reason=ConfigErrorReason.INVALID_KEY_ENCODING,
        ) from exc


def parse_key(key: str | bytes | bytearray | memoryview | None, *, name: str = "SSO key") -> bytes:
    """Normalise a caller-supplied key to raw bytes.

    Parameters
    ----------
    key : str, bytes, bytearray, memoryview or None
        Raw key bytes, or the key represented in hexadecimal.
    name : str
        Label used in error messages.

    Returns
    -------
    bytes
        16 or 32 key bytes.

    Raises
    ------
    LiSsoConfigurationError
        If the key is missing, not bytes or valid hex, or of the wrong length.
    """
    if not key or (isinstance(key, str) and not key.strip()):
        raise LiSsoConfigurationError(f"{name} required", reason=ConfigErrorReason.KEY_REQUIRED)

    if isinstance(key, str):
        data = _parse_hex_bytes(key, name=name)
    elif isinstance(key, (bytes, bytearray, memoryview)):
        data = bytes(key)
    else:
        raise LiSsoConfigurationError(
            f"{name} must be bytes or a hex string (got {type(key).__name__})",
            reason=ConfigErrorReason.INVALID_KEY_ENCODING,
        )

    if len(data) not in VALID_KEY_LENGTHS:
        raise LiSsoConfigurationError(
            f"{name} must be 128-bit or 256-bit in length (got {len(data) * 8}-bit)",
            reason=ConfigErrorReason.INVALID_KEY_LENGTH,
        )
    return data


def aes_cbc_encrypt(data: bytes, key: bytes, iv: bytes) -> bytes:
    """AES-CBC encrypt *data* with PKCS#7 padding.

    Raises
    ------
    LiSsoCryptoError
        If encryption fails.
    """
    try:
        padder = padding.PKCS7(128).padder()
        padded = padder.update(data) + padder.finalize()
        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        return encryptor.update(padded) + encryptor.finalize()
    except Exception as exc:
        raise LiSsoCryptoError(f"AES-{len(key) * 8}-CBC encryption failed: {exc}") from exc
