"""Custom exception hierarchy for pylisso."""

from __future__ import annotations

import enum


class ConfigErrorReason(str, enum.Enum):
    """Which configuration precondition was violated."""

    CLIENT_ID_REQUIRED = "ClientIdRequired"
    CLIENT_DOMAIN_REQUIRED = "ClientDomainRequired"
    KEY_REQUIRED = "KeyRequired"
    INVALID_KEY_ENCODING = "InvalidKeyEncoding"
    INVALID_KEY_LENGTH = "InvalidKeyLength"


class LiSsoError(Exception):
    """Base exception for all pylisso errors."""


class LiSsoConfigurationError(LiSsoError):
    """Invalid or missing client configuration (client id, domain, key)."""

    def __init__(self, message: str, *, reason: ConfigErrorReason) -> None:
        self.reason = reason
        super().__init__(message)


class LiSsoValidationError(LiSsoError):
    """A required identity claim was missing from a token request."""

    def __init__(self, message: str, *, field: str, reason: str = "MissingField") -> None:
        self.field = field
        self.reason = reason
        super().__init__(message)


class LiSsoCryptoError(LiSsoError):
    """Compression or encryption failure."""
