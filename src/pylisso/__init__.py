"""pylisso - Lithium single-sign-on token client."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pylisso")
except PackageNotFoundError:
    __version__ = "0+local"
from pylisso._constants import ANONYMOUS_UNIQUE_ID, PROTOCOL_VERSION
from pylisso.client import LiSsoClient
from pylisso.config import LiSsoConfig
from pylisso.exceptions import (
    ConfigErrorReason,
    LiSsoConfigurationError,
    LiSsoCryptoError,
    LiSsoError,
    LiSsoValidationError,
)
from pylisso.models import AuthTokenRequest, RequestContext

__all__ = [
    "__version__",
    "ANONYMOUS_UNIQUE_ID",
    "AuthTokenRequest",
    "ConfigErrorReason",
    "LiSsoClient",
    "LiSsoConfig",
    "LiSsoConfigurationError",
    "LiSsoCryptoError",
    "LiSsoError",
    "LiSsoValidationError",
    "PROTOCOL_VERSION",
    "RequestContext",
]
