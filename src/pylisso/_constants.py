"""Internal constants shared across the library."""

SEPARATOR = "|"
SEPARATOR_SUBSTITUTE = "-"

RECORD_OPEN = "Li"
RECORD_CLOSE = "iL"
PROTOCOL_VERSION = "LiSSOv1.5"

COOKIE_NAME_PREFIX = "lithiumSSO%3A"
ANONYMOUS_UNIQUE_ID = "$LiAnonPlz$"

# ------------------------------------------------------------------
# Server identity
# ------------------------------------------------------------------

DEFAULT_SERVER_ID = "34"
SERVER_ID_SUFFIX_BYTES = 16  # rendered as 32 uppercase hex digits

# ------------------------------------------------------------------
# Token wire format
# ------------------------------------------------------------------

TOKEN_FORMAT_TAG = "~2"
TOKEN_IV_SEPARATOR = "~"
IV_LENGTH = 16
IV_ALPHABET = "1234567890ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
VALID_KEY_LENGTHS: frozenset[int] = frozenset({16, 32})
