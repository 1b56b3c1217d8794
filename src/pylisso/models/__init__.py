"""Data models for token requests."""

from pylisso.models.requests import AuthTokenRequest, RequestContext

__all__ = [
    "AuthTokenRequest",
    "RequestContext",
]
