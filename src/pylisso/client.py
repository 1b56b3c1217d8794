"""SSO token client."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping
from http.cookies import SimpleCookie
from typing import Any

from pydantic import ValidationError

from pylisso._constants import COOKIE_NAME_PREFIX
from pylisso._crypto import encode_token, parse_key
from pylisso._identity import parse_server_id
from pylisso._record import build_record
from pylisso._redact import redact_for_log
from pylisso.config import LiSsoConfig
from pylisso.exceptions import ConfigErrorReason, LiSsoConfigurationError, LiSsoValidationError
from pylisso.models.requests import AuthTokenRequest, RequestContext

_logger = logging.getLogger(__name__)

_CLAIM_FIELDS = ("unique_id", "login", "email")


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


def _validate_request(
    unique_id: Any,
    login: Any,
    email: Any,
    settings: Mapping[str, Any] | None,
) -> AuthTokenRequest:
    try:
        return AuthTokenRequest(
            unique_id=unique_id,
            login=login,
            email=email,
            settings=dict(settings) if settings is not None else None,
        )
    except ValidationError as exc:
        errors = exc.errors()
        loc = errors[0].get("loc", ()) if errors else ()
        field = str(loc[0]) if loc else "request"
        if field in _CLAIM_FIELDS:
            raise LiSsoValidationError(f"Could not create token: {field} required", field=field) from exc
        raise LiSsoValidationError(
            f"Could not create token: invalid {field}",
            field=field,
            reason="InvalidField",
        ) from exc


class LiSsoClient:
    """Issues encrypted SSO tokens for one client deployment.

    Usage::

        client = LiSsoClient("example", ".example.com", sso_hex_key, remote_addr=request_ip)
        token = client.issue_token("1000", "myscreenname", "me@example.com", {"roles.grant": "Moderator"})

    The client is safe to share between threads; the sequence counter is
    the only mutable state and is guarded by a lock.
    """

    def __init__(
        self,
        client_id: str,
        client_domain: str,
        key: str | bytes,
        server_id: str | None = "",
        user_agent: str | None = "",
        referer: str | None = "",
        remote_addr: str | None = "",
    ) -> None:
        if not client_id:
            raise LiSsoConfigurationError(
                "Could not initialize SSO client: client id required",
                reason=ConfigErrorReason.CLIENT_ID_REQUIRED,
            )
        if not client_domain:
            raise LiSsoConfigurationError(
                "Could not initialize SSO client: client domain required",
                reason=ConfigErrorReason.CLIENT_DOMAIN_REQUIRED,
            )

        self._client_id = client_id
        self._client_domain = client_domain
        self._sso_key = parse_key(key, name="SSO key")
        self._pg_key: bytes | None = None
        self._server_id = parse_server_id(server_id)
        self._context = RequestContext(user_agent=user_agent, referer=referer, remote_addr=remote_addr)

        self._sequence_lock = threading.Lock()
        self._sequence = _now_ms()

        _logger.debug(
            "SSO client initialized client_id=%s domain=%s key_bits=%d server_id=%s",
            client_id,
            client_domain,
            len(self._sso_key) * 8,
            self._server_id,
        )

    @classmethod
    def from_config(
        cls,
        config: LiSsoConfig,
        *,
        user_agent: str | None = "",
        referer: str | None = "",
        remote_addr: str | None = "",
    ) -> LiSsoClient:
        """Build a client from *config*, initializing PrivacyGuard when a key is set."""
        client = cls(
            config.client_id,
            config.client_domain,
            config.sso_key,
            server_id=config.server_id,
            user_agent=user_agent,
            referer=referer,
            remote_addr=remote_addr,
        )
        if config.privacy_guard_key:
            client.init_privacy_guard(config.privacy_guard_key)
        return client

    def __repr__(self) -> str:
        return f"LiSsoClient(client_id={self._client_id!r}, client_domain={self._client_domain!r})"

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def client_domain(self) -> str:
        return self._client_domain

    @property
    def server_id(self) -> str:
        """Server identity embedded in every token; fixed for this instance."""
        return self._server_id

    @property
    def context(self) -> RequestContext:
        return self._context

    @property
    def sequence_counter(self) -> int:
        """Sequence value carried by the most recently issued token."""
        with self._sequence_lock:
            return self._sequence

    @property
    def cookie_name(self) -> str:
        return f"{COOKIE_NAME_PREFIX}{self._client_id}"

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def issue_token(
        self,
        unique_id: str,
        login: str,
        email: str,
        settings: Mapping[str, Any] | None = None,
        *,
        user_agent: str | None = None,
        referer: str | None = None,
        remote_addr: str | None = None,
        now_ms: int | None = None,
    ) -> str:
        """Return an encrypted authentication token for the given user.

        Parameters
        ----------
        unique_id : str
            Non-changeable id used to uniquely identify this user globally.
            E-mail addresses work but are not recommended, since this value
            can never change.
        login : str
            Login or screen name. Usually publicly visible, so it should not
            contain personally identifiable information.
        email : str
            E-mail address for this user.
        settings : Mapping or None
            Profile setting → value pairs, e.g. ``roles.grant = Moderator``
            or ``profile.name_first = John``.
        user_agent, referer, remote_addr : str or None
            Per-call overrides of the request context given at construction.
        now_ms : int or None
            Timestamp to embed; defaults to the current time.

        Returns
        -------
        str
            The encrypted token.

        Raises
        ------
        LiSsoValidationError
            If ``unique_id``, ``login`` or ``email`` is empty.
        """
        request = _validate_request(unique_id, login, email, settings)
        context = self._context
        if user_agent is not None or referer is not None or remote_addr is not None:
            context = RequestContext(
                user_agent=context.user_agent if user_agent is None else user_agent,
                referer=context.referer if referer is None else referer,
                remote_addr=context.remote_addr if remote_addr is None else remote_addr,
            )
        return self.issue(request, context, now_ms=now_ms)

    def issue(
        self,
        request: AuthTokenRequest,
        context: RequestContext | None = None,
        *,
        now_ms: int | None = None,
    ) -> str:
        """Return a token for an already validated :class:`AuthTokenRequest`."""
        if context is None:
            context = self._context
        if now_ms is None:
            now_ms = _now_ms()

        sequence = self._next_sequence()
        record = build_record(
            server_id=self._server_id,
            sequence=sequence,
            timestamp_ms=now_ms,
            user_agent=context.user_agent,
            referer=context.referer,
            remote_addr=context.remote_addr,
            client_domain=self._client_domain,
            client_id=self._client_id,
            unique_id=request.unique_id,
            login=request.login,
            email=request.email,
            settings=request.settings,
        )
        _logger.debug(
            "Issuing SSO token seq=%d request=%s",
            sequence,
            redact_for_log(request.model_dump()),
        )
        return encode_token(record, self._sso_key)

    def _next_sequence(self) -> int:
        with self._sequence_lock:
            self._sequence += 1
            return self._sequence

    def build_cookie(self, token: str) -> SimpleCookie:
        """Wrap *token* in the SSO cookie scoped to the client domain."""
        cookie: SimpleCookie = SimpleCookie()
        name = self.cookie_name
        cookie[name] = token
        cookie[name]["domain"] = self._client_domain
        cookie[name]["path"] = "/"
        return cookie

    # ------------------------------------------------------------------
    # PrivacyGuard
    # ------------------------------------------------------------------

    @property
    def privacy_guard_enabled(self) -> bool:
        return self._pg_key is not None

    def init_privacy_guard(self, key: str | bytes) -> None:
        """Set the 128-bit or 256-bit PrivacyGuard key (raw or hex)."""
        self._pg_key = parse_key(key, name="PrivacyGuard key")
        _logger.debug("PrivacyGuard initialized key_bits=%d", len(self._pg_key) * 8)

    def get_privacy_guard_field(self, value: str) -> str:
        """Return the PrivacyGuard-encrypted form of *value*, or ``""`` if no key is set."""
        if self._pg_key is None:
            return ""
        return encode_token(value, self._pg_key)

    # Names used by the reference Lithium clients.
    init_smr = init_privacy_guard
    get_smr_field = get_privacy_guard_field
