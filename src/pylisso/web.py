"""Minimal aiohttp application that hands out SSO tokens as JSON.

The application owns one long-lived :class:`LiSsoClient`, so the sequence
counter keeps increasing across requests. The request context (user
agent, referer, peer address) is taken from each incoming request.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any

from aiohttp import web
from pydantic import ValidationError

from pylisso.client import LiSsoClient
from pylisso.config import LiSsoConfig
from pylisso.exceptions import LiSsoError
from pylisso.models.requests import AuthTokenRequest, RequestContext

_logger = logging.getLogger(__name__)

CLIENT_KEY = web.AppKey("pylisso_client", LiSsoClient)


def _request_context(request: web.Request) -> RequestContext:
    return RequestContext(
        user_agent=request.headers.get("User-Agent", ""),
        referer=request.headers.get("Referer", ""),
        remote_addr=request.remote or "",
    )


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


async def issue_token_handler(request: web.Request) -> web.Response:
    """``POST /token`` → ``{"sso_token": "..."}``."""
    try:
        body: Any = await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError
        return _error(400, "request body must be UTF-8 encoded JSON")
    if not isinstance(body, dict):
        return _error(400, "request body must be a JSON object")

    try:
        token_request = AuthTokenRequest.model_validate(body)
    except ValidationError as exc:
        loc = exc.errors()[0].get("loc", ())
        field = str(loc[0]) if loc else "request"
        return _error(400, f"Could not create token: invalid or missing {field}")

    client = request.app[CLIENT_KEY]
    try:
        token = client.issue(token_request, _request_context(request))
    except LiSsoError as exc:
        _logger.exception("Token issuance failed")
        return _error(500, str(exc))
    except Exception as exc:
        _logger.exception("Unexpected error while issuing token")
        return _error(500, f"internal error: {type(exc).__name__}")

    _logger.info("Issued SSO token for remote=%s", request.remote)
    return web.json_response({"sso_token": token})


async def health_handler(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


def create_app(config: LiSsoConfig) -> web.Application:
    """Build the application; raises :class:`LiSsoConfigurationError` on bad config."""
    app = web.Application()
    app[CLIENT_KEY] = LiSsoClient.from_config(config)
    app.router.add_post("/token", issue_token_handler)
    app.router.add_get("/health", health_handler)
    return app


def main(argv: list[str] | None = None) -> None:
    """Run the token server with configuration taken from ``LITHIUM_SSO_*``."""
    parser = argparse.ArgumentParser(description="Serve SSO tokens over HTTP")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=3000)
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(LiSsoConfig.from_env())
    _logger.info("Server starting on %s:%d", args.host, args.port)
    web.run_app(app, host=args.host, port=args.port, print=None)


if __name__ == "__main__":
    main()
