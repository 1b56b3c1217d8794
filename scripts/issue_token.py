#!/usr/bin/env python3
"""Issue a single SSO token and print it as JSON.

Configuration comes from ``LITHIUM_SSO_*`` environment variables; any of
them can be overridden on the command line.

Example::

    LITHIUM_SSO_KEY=d41d8cd98f00b204e9800998ecf8427e \\
        python scripts/issue_token.py --client-id example --client-domain .example.com \\
        --unique-id 167865 --login janmon04 --email jane.monet@mycompany.com \\
        --setting profile.name_first=Jane --setting profile.name_last=Monet
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pylisso import LiSsoClient, LiSsoConfig, LiSsoError  # noqa: E402


def _parse_settings(pairs: list[str]) -> dict[str, str]:
    settings: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise SystemExit(f"--setting expects key=value, got {pair!r}")
        settings[key] = value
    return settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--client-id")
    parser.add_argument("--client-domain")
    parser.add_argument("--key", help="SSO key in hex (default: $LITHIUM_SSO_KEY)")
    parser.add_argument("--server-id")
    parser.add_argument("--pg-key", help="PrivacyGuard key in hex; encrypts the e-mail field")
    parser.add_argument("--user-agent", default="")
    parser.add_argument("--referer", default="")
    parser.add_argument("--remote-addr", default="")
    parser.add_argument("--unique-id", required=True)
    parser.add_argument("--login", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--setting", action="append", default=[], metavar="KEY=VALUE")
    args = parser.parse_args(argv)

    overrides = {
        "client_id": args.client_id,
        "client_domain": args.client_domain,
        "sso_key": args.key,
        "server_id": args.server_id,
        "privacy_guard_key": args.pg_key,
    }
    config = LiSsoConfig.from_env(**{k: v for k, v in overrides.items() if v is not None})

    try:
        client = LiSsoClient.from_config(
            config,
            user_agent=args.user_agent,
            referer=args.referer,
            remote_addr=args.remote_addr,
        )
        email = client.get_privacy_guard_field(args.email) if client.privacy_guard_enabled else args.email
        token = client.issue_token(args.unique_id, args.login, email, _parse_settings(args.setting))
    except LiSsoError as exc:
        print(json.dumps({"error": str(exc)}), file=sys.stderr)
        return 1

    print(json.dumps({"sso_token": token}))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
