#!/usr/bin/env python3
"""
Issue a bearer token from the command line.

Signs with the same configuration the Auth service reads (``SECRET_KEY``,
``ACCESS_TOKEN_LIFETIME_MINUTES``), so the printed token is accepted by a
running service that shares that configuration.
"""

import argparse
import sys
import os
from datetime import timedelta

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from shared.config import get_config  # noqa: E402
from shared.errors import TokenIssueError  # noqa: E402
from shared.logging import configure_logging  # noqa: E402
from service_auth.app.main import SERVICE_PORT  # noqa: E402
from service_auth.app.tokens import SigningKey, TokenIssuer  # noqa: E402


def positive_int(value: str) -> int:
    minutes = int(value)
    if minutes < 1:
        raise argparse.ArgumentTypeError(f"must be a positive number of minutes, got {value}")
    return minutes


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a signed bearer token")
    parser.add_argument("--subject", required=True, help="Subject (user id) to issue the token to")
    parser.add_argument(
        "--lifetime-minutes",
        type=positive_int,
        default=None,
        help="Override ACCESS_TOKEN_LIFETIME_MINUTES",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = get_config("auth", SERVICE_PORT)
    # Keep stdout for the token itself.
    configure_logging("auth", "warning", stream=sys.stderr)

    signing_key = SigningKey.from_config(config)
    if signing_key.is_fallback:
        print("warning: SECRET_KEY is unset; signing with the insecure fallback key", file=sys.stderr)

    minutes = args.lifetime_minutes if args.lifetime_minutes is not None else config.token_lifetime_minutes
    issuer = TokenIssuer(signing_key, lifetime=timedelta(minutes=minutes))

    try:
        token = issuer.issue(args.subject)
    except TokenIssueError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1

    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
