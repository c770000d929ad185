"""CLI entrypoints for inspecting a JWKS endpoint."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

from jwks_client.client import JwksClient
from jwks_client.config import configure_structlog
from jwks_client.exceptions import ArgumentError, JwksError
from jwks_client.types import SigningKey


def _signing_key_payload(signing_key: SigningKey) -> dict[str, Any]:
    """Serialize a signing key for JSON output."""
    return asdict(signing_key)


def _parse_headers(values: Sequence[str]) -> dict[str, str]:
    """Parse repeated NAME=VALUE header arguments."""
    headers: dict[str, str] = {}
    for value in values:
        name, separator, header_value = value.partition("=")
        if not separator or not name.strip():
            raise ArgumentError(f"Invalid header {value!r}; expected NAME=VALUE.")
        headers[name.strip()] = header_value.strip()
    return headers


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command against the configured endpoint."""
    options: dict[str, Any] = {"strict_ssl": not args.insecure}
    if args.jwks_uri is not None:
        options["jwks_uri"] = args.jwks_uri
    if args.header:
        options["request_headers"] = _parse_headers(args.header)

    async with JwksClient(**options) as client:
        if args.command == "keys":
            signing_keys = await client.list_signing_keys()
            output: Any = [_signing_key_payload(signing_key) for signing_key in signing_keys]
        else:
            output = _signing_key_payload(await client.get_signing_key(args.kid))

    print(json.dumps(output, indent=2))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    """Build command-line parser for supported inspection commands."""
    parser = argparse.ArgumentParser(prog="python -m jwks_client.cli")
    parser.add_argument(
        "--jwks-uri",
        default=None,
        help="JWKS endpoint URL. Falls back to JWKS_JWKS_URI when omitted.",
    )
    parser.add_argument(
        "--header",
        action="append",
        default=[],
        help="Extra request header as NAME=VALUE. May be repeated.",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Disable TLS certificate verification.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Minimum level of structured logs written to stderr.",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("keys", help="List every RSA signing key in the key set.")
    signing_key_parser = subcommands.add_parser(
        "signing-key", help="Resolve one signing key by kid."
    )
    signing_key_parser.add_argument("kid")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI command."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_structlog(log_level=args.log_level, file=sys.stderr)
    try:
        return asyncio.run(_run(args))
    except JwksError as exc:
        print(json.dumps({"code": exc.code, "detail": exc.detail}))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
