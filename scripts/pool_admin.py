"""Command-line helper for user pool operations.

This module serves as a CLI wrapper around userpool.core.cognito.
Pool id, client id and client secret come from the environment
(see userpool.config.settings).
"""
from __future__ import annotations
import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from userpool.config import build_pool
from userpool.core.cognito import CognitoUserPool, IdentityProviderError

EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def _parse_attributes(pairs: Optional[List[str]], parser: argparse.ArgumentParser) -> Optional[Dict[str, str]]:
    if pairs is None:
        return None
    attributes = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            parser.error(f"Attribute must be name=value: {pair!r}")
        attributes[name] = value
    return attributes


def _to_json(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, dict):
        return {key: _to_json(item) for key, item in value.items()}
    return value


async def _run(args: argparse.Namespace, pool: CognitoUserPool, parser: argparse.ArgumentParser) -> Any:
    if args.cmd == "sign-up":
        return await pool.sign_up(args.username, args.password,
                                  _parse_attributes(args.attr or [], parser),
                                  _parse_attributes(args.validation, parser))
    if args.cmd == "admin-create":
        return await pool.admin_sign_up(args.username,
                                        _parse_attributes(args.attr or [], parser),
                                        _parse_attributes(args.validation, parser))
    if args.cmd == "find-user":
        user = await pool.find_by_id(args.username)
        if user is None:
            return None
        return {"username": user.username, "status": user.status, "attributes": user.attributes}
    if args.cmd == "password-policy":
        return asdict(await pool.get_password_policy())
    if args.cmd == "client-config":
        return asdict(await pool.get_client_configuration())
    if args.cmd == "confirm-reset":
        return await pool.confirm_forgot_password(args.username, args.code, args.new_password)
    raise ValueError(f"Unknown command: {args.cmd}")


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="User pool helper")
    sub = parser.add_subparsers(dest="cmd")

    su = sub.add_parser("sign-up")
    su.add_argument("--username", required=True)
    su.add_argument("--password", required=True)
    su.add_argument("--attr", action="append", help="User attribute as name=value (repeatable)")
    su.add_argument("--validation", action="append", help="Validation data as name=value (repeatable)")

    ac = sub.add_parser("admin-create")
    ac.add_argument("--username", required=True)
    ac.add_argument("--attr", action="append", help="User attribute as name=value (repeatable)")
    ac.add_argument("--validation", action="append", help="Validation data as name=value (repeatable)")

    fu = sub.add_parser("find-user")
    fu.add_argument("--username", required=True)

    sub.add_parser("password-policy")
    sub.add_parser("client-config")

    cr = sub.add_parser("confirm-reset")
    cr.add_argument("--username", required=True)
    cr.add_argument("--code", required=True)
    cr.add_argument("--new-password", required=True)

    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return 0

    pool = build_pool()
    try:
        result = asyncio.run(_run(args, pool, parser))
    except (IdentityProviderError, ValueError) as exc:
        print(f"[pool] {exc}", file=sys.stderr)
        return EXIT_ERROR
    finally:
        close = getattr(pool.provider, "close", None)
        if close is not None:
            close()

    print(json.dumps(_to_json(result), indent=2, sort_keys=True, default=str))
    if args.cmd == "find-user" and result is None:
        return EXIT_NOT_FOUND
    return 0


if __name__ == "__main__":
    sys.exit(main())
