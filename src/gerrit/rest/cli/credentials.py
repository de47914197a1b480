from __future__ import annotations

import argparse
import json
import sys

from gerrit.rest.credentials_parser import KEYRING_SCHEME, parse_credentials
from gerrit.rest.internal.credentials_store import (
    DEFAULT_PROFILE,
    clear_credentials,
    load_credentials,
    save_credentials,
)

COMMAND = "credentials"


def register_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    profile = argparse.ArgumentParser(add_help=False)
    profile.add_argument(
        "--env",
        dest="profile",
        default=DEFAULT_PROFILE,
        metavar="ENV",
        help=f"Keyring profile (default: {DEFAULT_PROFILE}). "
        f"Refer to it as '{KEYRING_SCHEME}ENV' in environments.json.",
    )

    parser = subparsers.add_parser(COMMAND, help="Manage Gerrit credentials stored in the system keyring")
    actions = parser.add_subparsers(dest="credentials_action")

    put = actions.add_parser(
        "put",
        parents=[profile],
        help='Store credentials from a JSON file {"username": ..., "password": ...}',
    )
    put.add_argument("file", metavar="FILE", help="Path to credentials JSON file")
    actions.add_parser("get", parents=[profile], help="Show the stored username, password masked")
    actions.add_parser("clear", parents=[profile], help="Remove stored credentials")
    return parser


def _put(parsed: argparse.Namespace) -> int:
    creds = parse_credentials(parsed.file)
    save_credentials(creds, parsed.profile)
    print(f"Stored credentials of {creds.name!r} in keyring profile {parsed.profile!r}")
    return 0


def _get(parsed: argparse.Namespace) -> int:
    creds = load_credentials(parsed.profile)
    if creds is None:
        print(f"Error: no credentials stored in keyring profile {parsed.profile!r}", file=sys.stderr)
        return 1
    print(json.dumps({"username": creds.name, "password": "********"}, indent=2))
    return 0


def _clear(parsed: argparse.Namespace) -> int:
    clear_credentials(parsed.profile)
    print(f"Cleared keyring profile {parsed.profile!r}")
    return 0


_ACTIONS = {"put": _put, "get": _get, "clear": _clear}


def run(parsed: argparse.Namespace) -> int:
    action = _ACTIONS.get(parsed.credentials_action)
    if action is None:
        return 0
    try:
        return action(parsed)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
