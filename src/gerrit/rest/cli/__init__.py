from __future__ import annotations

import argparse
import logging
import sys
from types import ModuleType

from gerrit.rest import __version__
from gerrit.rest.cli import call, credentials

_SUBCOMMANDS: dict[str, ModuleType] = {module.COMMAND: module for module in (call, credentials)}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gerrit-rest",
        description="Command line access to the Gerrit Code Review REST API",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log authentication and requests")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for module in _SUBCOMMANDS.values():
        module.register_parser(subparsers)
    return parser


def _configure_logging(verbose: bool = False) -> None:
    logger = logging.getLogger("gerrit.rest")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if any(isinstance(h, logging.StreamHandler) and h.stream is sys.stderr for h in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)


def main(args: list[str] | None = None) -> int:
    parser = create_parser()
    parsed = parser.parse_args(args)
    _configure_logging(verbose=parsed.verbose)

    module = _SUBCOMMANDS.get(parsed.command)
    if module is None:
        parser.print_help()
        return 0
    return module.run(parsed)


if __name__ == "__main__":
    sys.exit(main())
