"""Command line access to a properties file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import config
from .errors import PropertyStoreError
from .store import PropertyStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="propstore", description="Inspect and edit a properties file")
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help=f"Properties file (default: ${config.FILE_ENV})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("show", help="List all entries")

    get_parser = subcommands.add_parser("get", help="Print the value of one entry")
    get_parser.add_argument("key")
    get_parser.add_argument("--default", default=None, help="Printed when the key is missing")

    set_parser = subcommands.add_parser("set", help="Set one entry and save")
    set_parser.add_argument("key")
    set_parser.add_argument("value")
    set_parser.add_argument("--comment", default=None, help="Header comment for the saved file")

    remove_parser = subcommands.add_parser("remove", help="Remove one entry and save")
    remove_parser.add_argument("key")
    remove_parser.add_argument("--comment", default=None, help="Header comment for the saved file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s - %(message)s")

    path = args.file if args.file is not None else config.default_file()
    if path is None:
        parser.error(f"no properties file given; pass --file or set {config.FILE_ENV}")

    store = PropertyStore()
    try:
        if args.command == "set" and not path.exists():
            logger.debug("Creating new properties file %s", path)
        else:
            store.load(path)
        return _run(store, path, args)
    except PropertyStoreError as exc:
        print(f"propstore: {exc}", file=sys.stderr)
        return 1


def _run(store: PropertyStore, path: Path, args: argparse.Namespace) -> int:
    if args.command == "show":
        for key in store.keys():
            print(f"{key}={store.get_raw(key)}")
        return 0

    if args.command == "get":
        value = store.get_raw(args.key, args.default)
        if value is None:
            print(f"propstore: {args.key!r} not found in {path}", file=sys.stderr)
            return 1
        print(value)
        return 0

    if args.command == "set":
        store.string_property(args.key, "").value = args.value
        store.save(args.comment, path)
        return 0

    if not store.remove(args.key):
        print(f"propstore: {args.key!r} not found in {path}", file=sys.stderr)
        return 1
    store.save(args.comment, path)
    return 0


__all__ = ["build_parser", "main"]
