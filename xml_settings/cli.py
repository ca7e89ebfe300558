"""Command line interface for inspecting and editing XML settings files."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import values
from .errors import SettingsError
from .location import StoreLocation, default_home
from .store import SettingsStore

logger = logging.getLogger(__name__)

TYPE_CHOICES = [t.value for t in values.ValueType]


def _setup_logging(verbose: bool) -> None:
    # Don't clobber an existing logging configuration (e.g. when embedded).
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(asctime)s [%(levelname)s] %(message)s",
            handlers=[logging.StreamHandler(sys.stderr)],
        )


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Read and edit sectioned XML settings files.")
    ap.add_argument("--dir", default=str(default_home()), help="Directory holding the settings file")
    ap.add_argument("--name", default="settings", help="File name without the .xml extension")
    ap.add_argument("--root", default="Settings", help="Expected root element name")
    ap.add_argument("-v", "--verbose", action="store_true")

    sub = ap.add_subparsers(dest="command", required=True)

    p_get = sub.add_parser("get", help="Print a property value")
    p_get.add_argument("section")
    p_get.add_argument("property")
    p_get.add_argument("--type", default="text", choices=TYPE_CHOICES)

    p_set = sub.add_parser("set", help="Set a property value and save")
    p_set.add_argument("section")
    p_set.add_argument("property")
    p_set.add_argument("value")
    p_set.add_argument("--type", default="text", choices=TYPE_CHOICES)

    sub.add_parser("dump", help="Print every property as section.property = value")

    p_rm = sub.add_parser("remove-section", help="Delete a section and save")
    p_rm.add_argument("section")

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    store = SettingsStore(StoreLocation(directory=args.dir, name=args.name), root_name=args.root)
    try:
        store.deserialize()

        if args.command == "get":
            value, found = store.read(args.section, args.property, args.type)
            if not found:
                logger.info("%s.%s not set", args.section, args.property)
                return 1
            print(values.encode(value, args.type))
            return 0

        if args.command == "set":
            store.write(args.section, args.property, values.decode(args.value, args.type), args.type)
            store.serialize()
            return 0

        if args.command == "dump":
            for section in store.section_names():
                for prop, text in store.properties(section).items():
                    print(f"{section}.{prop} = {text}")
            return 0

        if args.command == "remove-section":
            if not store.destroy_section(args.section):
                logger.info("Section %s not found", args.section)
                return 1
            store.serialize()
            return 0
    except SettingsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
