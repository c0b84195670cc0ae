#!/usr/bin/env -S uv run
# /// script
# requires-python = ">=3.11"
# dependencies = [
#     "pydantic>=2.0.0",
# ]
# ///

"""List directory entries with their permissions, ownership, size and modification time."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from directory_lister import collect_listing, list_directory
from errors import ListingError
from models import ListingConfiguration

logger = logging.getLogger(__name__)

# Single-letter options build_parser understands
SHORT_FLAGS = "lRartvh"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dirlist", description=__doc__)
    p.add_argument("-l", dest="long_listing", action="store_true", help="long listing (same output)")
    p.add_argument("-R", dest="recursive", action="store_true", help="list subdirectories recursively")
    p.add_argument("-a", dest="include_hidden", action="store_true", help="include dot-prefixed entries")
    p.add_argument("-r", dest="reverse_order", action="store_true", help="reverse the ordering")
    p.add_argument("-t", dest="sort_by_mod_time", action="store_true", help="sort by modification time")
    p.add_argument("--json", action="store_true", help="print the listing as JSON")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    p.add_argument("path", nargs="?", default=".", help="directory to list (default: .)")
    return p


def split_flag_clusters(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Drop unknown letters from single-dash clusters such as ``-lz``.

    Returns the arguments to parse and the ones that were dropped. A cluster
    keeps its known letters, so ``-lz`` still turns on ``-l``.
    """
    kept: list[str] = []
    dropped: list[str] = []
    for arg in argv:
        if len(arg) > 1 and arg.startswith("-") and not arg.startswith("--"):
            known = "".join(c for c in arg[1:] if c in SHORT_FLAGS)
            if len(known) != len(arg) - 1:
                dropped.append(arg)
            if known:
                kept.append("-" + known)
        else:
            kept.append(arg)
    return kept, dropped


def build_configuration(args: argparse.Namespace) -> ListingConfiguration:
    return ListingConfiguration(
        long_listing=args.long_listing,
        recursive=args.recursive,
        include_hidden=args.include_hidden,
        reverse_order=args.reverse_order,
        sort_by_mod_time=args.sort_by_mod_time,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    if argv is None:
        argv = sys.argv[1:]
    # Unknown flags are ignored
    argv, dropped = split_flag_clusters(argv)
    args, unknown = build_parser().parse_known_args(argv)
    unknown = dropped + unknown

    # Names that are not valid UTF-8 are written back out as their raw bytes
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="surrogateescape")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if unknown:
        logger.debug("ignoring unrecognized arguments: %s", unknown)

    config = build_configuration(args)

    try:
        if args.json:
            print(collect_listing(args.path, config).model_dump_json(indent=2))
        else:
            list_directory(args.path, config)
    except ListingError as e:
        print(f"Error listing files: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
