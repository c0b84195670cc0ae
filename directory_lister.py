"""Enumerate directories and print one metadata line per entry."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from entry_sorter import Resolver, order_entries
from errors import CycleDetected, PathUnreadable, StatFailure
from metadata_resolver import resolve
from models import DirectoryEntry, DirectoryListing, FileMetadata, ListingConfiguration

logger = logging.getLogger(__name__)


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def format_entry_line(metadata: FileMetadata) -> str:
    """Render ``{permissions} {uid} {owner} {group} {size} {mtime} {name}``."""
    return (
        f"{metadata.permissions} {metadata.uid} {metadata.owner} {metadata.group} "
        f"{metadata.size} {metadata.modified_display} {metadata.name}"
    )


def read_entry_names(path: str) -> list[str]:
    """Return every name in ``path`` in enumeration order.

    The directory handle is closed before returning.
    """
    try:
        with os.scandir(path) as it:
            return [e.name for e in it]
    except OSError as e:
        logger.debug("cannot open directory %s: %s", path, e)
        raise PathUnreadable(path, e) from e


def enumerate_entries(path: str, config: ListingConfiguration) -> list[DirectoryEntry]:
    """Enumerate ``path``, adding dot-prefixed names only when hidden entries are requested.

    Hidden names come after the others and are never listed twice.
    """
    names = [name for name in read_entry_names(path) if not is_hidden(name)]

    if config.include_hidden:
        seen = set(names)
        for name in read_entry_names(path):
            if is_hidden(name) and name not in seen:
                seen.add(name)
                names.append(name)

    return [DirectoryEntry(name=name, parent=path) for name in names]


def directory_identity(path: str) -> tuple[int, int]:
    try:
        st = os.stat(path)
    except OSError as e:
        raise PathUnreadable(path, e) from e
    return st.st_dev, st.st_ino


def _enter(path: str, ancestors: frozenset[tuple[int, int]]) -> frozenset[tuple[int, int]]:
    identity = directory_identity(path)
    if identity in ancestors:
        raise CycleDetected(path)
    return ancestors | {identity}


def _ordered_entries(path: str, config: ListingConfiguration, resolver: Resolver) -> list[DirectoryEntry]:
    entries = enumerate_entries(path, config)
    by_name = {entry.name: entry for entry in entries}
    ordered = order_entries([entry.name for entry in entries], path, config, resolver)
    return [by_name[name] for name in ordered]


def list_directory(
    path: str,
    config: ListingConfiguration,
    out: TextIO | None = None,
    resolver: Resolver = resolve,
) -> None:
    """Print a metadata line for every entry of ``path``, depth-first when recursive.

    An entry whose metadata cannot be read has its error printed in place of
    its line. A directory that cannot be opened, at any depth, raises
    ``PathUnreadable`` and stops the whole listing; a symlink loop raises
    ``CycleDetected``.
    """
    if out is None:
        out = sys.stdout
    _list(path, config, out, resolver, frozenset())


def _list(
    path: str,
    config: ListingConfiguration,
    out: TextIO,
    resolver: Resolver,
    ancestors: frozenset[tuple[int, int]],
) -> None:
    ancestors = _enter(path, ancestors)
    logger.debug("listing %s", path)

    for entry in _ordered_entries(path, config, resolver):
        try:
            metadata = resolver(entry.path)
        except StatFailure as e:
            print(e, file=out)
            continue

        print(format_entry_line(metadata), file=out)

        if config.recursive and metadata.is_dir:
            print(f"\n{entry.path}:", file=out)
            _list(entry.path, config, out, resolver, ancestors)


def collect_listing(
    path: str,
    config: ListingConfiguration,
    resolver: Resolver = resolve,
) -> DirectoryListing:
    """Same pass as ``list_directory``, gathered into a ``DirectoryListing``.

    Per-entry stat errors are recorded in ``errors``; fatal errors propagate.
    """
    return _collect(path, config, resolver, frozenset())


def _collect(
    path: str,
    config: ListingConfiguration,
    resolver: Resolver,
    ancestors: frozenset[tuple[int, int]],
) -> DirectoryListing:
    ancestors = _enter(path, ancestors)
    listing = DirectoryListing(path=path)

    for entry in _ordered_entries(path, config, resolver):
        try:
            metadata = resolver(entry.path)
        except StatFailure as e:
            listing.errors.append(str(e))
            continue

        listing.entries.append(metadata)

        if config.recursive and metadata.is_dir:
            listing.subdirectories.append(_collect(entry.path, config, resolver, ancestors))

    return listing
