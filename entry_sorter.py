"""Ordering of directory entry names."""

from __future__ import annotations

import functools
import os
from typing import Callable

from errors import StatFailure
from metadata_resolver import resolve
from models import FileMetadata, ListingConfiguration

Comparator = Callable[[str, str], int]
Resolver = Callable[[str], FileMetadata]


def _compare(a, b) -> int:
    return (a > b) - (a < b)


def sort_entries(names: list[str], compare: Comparator) -> list[str]:
    """Return ``names`` ordered by a three-way comparator.

    The sort is stable: names the comparator reports as equal keep their
    original relative order.
    """
    return sorted(names, key=functools.cmp_to_key(compare))


def reverse_name_comparator() -> Comparator:
    def compare(a: str, b: str) -> int:
        return _compare(b, a)

    return compare


def mod_time_comparator(parent: str, reverse: bool = False, resolver: Resolver = resolve) -> Comparator:
    """Compare names by the modification time of ``parent/name``.

    Oldest first, or newest first when ``reverse`` is set. A pair where either
    side cannot be stat'ed is compared by name instead. Each name is resolved at
    most once per comparator.
    """
    mtimes: dict[str, int | None] = {}

    def mtime_of(name: str) -> int | None:
        if name not in mtimes:
            try:
                mtimes[name] = resolver(os.path.join(parent, name)).mtime_ns
            except StatFailure:
                mtimes[name] = None
        return mtimes[name]

    def compare(a: str, b: str) -> int:
        time_a, time_b = mtime_of(a), mtime_of(b)
        if time_a is None or time_b is None:
            return _compare(a, b)
        if reverse:
            return _compare(time_b, time_a)
        return _compare(time_a, time_b)

    return compare


def order_entries(
    names: list[str],
    parent: str,
    config: ListingConfiguration,
    resolver: Resolver = resolve,
) -> list[str]:
    """Apply the configured ordering to the names enumerated from ``parent``.

    ``-t`` sorts by modification time (``-r`` flips the time comparison),
    ``-r`` alone sorts by reverse name, otherwise enumeration order is kept.
    """
    if config.sort_by_mod_time:
        return sort_entries(names, mod_time_comparator(parent, config.reverse_order, resolver))
    if config.reverse_order:
        return sort_entries(names, reverse_name_comparator())
    return list(names)
