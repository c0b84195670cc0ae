"""Exceptions raised while listing directories."""

from __future__ import annotations


def _reason(cause: BaseException | None) -> str:
    """Short reason text for a message: the OS error string when there is one."""
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    return str(cause) if cause is not None else "unknown error"


class ListingError(Exception):
    """Base class for listing errors."""


class PathUnreadable(ListingError):
    """A directory could not be opened or enumerated.

    Fatal to the whole listing, including when raised from a recursive call.
    """

    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        super().__init__(f"open {path}: {_reason(cause)}")


class CycleDetected(ListingError):
    """Recursion reached a directory that is already being listed higher up."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"cycle detected at {path}: directory is its own ancestor")


class StatFailure(ListingError):
    """Metadata for a single entry could not be read. Only that entry is skipped."""

    def __init__(self, path: str, cause: BaseException | None = None, reason: str | None = None):
        self.path = path
        self.cause = cause
        super().__init__(f"stat {path}: {reason or _reason(cause)}")


class StatUnavailable(StatFailure):
    """The platform's stat result carries no numeric owner or group."""

    def __init__(self, path: str):
        super().__init__(path, reason="owner and group ids are not available on this platform")
