"""Pydantic models for directory listing data structures."""

from __future__ import annotations

import os
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from permissions import format_permissions

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def escape_undecodable(value: str) -> str:
    """Show bytes that are not valid UTF-8 as \\xNN escapes instead of lone surrogates."""
    return os.fsencode(value).decode("utf-8", "backslashreplace")


def format_modification_time(dt: datetime) -> str:
    """Render a timestamp as ``Jan  2 15:04`` regardless of the process locale."""
    return f"{MONTH_ABBREVIATIONS[dt.month - 1]} {dt.day:2d} {dt.hour:02d}:{dt.minute:02d}"


class ListingConfiguration(BaseModel):
    """Flags for one invocation, set once from the command line."""

    model_config = ConfigDict(frozen=True)

    long_listing: bool = Field(False, description="Long listing (-l); output is the same either way")
    recursive: bool = Field(False, description="Recurse into subdirectories (-R)")
    include_hidden: bool = Field(False, description="Include dot-prefixed entries (-a)")
    reverse_order: bool = Field(False, description="Reverse the ordering (-r)")
    sort_by_mod_time: bool = Field(False, description="Order by modification time (-t)")


class DirectoryEntry(BaseModel):
    """A name found in a directory, together with the directory it was found in."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Entry name as returned by the filesystem")
    parent: str = Field(..., description="Path of the directory holding the entry")

    @property
    def path(self) -> str:
        return os.path.join(self.parent, self.name)


class FileMetadata(BaseModel):
    """Read-only snapshot of one entry's stat data."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "mode": 0o644,
                    "uid": 1000,
                    "gid": 1000,
                    "owner": "user",
                    "group": "group",
                    "size": 256,
                    "mtime_ns": 1736937000000000000,
                    "modified": "2025-01-15T10:30:00",
                    "name": "README.md",
                    "is_dir": False,
                }
            ]
        },
    )

    mode: int = Field(..., ge=0, le=0o777, description="Permission bits (rwx for owner/group/other)")
    uid: int = Field(..., description="Numeric owner id")
    gid: int = Field(..., description="Numeric group id")
    owner: str = Field(..., description="Owner name, or the numeric id when it cannot be resolved")
    group: str = Field(..., description="Group name, or the numeric id when it cannot be resolved")
    size: int = Field(..., ge=0, description="Size in bytes")
    mtime_ns: int = Field(..., description="Modification time in nanoseconds since the epoch")
    modified: datetime = Field(..., description="Modification time, local wall clock")
    name: str = Field(..., description="Display name")
    is_dir: bool = Field(..., description="Whether the entry is a directory")

    @property
    def permissions(self) -> str:
        return format_permissions(self.mode)

    @property
    def modified_display(self) -> str:
        return format_modification_time(self.modified)

    @field_serializer("name", when_used="json")
    def serialize_name(self, name: str) -> str:
        return escape_undecodable(name)


class DirectoryListing(BaseModel):
    """Collected result of listing one directory, with nested subdirectory listings."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "path": ".",
                    "entries": [
                        {
                            "mode": 0o755,
                            "uid": 1000,
                            "gid": 1000,
                            "owner": "user",
                            "group": "group",
                            "size": 4096,
                            "mtime_ns": 1736937045000000000,
                            "modified": "2025-01-15T10:30:45",
                            "name": "docs",
                            "is_dir": True,
                        }
                    ],
                    "errors": [],
                    "subdirectories": [],
                }
            ]
        }
    )

    path: str = Field(..., description="Directory that was listed")
    entries: list[FileMetadata] = Field(default_factory=list, description="Entries in listing order")
    errors: list[str] = Field(default_factory=list, description="Entries whose metadata could not be read")
    subdirectories: list[DirectoryListing] = Field(
        default_factory=list, description="Recursive listings, in the order they were visited"
    )

    @field_serializer("path", when_used="json")
    def serialize_path(self, path: str) -> str:
        return escape_undecodable(path)

    @field_serializer("errors", when_used="json")
    def serialize_errors(self, errors: list[str]) -> list[str]:
        return [escape_undecodable(error) for error in errors]
