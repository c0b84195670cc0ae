"""Resolve filesystem metadata for a single path."""

from __future__ import annotations

import logging
import os
import stat
from datetime import datetime

if os.name == "posix":
    import grp
    import pwd

from errors import StatFailure, StatUnavailable
from models import FileMetadata

logger = logging.getLogger(__name__)

UNKNOWN_IDENTITY = "unknown"


class PosixStatReader:
    """Stat access for platforms with numeric owner and group ids."""

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def owner_ids(self, path: str, st: os.stat_result) -> tuple[int, int]:
        uid = getattr(st, "st_uid", None)
        gid = getattr(st, "st_gid", None)
        if uid is None or gid is None:
            raise StatUnavailable(path)
        return uid, gid

    def user_name(self, uid: int) -> str:
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            return str(uid)

    def group_name(self, gid: int) -> str:
        try:
            return grp.getgrgid(gid).gr_name
        except KeyError:
            return str(gid)


class PortableStatReader:
    """Stat access for platforms without POSIX ownership.

    Owner and group are reported as id 0 named ``unknown``.
    """

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def owner_ids(self, path: str, st: os.stat_result) -> tuple[int, int]:
        return 0, 0

    def user_name(self, uid: int) -> str:
        return UNKNOWN_IDENTITY

    def group_name(self, gid: int) -> str:
        return UNKNOWN_IDENTITY


def default_stat_reader() -> PosixStatReader | PortableStatReader:
    if os.name == "posix":
        return PosixStatReader()
    return PortableStatReader()


def resolve(full_path: str, reader: PosixStatReader | PortableStatReader | None = None) -> FileMetadata:
    """Stat ``full_path`` once and build its metadata snapshot.

    Symlinks are followed. Raises ``StatFailure`` when the stat call fails and
    ``StatUnavailable`` when the platform reports no ownership ids. Owner and
    group names that cannot be looked up fall back to the numeric id.
    """
    if reader is None:
        reader = default_stat_reader()

    try:
        st = reader.stat(full_path)
    except OSError as e:
        logger.debug("stat failed for %s: %s", full_path, e)
        raise StatFailure(full_path, e) from e

    uid, gid = reader.owner_ids(full_path, st)

    return FileMetadata(
        mode=stat.S_IMODE(st.st_mode) & 0o777,
        uid=uid,
        gid=gid,
        owner=reader.user_name(uid),
        group=reader.group_name(gid),
        size=st.st_size,
        mtime_ns=st.st_mtime_ns,
        modified=datetime.fromtimestamp(st.st_mtime),
        name=os.path.basename(os.path.normpath(full_path)),
        is_dir=stat.S_ISDIR(st.st_mode),
    )
