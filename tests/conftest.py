from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest

from models import FileMetadata


@pytest.fixture
def sample_directory(tmp_path: Path) -> Path:
    """Directory holding ``b.txt``, ``a.txt`` and ``.hidden``."""
    root = tmp_path / "sample"
    root.mkdir()
    (root / "b.txt").write_text("bravo\n")
    (root / "a.txt").write_text("alpha\n")
    (root / ".hidden").write_text("secret\n")
    return root


@pytest.fixture
def nested_directory(tmp_path: Path) -> Path:
    """``root/sub/x.txt``."""
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "sub" / "x.txt").write_text("x\n")
    return root


@pytest.fixture
def make_metadata():
    """Factory for metadata snapshots that never touch the filesystem."""

    def _make(name: str, mtime_ns: int = 0, is_dir: bool = False, **overrides) -> FileMetadata:
        data = {
            "mode": 0o644,
            "uid": 1000,
            "gid": 1000,
            "owner": "user",
            "group": "group",
            "size": 0,
            "mtime_ns": mtime_ns,
            "modified": datetime.fromtimestamp(mtime_ns / 1e9),
            "name": name,
            "is_dir": is_dir,
        }
        data.update(overrides)
        return FileMetadata(**data)

    return _make


@pytest.fixture
def undecodable_directory(sample_directory: Path) -> Path:
    """``sample_directory`` plus a file named with the raw bytes ``bad\\xffname``."""
    if os.name != "posix":
        pytest.skip("needs byte-oriented filenames")
    try:
        with open(os.path.join(os.fsencode(sample_directory), b"bad\xffname"), "wb"):
            pass
    except OSError:
        pytest.skip("filesystem rejects names that are not valid UTF-8")
    return sample_directory
