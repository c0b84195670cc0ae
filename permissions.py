"""Render permission bits as a symbolic rwx string."""

import stat

# (bit, letter) in display order: owner, group, other
PERMISSION_BITS = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def format_permissions(mode: int) -> str:
    """Convert permission bits to a 9-character string such as ``rwxr-xr--``.

    Only the nine rwx bits are rendered. There is no file type prefix and
    setuid, setgid and sticky bits are not shown.
    """
    return "".join(letter if mode & bit else "-" for bit, letter in PERMISSION_BITS)
