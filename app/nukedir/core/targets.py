"""Target directory validation.

A missing path or a non-directory is skipped so that the remaining
targets are still processed. The filesystem root and mount points end
the whole run.
"""

import logging
import os
import re
from pathlib import Path

from nukedir.core.errors import TargetSkipped, UnsafeTargetError
from nukedir.core.paths import PROC_MOUNTINFO
from nukedir.core.strategy import detect_fs_type
from nukedir.models.target import TargetDirectory

logger = logging.getLogger(__name__)

# Mount table fields escape space, tab, newline and backslash as \ooo
_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


def _unescape_mount_field(value: str) -> str:
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), value)


def read_mount_points(mountinfo_file: Path = PROC_MOUNTINFO) -> set[str]:
    """Read every mount point listed in a /proc/self/mountinfo style file.

    Bind mounts are listed here even when source and mount point share a
    device, which ``os.path.ismount`` cannot tell apart.

    Args:
        mountinfo_file: Mount table to read.

    Returns:
        Set of mount point paths. Empty if the file cannot be read.
    """
    try:
        content = mountinfo_file.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        logger.debug("Cannot read %s: %s", mountinfo_file, e)
        return set()

    mount_points: set[str] = set()
    for line in content.splitlines():
        fields = line.split()
        if len(fields) >= 5:
            mount_points.add(_unescape_mount_field(fields[4]))
    return mount_points


def is_mount_point(path: str, mountinfo_file: Path = PROC_MOUNTINFO) -> bool:
    """Check whether a canonical path is a mount point, bind mounts included.

    Args:
        path: Canonical absolute path.
        mountinfo_file: Mount table to consult.

    Returns:
        True if the path is listed in the mount table or sits on a
        different device than its parent.
    """
    return path in read_mount_points(mountinfo_file) or os.path.ismount(path)


def resolve_target(raw: str) -> str:
    """Resolve a target argument to a canonical absolute path.

    Args:
        raw: Target as given on the command line.

    Returns:
        Absolute path with symlinks, ``.`` and ``..`` resolved.

    Raises:
        TargetSkipped: If the path does not exist or cannot be resolved.
    """
    try:
        canonical = os.path.realpath(raw, strict=True)
    except OSError as e:
        msg = f"Cannot resolve {raw!r}: {e.strerror or e}"
        raise TargetSkipped(msg) from e
    logger.debug("Resolved %s to %s", raw, canonical)
    return canonical


def validate_target(raw: str) -> TargetDirectory:
    """Validate one target and describe it.

    Checks, in order: resolvable, not ``/``, a directory, not a mount point.

    Args:
        raw: Target as given on the command line.

    Returns:
        TargetDirectory with canonical path and filesystem type.

    Raises:
        TargetSkipped: If the path cannot be resolved or is not a directory.
        UnsafeTargetError: If the path is ``/`` or a mount point.
    """
    path = resolve_target(raw)

    if path == "/":
        msg = f"Refusing to delete the root directory ('/'), given as {raw!r}"
        raise UnsafeTargetError(msg)

    if not os.path.isdir(path):
        msg = f"Not a directory: {path}"
        raise TargetSkipped(msg)

    if is_mount_point(path, PROC_MOUNTINFO):
        msg = f"Refusing to delete mount point {path}"
        raise UnsafeTargetError(msg)

    return TargetDirectory(raw=raw, path=path, fs_type=detect_fs_type(path))
