"""Empty scratch directory used as the rsync source.

Mirroring an always-empty directory onto a target with ``--delete``
removes everything in the target. The scratch directory lives on a
memory-backed mount when one is available and is removed on every exit
path, including SIGTERM and SIGHUP.
"""

from __future__ import annotations

import logging
import os
import shutil
import signal
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import FrameType

from nukedir.core.errors import ScratchError
from nukedir.core.paths import APP_NAME, PROC_MOUNTS, TMPFS_CANDIDATES

logger = logging.getLogger(__name__)

# Signals converted to SystemExit while a scratch directory exists
_CLEANUP_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGTERM, signal.SIGHUP)


def _read_mounts(mounts_file: Path) -> dict[str, str]:
    """Map mount points to filesystem types from a /proc/mounts style file."""
    mounts: dict[str, str] = {}
    try:
        content = mounts_file.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug("Cannot read %s: %s", mounts_file, e)
        return mounts

    for line in content.splitlines():
        fields = line.split()
        if len(fields) >= 3:
            mounts[fields[1]] = fields[2]
    return mounts


def find_tmpfs_dir(
    candidates: tuple[Path, ...] = TMPFS_CANDIDATES,
    mounts_file: Path = PROC_MOUNTS,
) -> Path | None:
    """Find a writable memory-backed mount for the scratch directory.

    Args:
        candidates: Well-known tmpfs mount points, in order of preference.
        mounts_file: File listing mounted filesystems.

    Returns:
        The first candidate mounted as tmpfs and writable, or None.
    """
    mounts = _read_mounts(mounts_file)
    for candidate in candidates:
        if mounts.get(str(candidate)) == "tmpfs" and os.access(candidate, os.W_OK):
            return candidate
    return None


def create_scratch_dir(base: Path | None = None) -> Path:
    """Create a new, empty scratch directory.

    Args:
        base: Parent directory. Defaults to a tmpfs mount, else the system
            temporary directory.

    Returns:
        Path of the created directory, unique per process and call.

    Raises:
        ScratchError: If the directory cannot be created.
    """
    if base is None:
        base = find_tmpfs_dir() or Path(tempfile.gettempdir())

    try:
        path = tempfile.mkdtemp(prefix=f"{APP_NAME}-{os.getpid()}-", dir=base)
    except OSError as e:
        msg = f"Cannot create scratch directory in {base}: {e}"
        raise ScratchError(msg) from e

    logger.debug("Created scratch directory %s", path)
    return Path(path)


def remove_scratch_dir(path: Path) -> None:
    """Remove the scratch directory tree, ignoring a missing directory."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as e:
        logger.warning("Failed to remove scratch directory %s: %s", path, e)
        return
    logger.debug("Removed scratch directory %s", path)


def _exit_on_signal(signum: int, frame: FrameType | None) -> None:
    raise SystemExit(128 + signum)


@contextmanager
def scratch_directory(base: Path | None = None) -> Iterator[Path]:
    """Provide an empty scratch directory for the duration of a run.

    The directory is removed when the block exits for any reason.
    SIGTERM and SIGHUP raise SystemExit while the block is active so the
    cleanup still runs; the previous handlers are restored afterwards.

    Args:
        base: Optional parent directory (see :func:`create_scratch_dir`).

    Yields:
        Path of the empty scratch directory.
    """
    path = create_scratch_dir(base)
    previous = {sig: signal.signal(sig, _exit_on_signal) for sig in _CLEANUP_SIGNALS}
    try:
        yield path
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        remove_scratch_dir(path)
