"""Filesystem detection and rsync strategy selection.

The deletion flags are tuned per filesystem:

- XFS tolerates deleting while the file list is traversed.
- Btrfs benefits from delayed deletion and preallocation, which keeps
  B-tree rebalancing down.
- Everything else deletes before the (empty) transfer, without
  incremental recursion, in place.
"""

import logging
import subprocess

from nukedir.models.target import FilesystemStrategy
from nukedir.utils.shell import run_command

logger = logging.getLogger(__name__)

UNKNOWN_FS = "unknown"

DEFAULT_STRATEGY = FilesystemStrategy(
    fs_type="default",
    delete_flag="--delete-before",
    extra_flags=("--no-inc-recursive", "--inplace"),
)

STRATEGIES: dict[str, FilesystemStrategy] = {
    "xfs": FilesystemStrategy(fs_type="xfs", delete_flag="--delete-during"),
    "btrfs": FilesystemStrategy(
        fs_type="btrfs",
        delete_flag="--delete-delay",
        extra_flags=("--preallocate",),
    ),
}


def select_strategy(fs_type: str) -> FilesystemStrategy:
    """Select rsync deletion flags for a filesystem type.

    Args:
        fs_type: Filesystem label as reported by ``stat -f -c %T``.

    Returns:
        The matching strategy, or the default strategy for any other type.
    """
    return STRATEGIES.get(fs_type.strip().lower(), DEFAULT_STRATEGY)


def detect_fs_type(path: str) -> str:
    """Detect the filesystem type holding a path.

    Args:
        path: Existing path to inspect.

    Returns:
        Filesystem type label (e.g. ``xfs``, ``btrfs``, ``ext2/ext3``),
        or ``unknown`` if it cannot be determined.
    """
    try:
        result = run_command(["stat", "--file-system", "--format=%T", path], timeout=30.0)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Cannot detect filesystem type of %s: %s", path, e)
        return UNKNOWN_FS

    fs_type = result.stdout.strip()
    if not result.success or not fs_type:
        logger.warning(
            "Cannot detect filesystem type of %s: %s",
            path,
            result.stderr.strip() or "stat failed",
        )
        return UNKNOWN_FS

    logger.debug("Filesystem type of %s is %s", path, fs_type)
    return fs_type
