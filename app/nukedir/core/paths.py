"""Path constants and XDG-compliant lookups for nukedir."""

import os
from pathlib import Path

APP_NAME = "nukedir"

# Memory-backed mounts tried, in order, for the scratch directory
TMPFS_CANDIDATES: tuple[Path, ...] = (Path("/dev/shm"), Path("/run/shm"))

PROC_MOUNTS = Path("/proc/mounts")
PROC_MOUNTINFO = Path("/proc/self/mountinfo")
DROP_CACHES = Path("/proc/sys/vm/drop_caches")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/nukedir/ (or XDG_CONFIG_HOME/nukedir/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/nukedir/theme.toml.
    """
    return get_config_dir() / "theme.toml"
