"""Environment preconditions checked before option parsing.

nukedir must run as root. When started by an ordinary user who has
passwordless sudo, the whole program is run again under ``sudo -n`` and
the parent exits with the child's status.
"""

import logging
import os
import subprocess
import sys
from pathlib import Path

from nukedir.core.errors import PrivilegeError, RootCwdError
from nukedir.utils.shell import command_exists, exit_status, run_command, run_interactive

logger = logging.getLogger(__name__)


def is_root() -> bool:
    """Check if the process runs with an effective uid of 0."""
    return os.geteuid() == 0


def can_sudo_unattended() -> bool:
    """Check if ``sudo`` can elevate without prompting for a password.

    Returns:
        True if ``sudo -n true`` succeeds, False otherwise.
    """
    if not command_exists("sudo"):
        return False
    try:
        result = run_command(["sudo", "-n", "true"], timeout=10.0)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("sudo probe failed: %s", e)
        return False
    return result.success


def build_elevated_command(argv: list[str]) -> list[str]:
    """Build the command that re-runs nukedir under sudo.

    Args:
        argv: Original command-line arguments (without the program name).

    Returns:
        Full argv for the elevated child process.
    """
    return ["sudo", "-n", "--", sys.executable, "-m", "nukedir", *argv]


def elevate(argv: list[str]) -> int:
    """Re-run nukedir as root and wait for it.

    Args:
        argv: Original command-line arguments (without the program name).

    Returns:
        Exit status of the elevated child process, 128 + N if it was
        killed by signal N.
    """
    command = build_elevated_command(argv)
    logger.info("Re-running with elevated privileges: %s", " ".join(command))
    return exit_status(run_interactive(command))


def check_working_directory(cwd: Path | None = None) -> None:
    """Refuse to run from the filesystem root.

    Args:
        cwd: Directory to check. Defaults to the current working directory.

    Raises:
        RootCwdError: If the working directory is ``/``.
    """
    current = (cwd or Path.cwd()).resolve()
    if current == Path("/"):
        msg = "Cannot run from the root directory ('/'); change to another directory first"
        raise RootCwdError(msg)


def check_preconditions(argv: list[str]) -> int | None:
    """Verify privileges and working directory.

    Args:
        argv: Original command-line arguments, passed through on elevation.

    Returns:
        None if this process may continue, otherwise the exit status of the
        elevated child that already handled the run.

    Raises:
        PrivilegeError: If neither root nor passwordless sudo is available.
        RootCwdError: If the working directory is ``/``.
    """
    if not is_root():
        if not can_sudo_unattended():
            msg = "Requires root privileges or passwordless sudo"
            raise PrivilegeError(msg)
        return elevate(argv)

    check_working_directory()
    return None
