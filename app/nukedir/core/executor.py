"""Deletion executor.

Empties each target by mirroring the empty scratch directory onto it
with ``rsync -a --delete``, then removes the emptied directory. The
rsync call can be wrapped by ``nice``/``ionice`` and by ``timeout``.
"""

from __future__ import annotations

import logging
import os
import shlex
import time
from pathlib import Path
from typing import TYPE_CHECKING

from nukedir.core.errors import DeletionError, MissingToolError
from nukedir.core.paths import DROP_CACHES
from nukedir.core.strategy import select_strategy
from nukedir.models.target import DeletionResult
from nukedir.utils.shell import (
    command_exists,
    exit_status,
    is_process_running,
    run_interactive,
    sync_filesystems,
)

if TYPE_CHECKING:
    from nukedir.models.config import RunConfig
    from nukedir.models.target import TargetDirectory
    from nukedir.utils.formatting import StatusReporter

logger = logging.getLogger(__name__)

RSYNC = "rsync"

# Seconds between checks for other rsync processes
RSYNC_POLL_INTERVAL: float = 60.0

# Grace period before timeout(1) sends SIGKILL after SIGTERM
TIMEOUT_KILL_AFTER = "10s"

# Priority wrappers per --ionice level; 0 means no wrapper
PRIORITY_WRAPPERS: dict[int, list[str]] = {
    1: ["nice", "-n", "-10", "ionice", "-c", "2", "-n", "0"],
    2: ["nice", "-n", "10", "ionice", "-c", "2", "-n", "4"],
    3: ["nice", "-n", "19", "ionice", "-c", "3"],
}


def required_tools(config: RunConfig) -> list[str]:
    """List the external commands a run needs.

    Args:
        config: Run configuration.

    Returns:
        Command names, rsync first.
    """
    tools = [RSYNC]
    if config.ionice:
        tools.extend(["nice", "ionice"])
    if config.timeout:
        tools.append("timeout")
    return tools


def check_required_tools(config: RunConfig) -> None:
    """Ensure every external command needed by this run is installed.

    Raises:
        MissingToolError: Naming the first missing command.
    """
    for tool in required_tools(config):
        if not command_exists(tool):
            msg = f"Required command not found: {tool}"
            raise MissingToolError(msg)


def build_command(config: RunConfig, scratch: Path, target: TargetDirectory) -> list[str]:
    """Assemble the full command that empties a target.

    Args:
        config: Run configuration.
        scratch: Empty scratch directory used as rsync source.
        target: Validated target directory.

    Returns:
        argv list: optional priority and timeout wrappers, then rsync.
    """
    command: list[str] = []

    if config.ionice:
        command.extend(PRIORITY_WRAPPERS[config.ionice])

    if config.timeout:
        command.extend(["timeout", f"--kill-after={TIMEOUT_KILL_AFTER}", config.timeout])

    command.extend([RSYNC, "-a", "--delete"])
    if config.dry_run:
        command.append("--dry-run")
    if config.rsync_verbose:
        command.append("-v")

    command.extend(select_strategy(target.fs_type).flags)
    command.extend([f"{scratch}/", f"{target.path.rstrip('/')}/"])

    logger.debug("Built command for %s: %s", target.path, command)
    return command


class DeletionExecutor:
    """Runs the rsync deletion for validated targets.

    Attributes:
        _config: Run configuration.
        _scratch: Empty scratch directory used as rsync source.
        _reporter: Status reporter for progress messages.
    """

    def __init__(
        self,
        config: RunConfig,
        scratch: Path,
        reporter: StatusReporter,
        poll_interval: float = RSYNC_POLL_INTERVAL,
    ) -> None:
        self._config = config
        self._scratch = scratch
        self._reporter = reporter
        self._poll_interval = poll_interval
        self._warned_other_rsync = False

    @property
    def dry_run(self) -> bool:
        """Check if executor is in dry-run mode."""
        return self._config.dry_run

    def wait_for_other_rsync(self) -> None:
        """Handle rsync processes started by someone else.

        With ``wait_for_rsync`` set, blocks until none are left, polling at
        a fixed interval. Otherwise warns, once per run. The check is advisory:
        another rsync can still start right after it.
        """
        if not is_process_running(RSYNC):
            return

        if not self._config.wait_for_rsync:
            if not self._warned_other_rsync:
                self._reporter.warning("Other rsync processes are running; continuing anyway")
                self._warned_other_rsync = True
            return

        while is_process_running(RSYNC):
            self._reporter.info(
                f"Waiting for other rsync processes to finish "
                f"(checking every {self._poll_interval:g}s)"
            )
            time.sleep(self._poll_interval)

    def drop_caches(self) -> None:
        """Flush buffers and ask the kernel to drop page, dentry and inode caches.

        Never called in dry-run mode. Failure is reported but not fatal.
        """
        sync_filesystems()
        try:
            DROP_CACHES.write_text("3\n", encoding="ascii")
        except OSError as e:
            logger.warning("Could not drop caches via %s: %s", DROP_CACHES, e)
            self._reporter.warning(f"Could not drop filesystem caches: {e}")
            return
        logger.debug("Dropped filesystem caches")

    def delete(self, target: TargetDirectory) -> DeletionResult:
        """Empty and remove one target directory.

        In dry-run mode rsync runs with ``--dry-run`` and the directory is
        left in place.

        Args:
            target: Validated target directory.

        Returns:
            DeletionResult for the target.

        Raises:
            DeletionError: If rsync exits non-zero or the emptied directory
                cannot be removed. The directory is not removed after an
                rsync failure.
        """
        self.wait_for_other_rsync()

        self._reporter.warning(f"All contents of {target.path} will be destroyed")

        command = build_command(self._config, self._scratch, target)
        command_str = shlex.join(command)

        if self.dry_run:
            self._reporter.info(f"Dry run: {command_str}")
        else:
            self.drop_caches()

        logger.info("Executing: %s (dry_run=%s)", command_str, self.dry_run)
        returncode = run_interactive(command)

        if returncode != 0:
            status = exit_status(returncode)
            msg = f"rsync failed on {target.path} (exit status {status})"
            raise DeletionError(msg, exit_code=status)

        if not self.dry_run:
            try:
                os.rmdir(target.path)
            except OSError as e:
                msg = f"Cannot remove emptied directory {target.path}: {e}"
                raise DeletionError(msg) from e
            sync_filesystems()

        return DeletionResult(
            target=target,
            command=command,
            dry_run=self.dry_run,
            returncode=returncode,
        )
