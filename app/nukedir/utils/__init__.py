"""Utility modules for nukedir.

This module exports commonly used utility functions.
"""

from nukedir.utils.formatting import StatusReporter, err_console, print_error
from nukedir.utils.shell import (
    CommandResult,
    command_exists,
    exit_status,
    is_process_running,
    run_command,
    run_interactive,
    sync_filesystems,
)

__all__ = [
    "CommandResult",
    "StatusReporter",
    "command_exists",
    "exit_status",
    "err_console",
    "is_process_running",
    "print_error",
    "run_command",
    "run_interactive",
    "sync_filesystems",
]
