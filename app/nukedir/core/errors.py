"""Exception hierarchy for nukedir.

Every error that ends the run carries the process exit code to use.
"""


class NukedirError(Exception):
    """Base exception for nukedir errors.

    Attributes:
        exit_code: Process exit status to use when this error ends the run.
    """

    exit_code: int = 1

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class PrivilegeError(NukedirError):
    """Raised when neither root nor passwordless sudo is available."""


class RootCwdError(NukedirError):
    """Raised when nukedir is started from the filesystem root."""


class UnsafeTargetError(NukedirError):
    """Raised for targets that must abort the whole run (/ or a mount point)."""


class TargetSkipped(NukedirError):
    """Raised for targets that are reported and skipped (missing, not a dir)."""


class MissingToolError(NukedirError):
    """Raised when a required external command is not installed."""


class DeletionError(NukedirError):
    """Raised when rsync fails to empty a target directory."""


class ScratchError(NukedirError):
    """Raised when the empty scratch directory cannot be created."""
