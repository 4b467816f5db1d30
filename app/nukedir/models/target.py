"""Target and result models for directory deletion.

This module defines the validated target directory, the rsync strategy
chosen for its filesystem, and the per-target deletion result.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class FilesystemStrategy:
    """rsync flags chosen for a filesystem type.

    Attributes:
        fs_type: Filesystem label the strategy was selected for.
        delete_flag: rsync deletion-timing flag (e.g. ``--delete-before``).
        extra_flags: Additional rsync flags for this filesystem.
    """

    fs_type: str
    delete_flag: str
    extra_flags: tuple[str, ...] = ()

    @property
    def flags(self) -> list[str]:
        """All rsync flags of this strategy, deletion flag first."""
        return [self.delete_flag, *self.extra_flags]


@dataclass(frozen=True, slots=True)
class TargetDirectory:
    """A target that passed validation.

    Attributes:
        raw: The argument as given on the command line (with trailing ``/``).
        path: Canonical absolute path, symlinks resolved.
        fs_type: Filesystem type label of the mount holding the path.
        is_mount: Whether the path is itself a mount point (always False
            for targets that passed validation).
    """

    raw: str
    path: str
    fs_type: str = "unknown"
    is_mount: bool = False

    def __post_init__(self) -> None:
        """Validate target data after initialization."""
        if not self.path.startswith("/"):
            msg = f"Target path must be absolute: {self.path}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of emptying and removing one target.

    Attributes:
        target: The target that was processed.
        command: Full argv that was (or would have been) executed.
        dry_run: Whether this was a simulation.
        returncode: rsync exit status.
    """

    target: TargetDirectory
    command: list[str] = field(default_factory=list)
    dry_run: bool = False
    returncode: int = 0
