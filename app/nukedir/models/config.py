"""Run configuration model.

The configuration is built once from the parsed command line and is
never mutated afterwards.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RunConfig(BaseModel):
    """Options for a single nukedir run.

    Attributes:
        verbose: Print info, warning and success messages.
        dry_run: Simulate only; nothing is deleted and caches are not dropped.
        ionice: I/O priority level 0-3 (0 = leave priority unchanged).
        timeout: Duration passed to ``timeout(1)`` for each rsync run.
        wait_for_rsync: Block until other rsync processes have finished.
        rsync_verbose: Pass ``-v`` to rsync.
        targets: Target paths in command-line order, each ending in ``/``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    verbose: bool = True
    dry_run: bool = True
    ionice: Annotated[int, Field(ge=0, le=3, description="I/O priority level")] = 0
    timeout: str | None = None
    wait_for_rsync: bool = False
    rsync_verbose: bool = False
    targets: tuple[str, ...] = ()

    @field_validator("targets", mode="before")
    @classmethod
    def normalize_targets(cls, v: object) -> object:
        """Append a trailing separator to every target path."""
        if isinstance(v, (list, tuple)):
            return tuple(t if str(t).endswith("/") else f"{t}/" for t in v)
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: str | None) -> str | None:
        """Reject empty durations; the value is otherwise passed through as-is."""
        if v is not None and not v.strip():
            msg = "timeout duration cannot be empty"
            raise ValueError(msg)
        return v
