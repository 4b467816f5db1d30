"""Unit tests for the run configuration and target models."""

import pytest
from nukedir.models.config import RunConfig
from nukedir.models.target import DeletionResult, FilesystemStrategy, TargetDirectory
from pydantic import ValidationError


class TestRunConfig:
    """Tests for RunConfig."""

    def test_defaults(self) -> None:
        """Dry run and verbose are on by default."""
        config = RunConfig()
        assert config.dry_run is True
        assert config.verbose is True
        assert config.ionice == 0
        assert config.timeout is None
        assert config.wait_for_rsync is False
        assert config.rsync_verbose is False
        assert config.targets == ()

    def test_targets_get_trailing_separator(self) -> None:
        """Every target ends with exactly one added separator."""
        config = RunConfig(targets=["a", "/data/b/", "c d"])
        assert config.targets == ("a/", "/data/b/", "c d/")

    def test_target_order_preserved(self) -> None:
        """Targets keep their command-line order."""
        config = RunConfig(targets=["z", "a", "m"])
        assert config.targets == ("z/", "a/", "m/")

    @pytest.mark.parametrize("level", [-1, 4, 10])
    def test_ionice_out_of_range(self, level: int) -> None:
        """ionice must be 0-3."""
        with pytest.raises(ValidationError):
            RunConfig(ionice=level)

    @pytest.mark.parametrize("level", [0, 1, 2, 3])
    def test_ionice_in_range(self, level: int) -> None:
        """Every level 0-3 is accepted."""
        assert RunConfig(ionice=level).ionice == level

    def test_empty_timeout_rejected(self) -> None:
        """An empty duration is invalid."""
        with pytest.raises(ValidationError, match="timeout duration cannot be empty"):
            RunConfig(timeout="  ")

    def test_timeout_passed_through(self) -> None:
        """Durations are not interpreted."""
        assert RunConfig(timeout="4h").timeout == "4h"

    def test_frozen(self) -> None:
        """The configuration cannot change after creation."""
        config = RunConfig()
        with pytest.raises(ValidationError):
            config.dry_run = False  # type: ignore[misc]

    def test_unknown_field_rejected(self) -> None:
        """Unknown options are rejected."""
        with pytest.raises(ValidationError):
            RunConfig(force=True)  # type: ignore[call-arg]


class TestTargetModels:
    """Tests for the target dataclasses."""

    def test_relative_path_rejected(self) -> None:
        """Canonical paths must be absolute."""
        with pytest.raises(ValueError, match="must be absolute"):
            TargetDirectory(raw="data/", path="data")

    def test_strategy_flags(self) -> None:
        """Strategy flags list the deletion flag first."""
        strategy = FilesystemStrategy(
            fs_type="btrfs",
            delete_flag="--delete-delay",
            extra_flags=("--preallocate",),
        )
        assert strategy.flags == ["--delete-delay", "--preallocate"]

    def test_result_defaults(self) -> None:
        """A bare result describes a real run with a clean rsync exit."""
        result = DeletionResult(target=TargetDirectory(raw="/x/", path="/x"))
        assert result.dry_run is False
        assert result.returncode == 0
        assert result.command == []
