"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import io
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from nukedir.core.theme import get_rich_theme
from nukedir.models.config import RunConfig
from nukedir.models.target import TargetDirectory
from nukedir.utils.formatting import StatusReporter
from rich.console import Console


def make_tree(root: Path, num_files: int = 10, depth: int = 2) -> Path:
    """Create a directory with files and nested levels of files.

    Mirrors the layout used by the deletion scenarios: ``num_files`` files
    at the top and ``num_files`` files in each of ``depth`` nested levels.
    """
    root.mkdir(parents=True, exist_ok=True)
    for i in range(1, num_files + 1):
        (root / f"file_{i}.txt").write_text(f"test file {i}\n")

    current = root
    for d in range(1, depth + 1):
        current = current / f"level_{d}"
        current.mkdir()
        for i in range(1, num_files + 1):
            (current / f"file_{i}.txt").write_text(f"test file {i} at depth {d}\n")
    return root


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """A populated target directory inside tmp_path."""
    return make_tree(tmp_path / "target")


@pytest.fixture
def scratch(tmp_path: Path) -> Path:
    """An empty scratch directory inside tmp_path."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def target(tree: Path) -> TargetDirectory:
    """A validated target on an ext4-like filesystem."""
    return TargetDirectory(raw=f"{tree}/", path=str(tree), fs_type="ext2/ext3")


@pytest.fixture
def output() -> io.StringIO:
    """Buffer receiving reporter output."""
    return io.StringIO()


@pytest.fixture
def reporter(output: io.StringIO) -> StatusReporter:
    """Verbose reporter writing plain text into ``output``."""
    console = Console(file=output, theme=get_rich_theme(), color_system=None, soft_wrap=True)
    return StatusReporter(verbose=True, console=console)


@pytest.fixture
def real_config(tree: Path) -> RunConfig:
    """Configuration for a real (not dry-run) deletion of ``tree``."""
    return RunConfig(dry_run=False, targets=[str(tree)])


@pytest.fixture
def no_preconditions() -> Iterator[MagicMock]:
    """Skip the root/sudo and working directory checks."""
    with patch("nukedir.cli.main.check_preconditions", return_value=None) as mock_check:
        yield mock_check


@pytest.fixture
def tree_factory() -> Callable[..., Path]:
    """The make_tree helper, for tests needing several or odd-shaped trees."""
    return make_tree
