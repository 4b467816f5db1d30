"""Unit tests for privilege and working directory checks."""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from nukedir.core.errors import PrivilegeError, RootCwdError
from nukedir.core.privileges import (
    build_elevated_command,
    can_sudo_unattended,
    check_preconditions,
    check_working_directory,
)
from nukedir.utils.shell import CommandResult


class TestCanSudoUnattended:
    """Tests for can_sudo_unattended."""

    @patch("nukedir.core.privileges.command_exists", return_value=False)
    def test_no_sudo_installed(self, mock_exists: MagicMock) -> None:
        """Without sudo there is no elevation."""
        assert can_sudo_unattended() is False

    @patch("nukedir.core.privileges.command_exists", return_value=True)
    @patch("nukedir.core.privileges.run_command")
    def test_passwordless_sudo(self, mock_run: MagicMock, mock_exists: MagicMock) -> None:
        """sudo -n true succeeding means unattended elevation works."""
        mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)

        assert can_sudo_unattended() is True
        mock_run.assert_called_once_with(["sudo", "-n", "true"], timeout=10.0)

    @patch("nukedir.core.privileges.command_exists", return_value=True)
    @patch("nukedir.core.privileges.run_command")
    def test_password_required(self, mock_run: MagicMock, mock_exists: MagicMock) -> None:
        """sudo asking for a password means no elevation."""
        mock_run.return_value = CommandResult(
            stdout="", stderr="sudo: a password is required", returncode=1
        )

        assert can_sudo_unattended() is False


class TestBuildElevatedCommand:
    """Tests for build_elevated_command."""

    def test_passes_all_arguments(self) -> None:
        """Original arguments are passed through unchanged."""
        command = build_elevated_command(["-qN", "-T", "2m", "/data/old cache/"])

        assert command == [
            "sudo",
            "-n",
            "--",
            sys.executable,
            "-m",
            "nukedir",
            "-qN",
            "-T",
            "2m",
            "/data/old cache/",
        ]


class TestCheckWorkingDirectory:
    """Tests for check_working_directory."""

    def test_root_cwd_rejected(self) -> None:
        """Running from / is fatal."""
        with pytest.raises(RootCwdError, match="root directory"):
            check_working_directory(Path("/"))

    def test_other_cwd_accepted(self, tmp_path: Path) -> None:
        """Any other directory is fine."""
        check_working_directory(tmp_path)


class TestCheckPreconditions:
    """Tests for check_preconditions."""

    @patch("nukedir.core.privileges.check_working_directory")
    @patch("nukedir.core.privileges.is_root", return_value=True)
    def test_root_continues(self, mock_root: MagicMock, mock_cwd: MagicMock) -> None:
        """As root, the process continues and the cwd is checked."""
        assert check_preconditions(["/data/x"]) is None
        mock_cwd.assert_called_once_with()

    @patch("nukedir.core.privileges.run_interactive", return_value=3)
    @patch("nukedir.core.privileges.can_sudo_unattended", return_value=True)
    @patch("nukedir.core.privileges.is_root", return_value=False)
    def test_elevates_and_returns_child_status(
        self, mock_root: MagicMock, mock_sudo: MagicMock, mock_run: MagicMock
    ) -> None:
        """Without root but with sudo, the child's status is returned."""
        assert check_preconditions(["-N", "/data/x"]) == 3

        command = mock_run.call_args[0][0]
        assert command[:3] == ["sudo", "-n", "--"]
        assert command[-2:] == ["-N", "/data/x"]

    @patch("nukedir.core.privileges.run_interactive", return_value=-15)
    @patch("nukedir.core.privileges.can_sudo_unattended", return_value=True)
    @patch("nukedir.core.privileges.is_root", return_value=False)
    def test_child_killed_by_signal(
        self, mock_root: MagicMock, mock_sudo: MagicMock, mock_run: MagicMock
    ) -> None:
        """A child terminated by SIGTERM is reported as status 143."""
        assert check_preconditions(["-N", "/data/x"]) == 143

    @patch("nukedir.core.privileges.can_sudo_unattended", return_value=False)
    @patch("nukedir.core.privileges.is_root", return_value=False)
    def test_no_privileges_is_fatal(self, mock_root: MagicMock, mock_sudo: MagicMock) -> None:
        """Without root or passwordless sudo the run fails with exit code 1."""
        with pytest.raises(PrivilegeError) as exc_info:
            check_preconditions([])
        assert exc_info.value.exit_code == 1
