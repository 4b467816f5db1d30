"""Unit tests for nukedir path lookups."""

from pathlib import Path

import pytest
from nukedir.core.paths import APP_NAME, get_config_dir, get_user_theme_path


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Without XDG_CONFIG_HOME the directory lives under ~/.config."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / ".config" / APP_NAME

    def test_xdg_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """XDG_CONFIG_HOME takes precedence."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        assert get_config_dir() == tmp_path / "xdg" / APP_NAME

    def test_empty_xdg_ignored(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", "")
        monkeypatch.setenv("HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / ".config" / APP_NAME


def test_user_theme_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """The theme override sits in the config directory and is not created."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    path = get_user_theme_path()

    assert path == tmp_path / APP_NAME / "theme.toml"
    assert not path.parent.exists()
