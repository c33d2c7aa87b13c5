"""Tests for the config_paths module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from llm_schema_registry.config_paths import (
    APP_NAME,
    FILTERS_FILENAME,
    get_user_config_dir,
    get_user_filters_path,
    resolve_filters_path,
)


def test_user_config_dir_contains_app_name() -> None:
    """Test that the user config directory contains the app name."""
    config_dir = get_user_config_dir()
    assert APP_NAME in str(config_dir)


def test_user_config_dir_uses_platformdirs(tmp_path: Path) -> None:
    """Test that the user config directory comes from platformdirs."""
    with patch("llm_schema_registry.config_paths.platformdirs.user_config_dir") as mock_user_config_dir:
        mock_user_config_dir.return_value = str(tmp_path / APP_NAME)

        assert get_user_config_dir() == tmp_path / APP_NAME
        assert get_user_filters_path() == tmp_path / APP_NAME / FILTERS_FILENAME
        mock_user_config_dir.assert_called_with(APP_NAME)


def test_nothing_configured() -> None:
    """Without explicit path, env var or user file there is no filter file."""
    assert resolve_filters_path() == (None, "none")


def test_explicit_path_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that an explicit path takes precedence over the environment."""
    monkeypatch.setenv("LSR_FILTERS_PATH", "/env/filters.yml")

    assert resolve_filters_path("/explicit/filters.yml") == ("/explicit/filters.yml", "explicit")


def test_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that LSR_FILTERS_PATH is honored."""
    monkeypatch.setenv("LSR_FILTERS_PATH", "/env/filters.yml")

    assert resolve_filters_path() == ("/env/filters.yml", "env")


def test_user_config_file_only_when_present(isolated_config: Path) -> None:
    """The user config file is used only if it exists."""
    assert resolve_filters_path() == (None, "none")

    isolated_config.mkdir(parents=True)
    user_file = isolated_config / FILTERS_FILENAME
    user_file.write_text("exclude_keys: [id]\n")

    assert resolve_filters_path() == (str(user_file), "user_config")


def test_env_var_beats_user_config_file(isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the environment variable wins over the user config file."""
    isolated_config.mkdir(parents=True)
    (isolated_config / FILTERS_FILENAME).write_text("{}\n")
    monkeypatch.setenv("LSR_FILTERS_PATH", "/env/filters.yml")

    assert resolve_filters_path() == ("/env/filters.yml", "env")
