"""Tests for RegistryConfig and filter file loading."""

from pathlib import Path
from typing import Any, Dict, Literal, Optional

import pytest
import yaml
from pydantic import BaseModel, Field

from llm_schema_registry import Registry, RegistryConfig, create_registry, exclude_keys, get_registry
from llm_schema_registry.errors import ConfigFileNotFoundError, InvalidConfigFormatError


class Record(BaseModel):
    type: Literal["record"]
    id: str
    internal_ref: str
    secret: str = Field(json_schema_extra={"llm_exclude": True})
    note: Optional[str] = None
    title: str


def _write_filters(path: Path, content: Dict[str, Any]) -> str:
    with open(path, "w") as f:
        yaml.dump(content, f)
    return str(path)


def _llm_fields(registry: Registry) -> list:
    registry.register(Record)
    return list(registry.llm.factory("record").model_fields)


class TestRegistryConfig:
    """Tests for RegistryConfig defaults and path resolution."""

    def test_defaults(self) -> None:
        config = RegistryConfig()

        assert config.filters_path is None
        assert config.filters_source == "none"
        assert config.global_blacklist == []

    def test_explicit_path(self, tmp_path: Path) -> None:
        config = RegistryConfig(filters_path=str(tmp_path / "f.yml"))

        assert config.filters_path == str(tmp_path / "f.yml")
        assert config.filters_source == "explicit"

    def test_direct_config_ignores_environment(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Only an explicit path makes a directly built config read a file."""
        isolated_config.mkdir(parents=True)
        _write_filters(isolated_config / "filters.yml", {"exclude_keys": ["id"]})
        monkeypatch.setenv("LSR_FILTERS_PATH", str(isolated_config / "filters.yml"))

        config = RegistryConfig()
        assert config.filters_path is None
        assert config.filters_source == "none"

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LSR_FILTERS_PATH", str(tmp_path / "env.yml"))

        config = RegistryConfig.from_environment()
        assert config.filters_path == str(tmp_path / "env.yml")
        assert config.filters_source == "env"

    def test_explicit_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LSR_FILTERS_PATH", str(tmp_path / "env.yml"))

        config = RegistryConfig.from_environment(filters_path=str(tmp_path / "explicit.yml"))
        assert config.filters_source == "explicit"

    def test_user_config_file(self, isolated_config: Path) -> None:
        isolated_config.mkdir(parents=True)
        path = _write_filters(isolated_config / "filters.yml", {"exclude_keys": ["id"]})

        config = RegistryConfig.from_environment(global_blacklist=[exclude_keys("title")])
        assert config.filters_path == path
        assert config.filters_source == "user_config"
        assert len(config.global_blacklist) == 1
        assert _llm_fields(Registry(config)) == ["type", "internal_ref", "secret", "note"]


class TestDefaultFilters:
    """Which registries pick up a discovered filter file."""

    @pytest.fixture
    def user_filters(self, isolated_config: Path) -> str:
        isolated_config.mkdir(parents=True)
        return _write_filters(isolated_config / "filters.yml", {"exclude_keys": ["id"]})

    def test_create_registry_has_empty_global_blacklist(self, user_filters: str) -> None:
        registry = create_registry()

        assert registry.global_blacklist == ()
        assert "id" in _llm_fields(registry)

    def test_registry_ignores_env_var(self, user_filters: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LSR_FILTERS_PATH", user_filters)

        registry = Registry()
        assert registry.global_blacklist == ()
        assert registry.get_info()["filters_source"] == "none"

    def test_default_registry_discovers_file(self, user_filters: str) -> None:
        registry = get_registry()

        assert registry.get_info()["filters_path"] == user_filters
        assert len(registry.global_blacklist) == 1
        assert "id" not in _llm_fields(registry)


class TestFilterFile:
    """Tests for loading declarative filters from YAML."""

    def test_all_sections(self, tmp_path: Path) -> None:
        path = _write_filters(
            tmp_path / "filters.yml",
            {
                "exclude_keys": ["id"],
                "exclude_patterns": ["^internal_"],
                "exclude_marked": ["llm_exclude"],
                "exclude_optional": True,
            },
        )
        registry = Registry(RegistryConfig(filters_path=path))

        assert registry.config_result.success
        assert registry.config_result.skipped == []
        assert len(registry.global_blacklist) == 4
        assert _llm_fields(registry) == ["type", "title"]

    def test_code_filters_come_first(self, tmp_path: Path) -> None:
        path = _write_filters(tmp_path / "filters.yml", {"exclude_keys": ["id"]})
        code_filter = exclude_keys("title")

        registry = Registry(RegistryConfig(filters_path=path, global_blacklist=[code_filter]))

        assert registry.global_blacklist[0] is code_filter
        assert _llm_fields(registry) == ["type", "internal_ref", "secret", "note"]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "filters.yml"
        path.write_text("")

        registry = Registry(RegistryConfig(filters_path=str(path)))
        assert registry.config_result.success
        assert registry.global_blacklist == ()

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileNotFoundError) as exc_info:
            Registry(RegistryConfig(filters_path=str(tmp_path / "missing.yml")))
        assert exc_info.value.path == str(tmp_path / "missing.yml")

    def test_missing_env_file_is_not_fatal(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LSR_FILTERS_PATH", str(tmp_path / "missing.yml"))

        registry = Registry(RegistryConfig.from_environment())
        assert not registry.config_result.success
        assert registry.global_blacklist == ()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "filters.yml"
        path.write_text("exclude_keys: [id\n")

        with pytest.raises(InvalidConfigFormatError):
            Registry(RegistryConfig(filters_path=str(path)))

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = _write_filters(tmp_path / "filters.yml", ["id"])  # type: ignore[arg-type]

        with pytest.raises(InvalidConfigFormatError) as exc_info:
            Registry(RegistryConfig(filters_path=path))
        assert exc_info.value.expected_type == "dict"

    def test_bad_entries_are_skipped(self, tmp_path: Path) -> None:
        path = _write_filters(
            tmp_path / "filters.yml",
            {
                "exclude_keys": ["id", 3, ""],
                "exclude_patterns": ["(unclosed", "^internal_"],
                "exclude_marked": "llm_exclude",
                "exclude_optional": "yes",
                "include_keys": ["title"],
            },
        )
        registry = Registry(RegistryConfig(filters_path=path))
        skipped = registry.config_result.skipped

        assert len(skipped) == 6
        assert any("include_keys" in reason for reason in skipped)
        assert any("(unclosed" in reason for reason in skipped)
        assert _llm_fields(registry) == ["type", "secret", "note", "title"]
