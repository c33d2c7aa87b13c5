"""Shared fixtures for the schema registry tests."""

from pathlib import Path
from typing import Generator, Literal, Optional, Type

import pytest
from pydantic import BaseModel, Field

from llm_schema_registry import Registry


class User(BaseModel):
    """A user account."""

    type: Literal["user"]
    id: str
    name: str = Field(description="Display name")
    age: Optional[int] = None


class Post(BaseModel):
    """A blog post."""

    type: Literal["post"]
    id: str
    title: str
    draft: bool = False


class Comment(BaseModel):
    type: Literal["comment"]
    id: str
    body: str = Field(min_length=1)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Keep tests away from the real user config and environment.

    Returns:
        The temporary directory standing in for the user config directory
    """
    config_dir = tmp_path / "user-config"
    monkeypatch.delenv("LSR_FILTERS_PATH", raising=False)
    monkeypatch.setattr(
        "llm_schema_registry.config_paths.platformdirs.user_config_dir",
        lambda app_name: str(config_dir / app_name),
    )
    Registry.cleanup()
    yield config_dir / "llm-schema-registry"
    Registry.cleanup()


@pytest.fixture
def user_schema() -> Type[BaseModel]:
    return User


@pytest.fixture
def post_schema() -> Type[BaseModel]:
    return Post


@pytest.fixture
def comment_schema() -> Type[BaseModel]:
    return Comment


@pytest.fixture
def registry() -> Registry:
    """Create a registry with no global filters."""
    return Registry()
