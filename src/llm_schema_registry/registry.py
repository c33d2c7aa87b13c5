"""Core registry functionality for tagged schemas and their LLM-facing variants.

This module provides the Registry class, which keeps two repositories in step:
``original`` holds every registered schema as authored, ``llm`` holds the
filtered, normalized variant derived from it.

Typical usage:

    from llm_schema_registry import create_registry, exclude_keys

    registry = create_registry(global_blacklist=[exclude_keys("id")])
    registry.register(User)
    registry.register(Post)

    response_format = registry.llm.union
    tags = [member.value for member in registry.llm.enum]

"""

import re
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Type

import yaml
from pydantic import BaseModel

from .config_paths import SOURCE_EXPLICIT, SOURCE_NONE, resolve_filters_path
from .config_result import ConfigResult
from .errors import ConfigFileNotFoundError, InvalidConfigFormatError
from .filters import (
    SchemaFilter,
    apply_filter,
    exclude_keys,
    exclude_marked,
    exclude_optional,
    exclude_pattern,
)
from .logging import LogEvent, log_debug, log_info, log_warning
from .repo import RepoView, SchemaRepo, get_discriminator

ORIGINAL_REPO = "original"
LLM_REPO = "llm"

# Sections understood in the filter configuration file
FILTER_SECTIONS = ("exclude_keys", "exclude_patterns", "exclude_marked", "exclude_optional")


class RegistryConfig:
    """Configuration for the schema registry."""

    def __init__(
        self,
        filters_path: Optional[str] = None,
        global_blacklist: Optional[Sequence[SchemaFilter]] = None,
    ):
        """Initialize registry configuration.

        Nothing is read from disk unless ``filters_path`` is given. Use
        :meth:`from_environment` to discover a filter file.

        Args:
            filters_path: Path to a YAML filter file
            global_blacklist: Filters applied to every registration, evaluated
                              before those loaded from the filter file.
        """
        self.filters_path = filters_path or None
        self.filters_source = SOURCE_EXPLICIT if self.filters_path else SOURCE_NONE
        self.global_blacklist: List[SchemaFilter] = list(global_blacklist or [])

    @classmethod
    def from_environment(
        cls,
        filters_path: Optional[str] = None,
        global_blacklist: Optional[Sequence[SchemaFilter]] = None,
    ) -> "RegistryConfig":
        """Build a configuration whose filter file is discovered.

        The file is taken from ``filters_path``, then the ``LSR_FILTERS_PATH``
        environment variable, then ``filters.yml`` in the user config
        directory when that file exists.
        """
        config = cls(global_blacklist=global_blacklist)
        config.filters_path, config.filters_source = resolve_filters_path(filters_path)
        return config


class Registry:
    """Registry of tagged schemas with an original and an LLM-facing view."""

    _default_instance: Optional["Registry"] = None
    _instance_lock = threading.RLock()

    @classmethod
    def get_default(cls) -> "Registry":
        """Get the default registry instance.

        Unlike a registry built directly, the default instance discovers its
        filter file through :meth:`RegistryConfig.from_environment`.

        Returns:
            The default Registry instance
        """
        with cls._instance_lock:
            if cls._default_instance is None:
                cls._default_instance = cls(RegistryConfig.from_environment())
            return cls._default_instance

    @staticmethod
    def cleanup() -> None:
        """Discard the default registry instance."""
        with Registry._instance_lock:
            Registry._default_instance = None

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        global_blacklist: Optional[Sequence[SchemaFilter]] = None,
    ):
        """Initialize a new registry instance.

        Args:
            config: Configuration for this registry instance. If None, default
                   configuration is used.
            global_blacklist: Filters applied to every registration, evaluated
                              before those from ``config``.

        Raises:
            ConfigFileNotFoundError: If an explicitly configured filter file
                does not exist
            InvalidConfigFormatError: If the filter file cannot be parsed
        """
        self.config = config or RegistryConfig()
        self._original = SchemaRepo(ORIGINAL_REPO)
        self._llm = SchemaRepo(LLM_REPO)

        self.config_result = self._load_filters()
        self._global_blacklist: Tuple[SchemaFilter, ...] = (
            tuple(global_blacklist or ())
            + tuple(self.config.global_blacklist)
            + tuple(self._filters_from_config(self.config_result))
        )

    def _load_filters(self) -> ConfigResult:
        """Load the filter configuration file, if one is configured."""
        path = self.config.filters_path
        source = self.config.filters_source
        if path is None:
            return ConfigResult(success=False, source=source)

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            if source == SOURCE_EXPLICIT:
                raise ConfigFileNotFoundError(f"Filter file not found: {path}", path=path) from e
            log_warning(
                LogEvent.CONFIGURATION,
                f"Filter file from {source} not found, continuing without it",
                path=path,
            )
            return ConfigResult(success=False, path=path, source=source)
        except yaml.YAMLError as e:
            raise InvalidConfigFormatError(f"Filter file is not valid YAML: {e}", path=path) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidConfigFormatError(
                f"Filter file must contain a mapping, got {type(data).__name__}",
                path=path,
            )

        log_info(LogEvent.CONFIGURATION, "Loaded filter configuration", path=path, source=source)
        return ConfigResult(success=True, data=data, path=path, source=source)

    def _filters_from_config(self, result: ConfigResult) -> List[SchemaFilter]:
        """Build predicates from the sections of a loaded filter file."""
        if not result.success or not result.data:
            return []

        filters: List[SchemaFilter] = []
        for section, value in result.data.items():
            if section not in FILTER_SECTIONS:
                self._skip(result, f"Unknown filter section '{section}'")
                continue

            if section == "exclude_optional":
                if not isinstance(value, bool):
                    self._skip(result, f"'{section}' must be true or false, got {value!r}")
                elif value:
                    filters.append(exclude_optional())
                continue

            if not isinstance(value, list):
                self._skip(result, f"'{section}' must be a list, got {type(value).__name__}")
                continue

            entries: List[str] = []
            for entry in value:
                if isinstance(entry, str) and entry:
                    entries.append(entry)
                else:
                    self._skip(result, f"Ignoring non-string entry {entry!r} in '{section}'")

            if section == "exclude_keys":
                if entries:
                    filters.append(exclude_keys(*entries))
            elif section == "exclude_patterns":
                for pattern in entries:
                    try:
                        filters.append(exclude_pattern(pattern))
                    except re.error as e:
                        self._skip(result, f"Invalid pattern {pattern!r} in '{section}': {e}")
            else:
                filters.extend(exclude_marked(marker) for marker in entries)

        return filters

    @staticmethod
    def _skip(result: ConfigResult, reason: str) -> None:
        result.skipped.append(reason)
        log_warning(LogEvent.CONFIGURATION, reason, path=result.path)

    @property
    def original(self) -> RepoView:
        """Read-only view of the schemas as registered."""
        return RepoView(self._original)

    @property
    def llm(self) -> RepoView:
        """Read-only view of the filtered, normalized schemas."""
        return RepoView(self._llm)

    @property
    def global_blacklist(self) -> Tuple[SchemaFilter, ...]:
        """Filters applied to every registration, in evaluation order."""
        return self._global_blacklist

    def register(
        self,
        schema: Type[BaseModel],
        local_blacklist: Optional[Sequence[SchemaFilter]] = None,
        *,
        ignore_llm: bool = False,
    ) -> None:
        """Register a tagged schema in both repositories.

        The schema is stored unmodified in ``original``. Unless ``ignore_llm``
        is set, a variant filtered with the global blacklist followed by
        ``local_blacklist`` is stored in ``llm`` under the same tag. A schema
        whose tag is already registered replaces the previous one.

        Args:
            schema: Pydantic model class with a ``type: Literal["<tag>"]`` field
            local_blacklist: Filters applied to this registration only
            ignore_llm: Skip the ``llm`` repository entirely

        Raises:
            MissingDiscriminatorError: If the schema has no usable discriminator;
                nothing is stored in that case
        """
        tag = get_discriminator(schema)

        derived: Optional[Type[BaseModel]] = None
        if not ignore_llm:
            predicates = list(self._global_blacklist) + list(local_blacklist or [])
            derived = apply_filter(schema, predicates)

        self._original.add(schema)
        if derived is not None:
            self._llm.add(derived)

        log_debug(
            LogEvent.SCHEMA_REGISTRY,
            f"Registered schema '{tag}'",
            tag=tag,
            schema=schema.__name__,
            ignore_llm=ignore_llm,
        )

    def register_many(
        self,
        schemas: Iterable[Type[BaseModel]],
        local_blacklist: Optional[Sequence[SchemaFilter]] = None,
        *,
        ignore_llm: bool = False,
    ) -> None:
        """Register several schemas with the same local filters and options.

        Every discriminator is checked before anything is stored, so a single
        untagged schema rejects the whole batch.

        Raises:
            MissingDiscriminatorError: If any schema has no usable discriminator
        """
        batch = list(schemas)
        for schema in batch:
            get_discriminator(schema)
        for schema in batch:
            self.register(schema, local_blacklist, ignore_llm=ignore_llm)

    def unregister(self, tag: str) -> Optional[Type[BaseModel]]:
        """Remove a tag from both repositories.

        Args:
            tag: Discriminator value to remove

        Returns:
            The schema previously stored in ``original``, or None
        """
        previous = self._original.remove(tag)
        self._llm.remove(tag)
        return previous

    def get_info(self) -> Dict[str, Any]:
        """Summarize configuration and contents for diagnostics."""
        return {
            "filters_path": self.config.filters_path,
            "filters_source": self.config.filters_source,
            "filters_loaded": self.config_result.success,
            "skipped_filter_entries": list(self.config_result.skipped),
            "global_filters": len(self._global_blacklist),
            ORIGINAL_REPO: self._original.tags,
            LLM_REPO: self._llm.tags,
        }

    def __repr__(self) -> str:
        return f"Registry(original={self._original.tags!r}, llm={self._llm.tags!r})"


def create_registry(
    global_blacklist: Optional[Sequence[SchemaFilter]] = None,
    config: Optional[RegistryConfig] = None,
) -> Registry:
    """Create a standalone registry.

    Args:
        global_blacklist: Filters applied to every registration, evaluated
            before any ``global_blacklist`` present in ``config``.
        config: Registry configuration; defaults to ``RegistryConfig()``, which
            reads no filter file

    Returns:
        A new, independent Registry
    """
    return Registry(config, global_blacklist=global_blacklist)


def get_registry() -> Registry:
    """Get the process-wide default registry.

    This is a convenience function for getting the registry instance.

    Returns:
        Registry: The default registry instance
    """
    return Registry.get_default()
