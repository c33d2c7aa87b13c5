"""Registry of tagged pydantic schemas with LLM-facing variants.

This package keeps every registered schema in two views: the original model
as authored, and a derived model with blacklisted fields removed and all
remaining fields made required, suitable for structured-output generation.
Both views expose a discriminated union over the ``type`` field, a string
enum of the registered tags, and lookup by tag.
"""

# Version of the package
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

try:
    __version__ = _version("llm-schema-registry")
except PackageNotFoundError:
    # Running from a source checkout without installation
    __version__ = "0.0.0"

# Import main components for easier access
from .errors import (
    ConfigFileNotFoundError,
    ConfigurationError,
    InsufficientSchemasError,
    InvalidConfigFormatError,
    MissingDiscriminatorError,
    SchemaRegistryError,
)
from .filters import (
    SchemaFilter,
    apply_filter,
    exclude_keys,
    exclude_marked,
    exclude_optional,
    exclude_pattern,
    strip_optional_and_default,
)
from .registry import (
    Registry,
    RegistryConfig,
    create_registry,
    get_registry,
)
from .repo import (
    DISCRIMINATOR_FIELD,
    RepoView,
    SchemaRepo,
    get_discriminator,
)

# Define public API
__all__ = [
    # Core registry
    "Registry",
    "RegistryConfig",
    "create_registry",
    "get_registry",
    # Repositories
    "SchemaRepo",
    "RepoView",
    "DISCRIMINATOR_FIELD",
    "get_discriminator",
    # Filters
    "SchemaFilter",
    "apply_filter",
    "strip_optional_and_default",
    "exclude_keys",
    "exclude_pattern",
    "exclude_marked",
    "exclude_optional",
    # Errors
    "SchemaRegistryError",
    "MissingDiscriminatorError",
    "InsufficientSchemasError",
    "ConfigurationError",
    "ConfigFileNotFoundError",
    "InvalidConfigFormatError",
]
