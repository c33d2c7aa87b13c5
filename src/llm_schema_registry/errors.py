"""Error types for the LLM schema registry.

This module defines the error types raised by the registry, its schema
repositories and its configuration loading.
"""

from typing import Optional


class SchemaRegistryError(Exception):
    """Base class for all registry-related errors.

    This is the parent class for all registry-specific exceptions.
    """

    pass


class MissingDiscriminatorError(SchemaRegistryError):
    """Raised when a schema lacks a literal-valued ``type`` discriminator.

    The ``type`` field must be annotated as ``Literal["<tag>"]`` with exactly
    one non-empty string value.

    Examples:
        >>> try:
        ...     registry.register(UntaggedModel)
        ... except MissingDiscriminatorError as e:
        ...     print(f"Cannot register {e.schema_name}")
    """

    def __init__(self, message: str, schema_name: Optional[str] = None) -> None:
        """Initialize missing discriminator error.

        Args:
            message: Error message
            schema_name: Name of the offending schema, if it has one
        """
        super().__init__(message)
        self.message = message
        self.schema_name = schema_name


class InsufficientSchemasError(SchemaRegistryError):
    """Raised when a union or enum is requested from too few schemas.

    Examples:
        >>> try:
        ...     registry.llm.union
        ... except InsufficientSchemasError as e:
        ...     print(f"Only {e.count} of {e.required} schemas registered")
    """

    def __init__(self, message: str, count: int, required: int = 2) -> None:
        """Initialize insufficient schemas error.

        Args:
            message: Error message
            count: Number of schemas currently stored
            required: Minimum number of schemas needed
        """
        super().__init__(message)
        self.message = message
        self.count = count
        self.required = required


class ConfigurationError(SchemaRegistryError):
    """Base class for configuration-related errors.

    This is raised for errors related to loading or parsing the filter
    configuration file.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            path: Optional path to the configuration file that caused the error
        """
        super().__init__(message)
        self.message = message
        self.path = path


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when an explicitly configured filter file does not exist.

    Examples:
        >>> try:
        ...     Registry(RegistryConfig(filters_path="/missing/filters.yml"))
        ... except ConfigFileNotFoundError as e:
        ...     print(f"Config file not found: {e.path}")
    """

    pass


class InvalidConfigFormatError(ConfigurationError):
    """Raised when a filter file cannot be parsed or has the wrong shape."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        expected_type: str = "dict",
    ) -> None:
        """Initialize invalid format error.

        Args:
            message: Error message
            path: Optional path to the configuration file
            expected_type: Expected type of the configuration
        """
        super().__init__(message, path)
        self.expected_type = expected_type
