"""CLI formatters package."""

from .json import (
    format_config_paths_json,
    format_enum_json,
    format_json,
    format_schemas_list_json,
)
from .table import (
    create_console,
    format_config_paths_table,
    format_fields_table,
    format_schemas_table,
    format_values_table,
)

__all__ = [
    "format_json",
    "format_schemas_list_json",
    "format_enum_json",
    "format_config_paths_json",
    "create_console",
    "format_schemas_table",
    "format_fields_table",
    "format_values_table",
    "format_config_paths_table",
]
