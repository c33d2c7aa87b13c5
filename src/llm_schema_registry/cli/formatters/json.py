"""JSON output formatter for CLI."""

import json
import sys
from enum import Enum as _Enum
from typing import Any, Dict, List, Optional, TextIO


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - Enum -> value (fallback to name)
    - type -> qualified name
    - Fallback -> str(obj)
    """
    if isinstance(obj, _Enum):
        return getattr(obj, "value", obj.name)
    if isinstance(obj, type):
        return obj.__qualname__
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        default=_default_serializer,
    )
    output.write("\n")


def format_schemas_list_json(view: str, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Format a schema listing for JSON output.

    Args:
        view: Repository name
        rows: One entry per schema with ``tag``, ``name`` and ``fields``

    Returns:
        Formatted data structure
    """
    return {"view": view, "schemas": rows, "count": len(rows)}


def format_enum_json(view: str, values: List[str]) -> Dict[str, Any]:
    """Format enum values for JSON output."""
    return {"view": view, "values": values}


def format_config_paths_json(path: Optional[str], source: str, env_vars: Dict[str, Optional[str]]) -> Dict[str, Any]:
    """Format resolved configuration paths for JSON output."""
    return {"filters_path": path, "source": source, "environment": env_vars}
