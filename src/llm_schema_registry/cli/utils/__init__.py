"""CLI utilities package."""

from .helpers import (
    ExitCode,
    get_lsr_env_vars,
    handle_error,
    load_registry,
    resolve_format,
    resolve_log_level,
)
from .options import (
    registry_options,
    target_argument,
    view_option,
)

__all__ = [
    "ExitCode",
    "resolve_format",
    "resolve_log_level",
    "handle_error",
    "load_registry",
    "get_lsr_env_vars",
    "view_option",
    "target_argument",
    "registry_options",
]
