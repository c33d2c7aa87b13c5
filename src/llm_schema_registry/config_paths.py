"""Configuration path handling for the schema registry.

This module implements path resolution for the filter configuration file,
following the XDG Base Directory Specification for user-specific files.
"""

import os
from pathlib import Path
from typing import Optional, Tuple

import platformdirs

# Application name used for directory paths
APP_NAME = "llm-schema-registry"

# Environment variable names
ENV_FILTERS_PATH = "LSR_FILTERS_PATH"

# Default filenames
FILTERS_FILENAME = "filters.yml"

SOURCE_EXPLICIT = "explicit"
SOURCE_ENV = "env"
SOURCE_USER_CONFIG = "user_config"
SOURCE_NONE = "none"


def get_user_config_dir() -> Path:
    """Get the path to the user's config directory for this application."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_user_filters_path() -> Path:
    """Get the path of the filter file in the user config directory."""
    return get_user_config_dir() / FILTERS_FILENAME


def resolve_filters_path(explicit: Optional[str] = None) -> Tuple[Optional[str], str]:
    """Resolve the filter configuration file and report where it came from.

    Precedence: explicit argument, then the ``LSR_FILTERS_PATH`` environment
    variable, then ``filters.yml`` in the user config directory when that file
    exists.

    Args:
        explicit: Path passed in code, if any

    Returns:
        Tuple of (path or None, source label)
    """
    if explicit:
        return explicit, SOURCE_EXPLICIT

    env_path = os.getenv(ENV_FILTERS_PATH)
    if env_path:
        return env_path, SOURCE_ENV

    user_file = get_user_filters_path()
    if user_file.is_file():
        return str(user_file), SOURCE_USER_CONFIG

    return None, SOURCE_NONE
