"""Configuration loading result object.

This module defines a standard result object for filter configuration loading.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ConfigResult:
    """Result of a filter configuration loading operation.

    Attributes:
        success: Whether a configuration file was read
        data: Parsed configuration data (if a file was read)
        path: Path to the configuration file (if applicable)
        source: Where the path came from (explicit, env, user_config, none)
        skipped: Descriptions of entries that were ignored while loading
    """

    success: bool
    data: Optional[Dict[str, Any]] = None
    path: Optional[str] = None
    source: str = "none"
    skipped: List[str] = field(default_factory=list)
