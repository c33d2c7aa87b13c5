"""CLI commands package."""

# Import all command modules to make them available
from . import config, schemas

__all__ = ["config", "schemas"]
