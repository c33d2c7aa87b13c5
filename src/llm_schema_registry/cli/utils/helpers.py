"""Helper functions for CLI operations."""

import importlib
import logging
import os
import sys
from typing import Dict, List, Optional

import click

from ...registry import Registry


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    SCHEMA_NOT_FOUND = 3
    INSUFFICIENT_SCHEMAS = 4


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    # Auto-detect based on TTY
    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def resolve_log_level(verbose: int = 0, quiet: int = 0, debug: bool = False) -> int:
    """Map verbosity flags to a logging level.

    Args:
        verbose: Number of ``-v`` flags
        quiet: Number of ``-q`` flags
        debug: Whether ``--debug`` was given

    Returns:
        A :mod:`logging` level
    """
    if debug:
        return logging.DEBUG
    if verbose > quiet:
        return logging.DEBUG if verbose - quiet >= 2 else logging.INFO
    if quiet > verbose:
        return logging.CRITICAL if quiet - verbose >= 2 else logging.ERROR
    return logging.WARNING


def handle_error(error: Exception, exit_code: int = ExitCode.GENERIC_ERROR) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use
    """
    click.echo(f"Error: {str(error)}", err=True)
    sys.exit(exit_code)


def load_registry(target: str) -> Registry:
    """Import a registry from a ``package.module:attribute`` reference.

    The attribute may be a :class:`Registry` or a zero-argument callable that
    returns one.

    Args:
        target: Import reference, e.g. ``myapp.schemas:registry``

    Returns:
        The referenced Registry

    Raises:
        click.BadParameter: If the reference is malformed, cannot be imported,
            or does not resolve to a Registry
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise click.BadParameter(f"Invalid target '{target}'. Expected 'package.module:attribute'.")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module '{module_name}': {e}") from e

    obj = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise click.BadParameter(f"Module '{module_name}' has no attribute '{attribute}'") from e

    if not isinstance(obj, Registry) and callable(obj):
        obj = obj()

    if not isinstance(obj, Registry):
        raise click.BadParameter(f"Target '{target}' is a {type(obj).__name__}, not a Registry")
    return obj


def get_lsr_env_vars() -> Dict[str, Optional[str]]:
    """Get all LSR_* environment variables.

    Returns:
        Dictionary of LSR environment variables and their values
    """
    lsr_vars: Dict[str, Optional[str]] = {}
    for key, value in os.environ.items():
        if key.startswith("LSR_"):
            lsr_vars[key] = value

    # Include commonly used variables even if not set
    common_vars: List[str] = ["LSR_FILTERS_PATH"]

    for var in common_vars:
        if var not in lsr_vars:
            lsr_vars[var] = None

    return lsr_vars
