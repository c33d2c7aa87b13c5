"""Configuration inspection commands for the LSR CLI."""

import click

from ...config_paths import resolve_filters_path
from ..formatters import (
    create_console,
    format_config_paths_json,
    format_config_paths_table,
    format_json,
)
from ..utils import ExitCode, get_lsr_env_vars, handle_error


@click.group()
def config() -> None:
    """Inspect filter configuration."""
    pass


@config.command()
@click.pass_context
def paths(ctx: click.Context) -> None:
    """Show the filter file the default registry reads and where it came from."""
    try:
        path, source = resolve_filters_path()
        env_vars = get_lsr_env_vars()

        if ctx.obj["format"] == "json":
            format_json(format_config_paths_json(path, source, env_vars))
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            format_config_paths_table(path, source, env_vars, console)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)
