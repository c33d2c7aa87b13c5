"""Main CLI application for the LLM Schema Registry."""

import logging
from typing import Optional

import click
import rich_click as rich_click

from .utils import resolve_format, resolve_log_level

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


@click.group(invoke_without_command=True)
@click.option(
    "--format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option("--version", is_flag=True, is_eager=True, help="Print CLI and library version information.")
@click.pass_context
def app(
    ctx: click.Context,
    format: Optional[str] = None,
    verbose: int = 0,
    quiet: int = 0,
    debug: bool = False,
    no_color: bool = False,
    version: bool = False,
) -> None:
    """LLM Schema Registry CLI - inspect registered schemas and their LLM variants.

    Commands take a TARGET of the form 'package.module:attribute' that names a
    Registry instance, or a function returning one.

    Examples:
      # List the LLM-facing schemas of a registry
      lsr schemas list myapp.schemas:registry

      # JSON schema of the union handed to the model
      lsr --format json schemas union myapp.schemas:registry --view llm

      # Where the filter file is read from
      lsr config paths
    """
    if version:
        from .. import __version__

        click.echo(f"LSR CLI version: {__version__}")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()

    log_level = resolve_log_level(verbose, quiet, debug)
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("llm_schema_registry").setLevel(log_level)

    # Store global options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "format": resolve_format(format),
            "format_explicit": format is not None,
            "verbose": verbose,
            "quiet": quiet,
            "debug": debug,
            "no_color": no_color,
            "log_level": logging.getLevelName(log_level),
        }
    )


# Import and register subcommands (at module top is preferred, but we place
# here after the group is built to avoid circular import issues in runtime.)
from .commands import config, schemas  # noqa: E402

app.add_command(schemas.schemas)
app.add_command(config.config)


if __name__ == "__main__":
    app()
