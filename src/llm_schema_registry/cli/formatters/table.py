"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, List, Optional, TextIO, Type

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    # Let Rich use the actual terminal width to avoid truncating headers
    return Console(file=output, no_color=no_color)


def _type_name(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def format_schemas_table(view: str, rows: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """Format a schema listing as a Rich table.

    Args:
        view: Repository name, used in the title
        rows: One entry per schema with ``tag``, ``name`` and ``fields``
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title=f"Schemas ({view})", show_header=True, header_style="bold magenta")
    table.add_column("Tag", style="cyan", no_wrap=True)
    table.add_column("Model", no_wrap=True)
    table.add_column("Fields")

    for row in rows:
        table.add_row(row["tag"], row["name"], ", ".join(row["fields"]))

    console.print(table)
    console.print(f"\n[dim]Total schemas: {len(rows)}[/dim]")


def format_fields_table(tag: str, schema: Type[BaseModel], console: Optional[Console] = None) -> None:
    """Format the fields of one schema as a Rich table.

    Args:
        tag: Discriminator value, used in the title
        schema: Pydantic model class to describe
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title=f"{schema.__name__} ({tag})", show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Required", justify="center", no_wrap=True)
    table.add_column("Description")

    for key, field in schema.model_fields.items():
        table.add_row(
            key,
            _type_name(field.annotation),
            "✓" if field.is_required() else "✗",
            field.description or "",
        )

    console.print(table)


def format_values_table(title: str, values: List[str], console: Optional[Console] = None) -> None:
    """Format a list of values as a single-column Rich table."""
    if console is None:
        console = create_console()

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Value", style="cyan", no_wrap=True)
    for value in values:
        table.add_row(value)

    console.print(table)


def format_config_paths_table(
    path: Optional[str], source: str, env_vars: Dict[str, Optional[str]], console: Optional[Console] = None
) -> None:
    """Format resolved configuration paths as a Rich table."""
    if console is None:
        console = create_console()

    table = Table(title="Filter Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Filters file", path or "[dim]none[/dim]")
    table.add_row("Source", source)
    for name, value in sorted(env_vars.items()):
        table.add_row(name, value if value is not None else "[dim]not set[/dim]")

    console.print(table)
