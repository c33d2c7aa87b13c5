"""Schema inspection commands for the LSR CLI."""

from typing import Any, Dict, List

import click

from ...errors import InsufficientSchemasError
from ...registry import Registry
from ...repo import RepoView
from ..formatters import (
    create_console,
    format_enum_json,
    format_fields_table,
    format_json,
    format_schemas_list_json,
    format_schemas_table,
    format_values_table,
)
from ..utils import ExitCode, handle_error, registry_options


def _repo(registry: Registry, view: str) -> RepoView:
    return registry.original if view == "original" else registry.llm


@click.group()
def schemas() -> None:
    """Inspect the schemas held by a registry."""
    pass


@schemas.command("list")
@click.pass_context
@registry_options
def list_schemas(ctx: click.Context, registry: Registry, view: str) -> None:
    """List registered schemas with their field names.

    TARGET is 'package.module:attribute' naming a Registry instance.
    """
    try:
        repo = _repo(registry, view)
        rows: List[Dict[str, Any]] = [
            {"tag": tag, "name": schema.__name__, "fields": list(schema.model_fields)}
            for tag, schema in zip(repo.tags, repo.schemas)
        ]

        if ctx.obj["format"] == "json":
            format_json(format_schemas_list_json(view, rows))
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            format_schemas_table(view, rows, console)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@schemas.command()
@click.pass_context
@registry_options
@click.argument("tag")
def show(ctx: click.Context, registry: Registry, view: str, tag: str) -> None:
    """Show one schema: its JSON schema, or its fields as a table.

    TARGET is 'package.module:attribute' naming a Registry instance.
    """
    schema = _repo(registry, view).factory(tag)
    if schema is None:
        handle_error(click.ClickException(f"No schema registered under '{tag}' in {view}"), ExitCode.SCHEMA_NOT_FOUND)
        return

    try:
        if ctx.obj["format"] == "json":
            format_json(schema.model_json_schema())
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            format_fields_table(tag, schema, console)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@schemas.command()
@click.pass_context
@registry_options
def union(ctx: click.Context, registry: Registry, view: str) -> None:
    """Print the JSON schema of the discriminated union.

    TARGET is 'package.module:attribute' naming a Registry instance.
    """
    repo = _repo(registry, view)
    try:
        union_model = repo.union
    except InsufficientSchemasError as e:
        handle_error(e, ExitCode.INSUFFICIENT_SCHEMAS)
        return

    try:
        if ctx.obj["format"] == "json":
            format_json(union_model.model_json_schema())
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            format_values_table(f"Union variants ({view})", repo.tags, console)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@schemas.command("enum")
@click.pass_context
@registry_options
def enum_values(ctx: click.Context, registry: Registry, view: str) -> None:
    """Print the discriminator values of the enum.

    TARGET is 'package.module:attribute' naming a Registry instance.
    """
    try:
        values = [member.value for member in _repo(registry, view).enum]
    except InsufficientSchemasError as e:
        handle_error(e, ExitCode.INSUFFICIENT_SCHEMAS)
        return

    if ctx.obj["format"] == "json":
        format_json(format_enum_json(view, values))
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        format_values_table(f"Schema types ({view})", values, console)
