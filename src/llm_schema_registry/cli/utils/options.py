"""Common CLI options and decorators."""

from functools import wraps
from typing import Any, Callable, TypeVar, cast

import click

from ...registry import LLM_REPO, ORIGINAL_REPO
from .helpers import load_registry

F = TypeVar("F", bound=Callable[..., Any])


def view_option(func: F) -> F:
    """Add --view option to a command."""

    @click.option(
        "--view",
        type=click.Choice([ORIGINAL_REPO, LLM_REPO], case_sensitive=False),
        default=LLM_REPO,
        show_default=True,
        help="Which repository to inspect: schemas as authored, or the filtered LLM variants.",
    )
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        kwargs["view"] = kwargs["view"].lower()
        return func(*args, **kwargs)

    return cast(F, wrapper)


def target_argument(func: F) -> F:
    """Add the TARGET argument and resolve it to a Registry.

    The wrapped command receives a ``registry`` keyword instead of ``target``.
    """

    @click.argument("target")
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        kwargs["registry"] = load_registry(kwargs.pop("target"))
        return func(*args, **kwargs)

    return cast(F, wrapper)


def registry_options(func: F) -> F:
    """Add TARGET and --view to a command."""
    func = view_option(func)
    func = target_argument(func)
    return func
