"""Field filtering and normalization for LLM-facing schemas.

Structured-output generators cannot reliably omit fields or rely on
server-side defaults, so the schemas handed to them are derived from the
originals by:

1. dropping every field that a blacklist predicate flags, and
2. making every surviving field required: ``Optional[...]`` members and
   defaults are stripped until neither remains.

The ``type`` discriminator is never filtered or normalized. The original
model class is never modified; a new class is built with ``create_model``.

Typical usage:

    from llm_schema_registry.filters import apply_filter, exclude_keys

    LLMUser = apply_filter(User, [exclude_keys("id", "created_at")])
"""

import re
import types
from copy import copy
from typing import (
    Annotated,
    Any,
    Callable,
    Dict,
    List,
    Sequence,
    Type,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel, Field, create_model
from pydantic.fields import FieldInfo

from .logging import LogEvent, log_debug
from .repo import DISCRIMINATOR_FIELD, get_discriminator

# Returns True when the field should be excluded.
SchemaFilter = Callable[[str, FieldInfo], bool]

_NONE_TYPE = type(None)

# FieldInfo attributes that describe a field rather than its optionality
_CARRIED_ATTRIBUTES = (
    "alias",
    "title",
    "description",
    "examples",
    "json_schema_extra",
    "discriminator",
)


def _carried_attributes(field: FieldInfo) -> Dict[str, Any]:
    return {name: getattr(field, name) for name in _CARRIED_ATTRIBUTES if getattr(field, name, None) is not None}


def _is_union(annotation: Any) -> bool:
    return get_origin(annotation) in (Union, types.UnionType)


def _strip_annotation(annotation: Any) -> Any:
    """Remove ``None`` union members from an annotation, through Annotated layers."""
    if get_origin(annotation) is Annotated:
        inner, *metadata = get_args(annotation)
        stripped_metadata: List[Any] = []
        for item in metadata:
            if isinstance(item, FieldInfo):
                # Rebuilt without default or default_factory
                stripped_metadata.append(Field(**_carried_attributes(item)))
                stripped_metadata.extend(item.metadata)
            else:
                stripped_metadata.append(item)
        return Annotated[(_strip_annotation(inner), *stripped_metadata)]

    if _is_union(annotation):
        members = get_args(annotation)
        required = [member for member in members if member is not _NONE_TYPE]
        if required and len(required) < len(members):
            inner = required[0] if len(required) == 1 else Union[tuple(required)]
            return _strip_annotation(inner)

    return annotation


def strip_optional_and_default(field: FieldInfo) -> FieldInfo:
    """Return a required copy of ``field`` without Optional or default wrapping.

    Chains such as ``Optional[Annotated[Optional[int], Field(ge=0)]] = None``
    unwrap to a required ``int`` that keeps ``ge=0``. Constraints, description, title, alias,
    examples and ``json_schema_extra`` are preserved. The operation is
    idempotent.

    Args:
        field: Field definition taken from ``Model.model_fields``

    Returns:
        A new, required FieldInfo
    """
    annotation = _strip_annotation(field.annotation)
    if field.metadata:
        annotation = Annotated[(annotation, *field.metadata)]
    return FieldInfo.from_annotated_attribute(annotation, Field(**_carried_attributes(field)))


def apply_filter(schema: Type[BaseModel], predicates: Sequence[SchemaFilter]) -> Type[BaseModel]:
    """Derive the LLM-facing variant of a tagged schema.

    A field is excluded when at least one predicate returns True for
    ``(key, field)``. Surviving fields are normalized with
    :func:`strip_optional_and_default`. The discriminator comes first and is
    kept as declared, even if a predicate matches it; when everything else is
    excluded the result holds only the discriminator.

    Args:
        schema: Tagged pydantic model class
        predicates: Blacklist predicates, evaluated in order

    Returns:
        A new pydantic model class with the original's name, docstring and
        model_config

    Raises:
        MissingDiscriminatorError: If ``schema`` has no usable discriminator
    """
    tag = get_discriminator(schema)
    source_fields = schema.model_fields

    discriminator = source_fields[DISCRIMINATOR_FIELD]
    fields: Dict[str, Any] = {DISCRIMINATOR_FIELD: (discriminator.annotation, copy(discriminator))}
    excluded: List[str] = []

    for key, field in source_fields.items():
        if key == DISCRIMINATOR_FIELD:
            continue
        if any(predicate(key, field) for predicate in predicates):
            excluded.append(key)
            continue
        normalized = strip_optional_and_default(field)
        fields[key] = (normalized.annotation, normalized)

    log_debug(
        LogEvent.SCHEMA_FILTER,
        f"Derived filtered schema for '{tag}'",
        tag=tag,
        excluded=excluded,
        kept=[key for key in fields if key != DISCRIMINATOR_FIELD],
    )

    return create_model(
        schema.__name__,
        __config__=dict(schema.model_config),  # type: ignore[arg-type]
        __doc__=schema.__doc__,
        __module__=schema.__module__,
        **fields,
    )


def exclude_keys(*keys: str) -> SchemaFilter:
    """Build a filter that excludes fields by exact name."""
    blocked = frozenset(keys)

    def _filter(key: str, field: FieldInfo) -> bool:
        return key in blocked

    return _filter


def exclude_pattern(pattern: str) -> SchemaFilter:
    """Build a filter that excludes fields whose name matches ``pattern``.

    The pattern is applied with :func:`re.search`, so anchor it to match
    prefixes or whole names.
    """
    compiled = re.compile(pattern)

    def _filter(key: str, field: FieldInfo) -> bool:
        return compiled.search(key) is not None

    return _filter


def exclude_marked(marker: str = "llm_exclude") -> SchemaFilter:
    """Build a filter that excludes fields flagged in ``json_schema_extra``.

    Example:
        >>> class Doc(BaseModel):
        ...     type: Literal["doc"]
        ...     etag: str = Field(json_schema_extra={"llm_exclude": True})
    """

    def _filter(key: str, field: FieldInfo) -> bool:
        extra = field.json_schema_extra
        return isinstance(extra, dict) and bool(extra.get(marker))

    return _filter


def exclude_optional() -> SchemaFilter:
    """Build a filter that excludes fields that are optional or defaulted."""

    def _filter(key: str, field: FieldInfo) -> bool:
        return not field.is_required()

    return _filter
