"""Keyed schema storage with derived union and enum views.

A :class:`SchemaRepo` maps discriminator values to pydantic model classes and
builds, on every access, a discriminated union over the ``type`` field and a
string enum of the stored tags. :class:`RepoView` is the read-only face of a
repository handed out by the registry.
"""

import re
from enum import Enum
from typing import Annotated, Any, Dict, Iterable, Iterator, List, Literal, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel, Field, RootModel

from .errors import InsufficientSchemasError, MissingDiscriminatorError
from .logging import LogEvent, log_debug

DISCRIMINATOR_FIELD = "type"

# A discriminated union of one variant is degenerate.
MIN_VARIANTS = 2


def _member_names(tags: Iterable[str]) -> List[str]:
    """Derive distinct upper-case enum member names from discriminator values.

    Tags are arbitrary strings, so names are sanitised to identifiers that are
    neither private nor reserved by ``Enum``; the tag itself stays the value.
    """
    names: List[str] = []
    for index, tag in enumerate(tags):
        name = re.sub(r"\W+", "_", tag).strip("_").upper()
        if not name or name[0].isdigit():
            name = f"V{index}_{name}" if name else f"V{index}"
        while name in names:
            name = f"{name}_{index}"
        names.append(name)
    return names


def get_discriminator(schema: Any) -> str:
    """Return the discriminator value of a tagged schema.

    Args:
        schema: A pydantic model class with a ``type: Literal["<tag>"]`` field

    Returns:
        The literal tag value

    Raises:
        MissingDiscriminatorError: If ``type`` is absent, is not a literal of
            exactly one value, or that value is not a non-empty string
    """
    name = getattr(schema, "__name__", None)
    fields = getattr(schema, "model_fields", None)
    if not isinstance(fields, dict) or DISCRIMINATOR_FIELD not in fields:
        raise MissingDiscriminatorError(
            f"Schema {name!r} is missing a literal-valued type discriminator",
            schema_name=name,
        )

    annotation = fields[DISCRIMINATOR_FIELD].annotation
    values = get_args(annotation) if get_origin(annotation) is Literal else ()
    if len(values) != 1 or not isinstance(values[0], str) or not values[0]:
        raise MissingDiscriminatorError(
            f"Schema {name!r} is missing a literal-valued type discriminator "
            f"(found {annotation!r})",
            schema_name=name,
        )
    return values[0]


class SchemaRepo:
    """Keyed store of tagged schemas for one view of the registry."""

    def __init__(self, name: str = "repo") -> None:
        """Initialize an empty repository.

        Args:
            name: Label used for the generated union and enum types and in logs
        """
        self.name = name
        self._schemas: Dict[str, Type[BaseModel]] = {}

    def add(self, schema: Type[BaseModel]) -> None:
        """Insert a schema under its discriminator, replacing any previous one.

        Raises:
            MissingDiscriminatorError: If the schema has no usable discriminator
        """
        tag = get_discriminator(schema)
        replaced = tag in self._schemas
        self._schemas[tag] = schema
        log_debug(
            LogEvent.SCHEMA_REPO,
            f"Stored schema '{tag}' in {self.name} repo",
            repo=self.name,
            tag=tag,
            replaced=replaced,
        )

    def remove(self, tag: str) -> Optional[Type[BaseModel]]:
        """Remove and return the schema stored under ``tag``, if any."""
        schema = self._schemas.pop(tag, None)
        if schema is not None:
            log_debug(
                LogEvent.SCHEMA_REPO,
                f"Removed schema '{tag}' from {self.name} repo",
                repo=self.name,
                tag=tag,
            )
        return schema

    @property
    def schemas(self) -> List[Type[BaseModel]]:
        """Snapshot of the stored schemas in insertion order."""
        return list(self._schemas.values())

    @property
    def tags(self) -> List[str]:
        """Snapshot of the stored discriminator values in insertion order."""
        return list(self._schemas.keys())

    def factory(self, tag: str) -> Optional[Type[BaseModel]]:
        """Return the schema registered under ``tag``, or None."""
        return self._schemas.get(tag)

    @property
    def union(self) -> Type[RootModel]:
        """Discriminated union over ``type`` of all stored schemas.

        Rebuilt on every access. Validate with ``union.model_validate(data)``;
        the matched variant instance is available as ``.root``.

        Raises:
            InsufficientSchemasError: If fewer than two schemas are stored
        """
        self._require_variants("union")
        members = tuple(self._schemas.values())
        return RootModel[Annotated[Union[members], Field(discriminator=DISCRIMINATOR_FIELD)]]

    @property
    def enum(self) -> Type[Enum]:
        """String enum of the stored discriminator values, in insertion order.

        Raises:
            InsufficientSchemasError: If fewer than two schemas are stored
        """
        self._require_variants("enum")
        return Enum(  # type: ignore[return-value]
            f"{self.name.title()}SchemaType",
            list(zip(_member_names(self._schemas), self._schemas)),
            type=str,
        )

    def _require_variants(self, view: str) -> None:
        count = len(self._schemas)
        if count < MIN_VARIANTS:
            raise InsufficientSchemasError(
                f"Cannot build {view} for {self.name} repo: at least {MIN_VARIANTS} "
                f"schemas are needed, {count} registered",
                count=count,
                required=MIN_VARIANTS,
            )

    def __len__(self) -> int:
        return len(self._schemas)

    def __contains__(self, tag: object) -> bool:
        return tag in self._schemas

    def __iter__(self) -> Iterator[Type[BaseModel]]:
        return iter(self.schemas)

    def __repr__(self) -> str:
        return f"SchemaRepo(name={self.name!r}, tags={self.tags!r})"


class RepoView:
    """Read-only view of a :class:`SchemaRepo`.

    Exposes the derived views and lookups but none of the mutating methods;
    schemas enter a repository only through :meth:`Registry.register`.
    """

    def __init__(self, repo: SchemaRepo) -> None:
        self._repo = repo

    @property
    def name(self) -> str:
        return self._repo.name

    @property
    def schemas(self) -> List[Type[BaseModel]]:
        """Snapshot of the stored schemas in insertion order."""
        return self._repo.schemas

    @property
    def tags(self) -> List[str]:
        """Snapshot of the stored discriminator values in insertion order."""
        return self._repo.tags

    @property
    def union(self) -> Type[RootModel]:
        """Discriminated union of all stored schemas (see SchemaRepo.union)."""
        return self._repo.union

    @property
    def enum(self) -> Type[Enum]:
        """String enum of all stored tags (see SchemaRepo.enum)."""
        return self._repo.enum

    def factory(self, tag: str) -> Optional[Type[BaseModel]]:
        """Return the schema registered under ``tag``, or None."""
        return self._repo.factory(tag)

    def __len__(self) -> int:
        return len(self._repo)

    def __contains__(self, tag: object) -> bool:
        return tag in self._repo

    def __iter__(self) -> Iterator[Type[BaseModel]]:
        return iter(self._repo)

    def __repr__(self) -> str:
        return f"RepoView(name={self.name!r}, tags={self.tags!r})"
