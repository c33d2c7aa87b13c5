#!/usr/bin/env python3
"""Example of basic registry usage."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from llm_schema_registry import (
    InsufficientSchemasError,
    create_registry,
    exclude_keys,
    exclude_marked,
)


class User(BaseModel):
    """A person using the application."""

    type: Literal["user"]
    id: str
    name: str = Field(description="Display name")
    age: Optional[int] = None
    password_hash: str = Field("", json_schema_extra={"llm_exclude": True})


class Post(BaseModel):
    """A post written by a user."""

    type: Literal["post"]
    id: str
    title: str
    tags: List[str] = Field(default_factory=list)


def print_view(name, repo):
    """Print the schemas held by one view of the registry.

    Args:
        name: Label to print
        repo: Read-only repository view
    """
    print(f"{name}:")
    for tag, schema in zip(repo.tags, repo.schemas):
        fields = ", ".join(
            f"{key}{'' if field.is_required() else '?'}" for key, field in schema.model_fields.items()
        )
        print(f"  {tag}: {fields}")
    print()


def main():
    """Run the example."""
    # Server-generated ids and secrets never go to the model
    registry = create_registry(global_blacklist=[exclude_keys("id"), exclude_marked()])

    try:
        registry.llm.union
    except InsufficientSchemasError as e:
        print(f"Empty registry: {e}\n")

    registry.register(User)
    registry.register(Post, [exclude_keys("tags")])

    print_view("Original schemas", registry.original)
    print_view("LLM schemas", registry.llm)

    print(f"Schema types: {[member.value for member in registry.llm.enum]}")

    # Parse model output with the LLM union
    parsed = registry.llm.union.model_validate({"type": "user", "name": "Ada", "age": 36})
    print(f"Parsed: {parsed.root!r}")

    # Every remaining field is required in the LLM view
    try:
        registry.llm.union.model_validate({"type": "user", "name": "Ada"})
    except ValidationError as e:
        print(f"Rejected incomplete output ({e.error_count()} error)")

    # The original view still accepts omitted optionals
    original = registry.original.union.model_validate({"type": "user", "id": "u1", "name": "Ada"})
    print(f"Original parse: {original.root!r}")


if __name__ == "__main__":
    main()
