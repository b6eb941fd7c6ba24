"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import Any, Callable, Optional

from rich.markup import escape
from rich.table import Table

from has_easy.core.definition import AttributeDefinition, type_tag
from has_easy.core.schema import CollectionSchema


def _callable_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def format_default(definition: AttributeDefinition) -> str:
    strategy = definition.default_strategy
    if strategy == "through":
        return f"through {definition.default_through}"
    if strategy == "dynamic":
        fn = definition.default_dynamic
        name = fn if isinstance(fn, str) else _callable_name(fn)
        return f"computed by {name}"
    if strategy == "static":
        return escape(repr(definition.default))
    return "[dim]-[/dim]"


def format_type_check(definition: AttributeDefinition) -> str:
    if not definition.type_check:
        return "[dim]any[/dim]"
    return " | ".join(type_tag(tp) for tp in definition.type_check)


def format_validator(definition: AttributeDefinition) -> str:
    validator = definition.validator
    if validator is None:
        return "[dim]-[/dim]"
    if isinstance(validator, tuple):
        return escape("one of " + ", ".join(repr(v) for v in validator))
    if isinstance(validator, str):
        return f"method {validator}"
    return f"predicate {_callable_name(validator)}"


def format_hooks(definition: AttributeDefinition) -> str:
    hooks = [label for label, fn in (("pre", definition.preprocess), ("post", definition.postprocess)) if fn]
    return ", ".join(hooks) if hooks else "[dim]-[/dim]"


def build_collection_table(schema: CollectionSchema, title: Optional[str] = None) -> Table:
    table = Table(title=title or schema.name)
    table.add_column("Attribute")
    table.add_column("Default")
    table.add_column("Type check")
    table.add_column("Validate")
    table.add_column("Hooks")
    for definition in schema.all():
        table.add_row(
            definition.name,
            format_default(definition),
            format_type_check(definition),
            format_validator(definition),
            format_hooks(definition),
        )
    return table


__all__ = [
    "build_collection_table",
    "format_default",
    "format_hooks",
    "format_type_check",
    "format_validator",
]
