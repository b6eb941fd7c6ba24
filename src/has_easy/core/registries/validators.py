from __future__ import annotations

from typing import List, Optional

from has_easy.core import pipeline
from has_easy.core.definition import AttributeDefinition
from has_easy.core.schema import CollectionSchema

from .collection_registry import CollectionRegistry


class SchemaValidator:
    """Reports declaration problems that construction alone does not catch.

    When ``host_cls`` is given, owner method and association references are
    checked against it as well.
    """

    def __init__(self, collections: CollectionRegistry, host_cls: Optional[type] = None):
        self.collections = collections
        self.host_cls = host_cls

    def validate_all(self) -> List[str]:
        """Return list of validation errors across collections."""
        errors: List[str] = []
        errors.extend(self._validate_accessor_names())
        for schema in self.collections.all():
            for definition in schema.all():
                errors.extend(self._validate_static_default(schema, definition))
                if self.host_cls is not None:
                    errors.extend(self._validate_host_references(schema, definition))
        return errors

    def _validate_accessor_names(self) -> List[str]:
        errors: List[str] = []
        seen: dict[str, str] = {}
        for schema in self.collections.all():
            for accessor in schema.accessor_names():
                if accessor in seen:
                    errors.append(
                        f"Collection {schema.name}: accessor '{accessor}' already used by collection {seen[accessor]}"
                    )
                    continue
                seen[accessor] = schema.name
                if self.host_cls is not None and hasattr(self.host_cls, accessor):
                    errors.append(
                        f"Collection {schema.name}: accessor '{accessor}' clashes with "
                        f"existing attribute on {self.host_cls.__name__}"
                    )
        return errors

    def _validate_static_default(self, schema: CollectionSchema, definition: AttributeDefinition) -> List[str]:
        if not definition.has_static_default:
            return []
        context = f"Collection {schema.name}.{definition.name}"
        errors: List[str] = []
        default = definition.default
        if not pipeline.type_check(definition, default):
            errors.append(f"{context}: default {default!r} fails its own type check")
        elif isinstance(definition.validator, tuple) and default not in definition.validator:
            errors.append(f"{context}: default {default!r} is not an allowed value")
        return errors

    def _validate_host_references(self, schema: CollectionSchema, definition: AttributeDefinition) -> List[str]:
        context = f"Collection {schema.name}.{definition.name}"
        host = self.host_cls.__name__
        errors: List[str] = []
        for label, method_name in (
            ("validate", definition.validator),
            ("default_dynamic", definition.default_dynamic),
        ):
            if isinstance(method_name, str) and not callable(getattr(self.host_cls, method_name, None)):
                errors.append(f"{context}: {label} refers to unknown method {host}.{method_name}")
        if definition.default_through is not None and not hasattr(self.host_cls, definition.default_through):
            errors.append(f"{context}: default_through refers to unknown association {host}.{definition.default_through}")
        return errors
