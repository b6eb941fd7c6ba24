"""Collection schemas and the builder used to declare them."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from .definition import AttributeDefinition
from .errors import ConfigurationError, UnknownAttributeError
from .registries.registry_base import NameRegistry


class DefinitionRegistry(NameRegistry[AttributeDefinition]):
    pass


class CollectionSchema(BaseModel):
    """Static configuration of one attribute collection on a host type."""

    name: str
    aliases: Tuple[str, ...] = ()
    definitions: DefinitionRegistry = Field(default_factory=DefinitionRegistry)
    owner_type: Optional[str] = None  # module-qualified host class name once bound

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("name")
    @classmethod
    def _identifier(cls, v: str) -> str:
        if not v or not v.isidentifier() or v.startswith("_"):
            raise ValueError(f"collection name must be a public identifier, got {v!r}")
        return v

    @field_validator("aliases")
    @classmethod
    def _aliases_valid(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        for alias in v:
            if not alias.isidentifier() or alias.startswith("_"):
                raise ValueError(f"alias must be a public identifier, got {alias!r}")
        if len(set(v)) != len(v):
            raise ValueError("aliases must be unique")
        return v

    def get(self, name: str) -> AttributeDefinition:
        if name not in self.definitions:
            raise UnknownAttributeError(self.name, name, self.definitions.names())
        return self.definitions.get(name)

    def names(self) -> List[str]:
        return list(self.definitions.names())

    def all(self) -> Iterable[AttributeDefinition]:
        return self.definitions.all()

    def accessor_names(self) -> List[str]:
        return [self.name, *self.aliases]

    def __contains__(self, name: object) -> bool:
        return name in self.definitions

    @property
    def is_bound(self) -> bool:
        return self.owner_type is not None

    def bind(self, host_cls: type) -> "CollectionSchema":
        """Return a copy whose owner-method references point at host_cls functions."""
        bound = DefinitionRegistry()
        for definition in self.definitions.all():
            update: dict[str, Any] = {}
            if isinstance(definition.validator, str):
                update["bound_validator"] = _owner_method(host_cls, definition, definition.validator)
            if isinstance(definition.default_dynamic, str):
                update["bound_default"] = _owner_method(host_cls, definition, definition.default_dynamic)
            bound.register(definition.name, definition.model_copy(update=update) if update else definition)
        return self.model_copy(update={"definitions": bound, "owner_type": qualified_type_name(host_cls)})


def qualified_type_name(cls: type) -> str:
    """Name stored as model_type for rows owned by instances of cls."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _owner_method(host_cls: type, definition: AttributeDefinition, method_name: str) -> Callable[..., Any]:
    method = getattr(host_cls, method_name, None)
    if not callable(method):
        raise ConfigurationError(
            f"{host_cls.__name__}.{definition.qualified_name} refers to missing method '{method_name}'"
        )
    return method


class CollectionBuilder:
    """Collects attribute definitions for a collection, then builds its schema."""

    def __init__(self, name: str, aliases: Iterable[str] = ()):
        self.name = name
        self.aliases = tuple(aliases)
        self._definitions = DefinitionRegistry()

    def define(self, name: str, **options: Any) -> "CollectionBuilder":
        try:
            definition = AttributeDefinition(name=name, context=self.name, **options)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid definition for {self.name}.{name}: {exc}") from exc
        try:
            self._definitions.register(name, definition)
        except ValueError as exc:
            raise ConfigurationError(f"Attribute '{name}' is already defined in '{self.name}'") from exc
        return self

    def build(self) -> CollectionSchema:
        try:
            return CollectionSchema(name=self.name, aliases=self.aliases, definitions=self._definitions)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid collection '{self.name}': {exc}") from exc


__all__ = ["CollectionBuilder", "CollectionSchema", "DefinitionRegistry", "qualified_type_name"]
