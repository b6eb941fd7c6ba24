"""Declaring collections on host classes and generating their accessors.

For a collection ``preferences`` with attribute ``color`` the host gets:

- ``host.preferences["color"]`` / ``host.preferences["color"] = v``
- ``host.preferences.color`` / ``host.preferences.color = v`` /
  ``host.preferences.present("color")``
- ``host.preferences_color`` / ``host.preferences_color = v``, the only pair
  that applies preprocess and postprocess

Aliases get the same accessors under their own names.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Mapping, Tuple

from sqlalchemy import delete, event
from sqlalchemy import inspect as sa_inspect

from has_easy.core import pipeline
from has_easy.core.definition import AttributeDefinition
from has_easy.core.errors import ConfigurationError
from has_easy.core.schema import CollectionBuilder, CollectionSchema

from .collection import AttributeCollection
from .mixin import HasEasyMixin
from .models import HasEasyThing
from .registry import collection_for, collection_registry, registered_collections

logger = logging.getLogger(__name__)

_LISTENER_ATTR = "__has_easy_delete_listener__"

# Attribute names that would be shadowed by AttributeCollection's own API
RESERVED_NAMES = frozenset(name for name in dir(AttributeCollection) if not name.startswith("_"))


class CollectionDescriptor:
    """Class attribute returning the per-instance AttributeCollection."""

    def __init__(self, name: str):
        self.name = name

    def __get__(self, host: Any, owner: type | None = None) -> Any:
        if host is None:
            return self
        return collection_for(host, self.name)

    def __set__(self, host: Any, values: Mapping[str, Any]) -> None:
        collection = collection_for(host, self.name)
        for key, value in dict(values).items():
            collection.set(key, value)


def _underscore_property(collection_name: str, definition: AttributeDefinition) -> property:
    name = definition.name

    def fget(host: Any) -> Any:
        return pipeline.postprocess(definition, collection_for(host, collection_name).get(name))

    def fset(host: Any, value: Any) -> None:
        collection_for(host, collection_name).set(name, pipeline.preprocess(definition, value))

    return property(fget, fset, doc=f"{collection_name}.{name} with preprocess/postprocess applied")


def _generated_attributes(schema: CollectionSchema) -> List[Tuple[str, Any]]:
    generated: List[Tuple[str, Any]] = []
    for accessor in schema.accessor_names():
        generated.append((accessor, CollectionDescriptor(schema.name)))
        for definition in schema.all():
            generated.append((f"{accessor}_{definition.name}", _underscore_property(schema.name, definition)))
    return generated


def register_collection(host_cls: type, schema: CollectionSchema) -> CollectionSchema:
    """Attach a built schema to host_cls and generate its accessors.

    Owner method names are resolved against host_cls here, so a missing
    method fails at declaration time. Returns the bound schema.
    """
    if not (isinstance(host_cls, type) and issubclass(host_cls, HasEasyMixin)):
        raise ConfigurationError(f"{host_cls!r} must subclass HasEasyMixin to own collections")
    if any(existing.name == schema.name for existing in registered_collections(host_cls)):
        raise ConfigurationError(f"{host_cls.__name__} already has a collection named '{schema.name}'")
    reserved = sorted(RESERVED_NAMES.intersection(schema.names()))
    if reserved:
        raise ConfigurationError(f"Collection '{schema.name}' uses reserved attribute name(s): {', '.join(reserved)}")

    bound = schema.bind(host_cls)
    generated = _generated_attributes(bound)
    seen: set[str] = set()
    for attr, _value in generated:
        if attr in seen or hasattr(host_cls, attr):
            raise ConfigurationError(f"Collection '{schema.name}' would overwrite {host_cls.__name__}.{attr}")
        seen.add(attr)

    collection_registry(host_cls).register(bound.name, bound)
    for attr, value in generated:
        setattr(host_cls, attr, value)
    _install_delete_listener(host_cls)
    logger.debug(
        "Registered collection %s on %s with %d attribute(s)",
        bound.name,
        host_cls.__name__,
        len(bound.definitions),
    )
    return bound


@contextmanager
def has_easy(host_cls: type, name: str, *, aliases: Iterable[str] = ()) -> Iterator[CollectionBuilder]:
    """Declare a collection on host_cls::

        with has_easy(User, "preferences", aliases=["prefs"]) as p:
            p.define("color", default="red", validate=["red", "blue"])
            p.define("theme", default_through="client")

    The collection is registered when the block exits without an error.
    """
    builder = CollectionBuilder(name, aliases=aliases)
    yield builder
    register_collection(host_cls, builder.build())


def _install_delete_listener(host_cls: type) -> None:
    if getattr(host_cls, _LISTENER_ATTR, False):
        return
    event.listen(host_cls, "after_delete", _delete_rows, propagate=True)
    setattr(host_cls, _LISTENER_ATTR, True)


def _delete_rows(mapper: Any, connection: Any, target: Any) -> None:
    schemas = registered_collections(type(target))
    if not schemas:
        return
    identity = sa_inspect(target).identity
    if not identity or len(identity) != 1:
        return
    model_types = sorted({schema.owner_type for schema in schemas if schema.owner_type})
    connection.execute(
        delete(HasEasyThing).where(
            HasEasyThing.model_type.in_(model_types),
            HasEasyThing.model_id == str(identity[0]),
        )
    )
    logger.debug("Deleted collection rows for %s#%s", type(target).__name__, identity[0])
