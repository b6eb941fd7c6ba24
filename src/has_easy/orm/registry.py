from __future__ import annotations

from typing import Any, Dict, List

from has_easy.core.errors import HasEasyError
from has_easy.core.registries.collection_registry import CollectionRegistry
from has_easy.core.schema import CollectionSchema

from .collection import AttributeCollection

COLLECTIONS_ATTR = "__has_easy_collections__"
_INSTANCE_CACHE = "_has_easy_collection_cache"


def collection_registry(host_cls: type) -> CollectionRegistry:
    """Registry of collections declared directly on host_cls (created on first use)."""
    registry = host_cls.__dict__.get(COLLECTIONS_ATTR)
    if registry is None:
        registry = CollectionRegistry()
        setattr(host_cls, COLLECTIONS_ATTR, registry)
    return registry


def registered_collections(host_cls: type) -> List[CollectionSchema]:
    """Collections declared on host_cls and its bases, base classes first."""
    schemas: Dict[str, CollectionSchema] = {}
    for klass in reversed(host_cls.__mro__):
        registry = klass.__dict__.get(COLLECTIONS_ATTR)
        if registry is None:
            continue
        for schema in registry.all():
            schemas[schema.name] = schema
    return list(schemas.values())


def collection_for(host: Any, name: str) -> AttributeCollection:
    cache: Dict[str, AttributeCollection] = host.__dict__.setdefault(_INSTANCE_CACHE, {})
    collection = cache.get(name)
    if collection is None:
        for schema in registered_collections(type(host)):
            if schema.name == name:
                break
        else:
            raise HasEasyError(f"{type(host).__name__} has no collection '{name}'")
        collection = cache[name] = AttributeCollection(host, schema)
    return collection
