from .accessors import CollectionDescriptor, has_easy, register_collection
from .collection import AttributeCollection, AttributeValue
from .errors import Errors
from .mixin import HasEasyMixin
from .models import HasEasyThing, ThingBase, YAMLValue, metadata
from .registry import collection_for, registered_collections

__all__ = [
    "AttributeCollection",
    "AttributeValue",
    "CollectionDescriptor",
    "Errors",
    "HasEasyMixin",
    "HasEasyThing",
    "ThingBase",
    "YAMLValue",
    "collection_for",
    "has_easy",
    "metadata",
    "register_collection",
    "registered_collections",
]
