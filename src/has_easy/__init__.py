"""Typed, defaulted, validated key/value attribute collections for SQLAlchemy models."""

from has_easy.core import (
    AttributeDefinition,
    CollectionBuilder,
    CollectionSchema,
    ConfigurationError,
    Failure,
    HasEasyError,
    MissingAssociationError,
    StrictSaveError,
    TypeCheckFailure,
    UnknownAttributeError,
    ValidationError,
    ValidationFailure,
    ValidationOutcome,
)
from has_easy.orm import (
    AttributeCollection,
    Errors,
    HasEasyMixin,
    HasEasyThing,
    ThingBase,
    has_easy,
    register_collection,
)

__version__ = "0.1.0"

__all__ = [
    "AttributeCollection",
    "AttributeDefinition",
    "CollectionBuilder",
    "CollectionSchema",
    "ConfigurationError",
    "Errors",
    "Failure",
    "HasEasyError",
    "HasEasyMixin",
    "HasEasyThing",
    "MissingAssociationError",
    "StrictSaveError",
    "ThingBase",
    "TypeCheckFailure",
    "UnknownAttributeError",
    "ValidationError",
    "ValidationFailure",
    "ValidationOutcome",
    "has_easy",
    "register_collection",
]
