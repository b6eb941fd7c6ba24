from .definition import AttributeDefinition
from .errors import (
    ConfigurationError,
    HasEasyError,
    MissingAssociationError,
    StrictSaveError,
    TypeCheckFailure,
    UnknownAttributeError,
    ValidationError,
    ValidationFailure,
)
from .outcome import Failure, ValidationOutcome
from .schema import CollectionBuilder, CollectionSchema

__all__ = [
    "AttributeDefinition",
    "CollectionBuilder",
    "CollectionSchema",
    "ConfigurationError",
    "Failure",
    "HasEasyError",
    "MissingAssociationError",
    "StrictSaveError",
    "TypeCheckFailure",
    "UnknownAttributeError",
    "ValidationError",
    "ValidationFailure",
    "ValidationOutcome",
]
