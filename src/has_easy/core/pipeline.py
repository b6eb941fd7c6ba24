"""
Attribute rule pipeline.

Per attribute, in order:
- default resolution (only when no value was set explicitly)
- preprocess (underscore accessor writes only)
- type check
- validation
- postprocess (underscore accessor reads only)

Type check and validation failures are returned as ValidationOutcome values.
Errors raised by configured callables propagate unchanged.
"""

from __future__ import annotations

import copy
from typing import Any, Callable

from .definition import AttributeDefinition
from .errors import ConfigurationError, MissingAssociationError, ValidationError
from .outcome import TYPE_CHECK_MESSAGE, VALIDATION_MESSAGE, ValidationOutcome


def resolve_default(definition: AttributeDefinition, host: Any) -> Any:
    """Return the default for an attribute that has no explicit value on host."""
    if definition.default_through is not None:
        return _delegated_default(definition, host)
    if definition.default_dynamic is not None:
        fn = _owner_callable(definition, definition.default_dynamic, definition.bound_default)
        return fn(host)
    # Static defaults are shared by every host; hand out a copy
    return copy.deepcopy(definition.default)


def _delegated_default(definition: AttributeDefinition, host: Any) -> Any:
    from has_easy.orm.collection import AttributeCollection  # local import to avoid cycles

    association = definition.default_through
    associate = getattr(host, association, None)
    if associate is None:
        raise MissingAssociationError(definition.name, association, host)
    collection = getattr(associate, definition.context, None)
    if not isinstance(collection, AttributeCollection):
        raise ConfigurationError(
            f"{type(host).__name__}.{definition.qualified_name} defaults through '{association}', "
            f"but {type(associate).__name__} has no '{definition.context}' collection"
        )
    return collection.get(definition.name)


def _owner_callable(
    definition: AttributeDefinition,
    configured: Any,
    bound: Callable[..., Any] | None,
) -> Callable[..., Any]:
    if not isinstance(configured, str):
        return configured
    if bound is None:
        raise ConfigurationError(
            f"{definition.qualified_name} refers to host method '{configured}' "
            "but the collection is not registered on a host class"
        )
    return bound


def type_check(definition: AttributeDefinition, value: Any) -> bool:
    if not definition.type_check:
        return True
    return type(value) in definition.type_check


def validate(definition: AttributeDefinition, value: Any, host: Any = None) -> ValidationOutcome:
    validator = definition.validator
    if validator is None:
        return ValidationOutcome.success(definition.name)

    if isinstance(validator, tuple):
        if value in validator:
            return ValidationOutcome.success(definition.name)
        return ValidationOutcome.failure(definition.name, [VALIDATION_MESSAGE])

    try:
        if isinstance(validator, str):
            method = _owner_callable(definition, validator, definition.bound_validator)
            result = method(host, value)
        else:
            result = validator(value)
    except ValidationError as exc:
        return ValidationOutcome.failure(definition.name, [str(exc) or VALIDATION_MESSAGE])
    return _interpret(definition.name, result)


def _interpret(name: str, result: Any) -> ValidationOutcome:
    if isinstance(result, (list, tuple)):
        if result:
            return ValidationOutcome.failure(name, [str(m) for m in result])
        return ValidationOutcome.success(name)
    if not result:
        return ValidationOutcome.failure(name, [VALIDATION_MESSAGE])
    return ValidationOutcome.success(name)


def preprocess(definition: AttributeDefinition, raw_value: Any) -> Any:
    if definition.preprocess is None:
        return raw_value
    return definition.preprocess(raw_value)


def postprocess(definition: AttributeDefinition, value: Any) -> Any:
    if definition.postprocess is None:
        return value
    return definition.postprocess(value)


def check(definition: AttributeDefinition, value: Any, host: Any = None) -> ValidationOutcome:
    """Type check, then validate values that passed the type check."""
    if not type_check(definition, value):
        return ValidationOutcome.failure(definition.name, [TYPE_CHECK_MESSAGE], kind="type_check")
    return validate(definition, value, host)


__all__ = [
    "check",
    "postprocess",
    "preprocess",
    "resolve_default",
    "type_check",
    "validate",
]
