"""Exception hierarchy for attribute collections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, List

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from has_easy.core.outcome import Failure


class HasEasyError(Exception):
    """Base class for every error raised by has_easy."""


class ConfigurationError(HasEasyError):
    """A collection or attribute was declared incorrectly."""


class UnknownAttributeError(HasEasyError, KeyError):
    """Lookup of an attribute name the collection does not define."""

    def __init__(self, collection: str, name: str, available: Iterable[str] = ()):
        self.collection = collection
        self.name = name
        self.available = sorted(available)
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        available = ", ".join(self.available) or "<none>"
        return f"Unknown attribute '{self.name}' in collection '{self.collection}'. Available: {available}"

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return self._build_message()


class MissingAssociationError(HasEasyError):
    """A delegated default followed an association that is not set."""

    def __init__(self, attribute: str, association: str, host: Any):
        self.attribute = attribute
        self.association = association
        self.host = host
        super().__init__(
            f"Cannot resolve default for '{attribute}': "
            f"{type(host).__name__}.{association} is not set"
        )


class ValidationError(HasEasyError):
    """Raise from an owner validator method to fail with a custom message."""


class TypeCheckFailure(HasEasyError):
    def __init__(self, attribute: str, message: str):
        self.attribute = attribute
        self.message = message
        super().__init__(f"{attribute}: {message}")


class ValidationFailure(HasEasyError):
    def __init__(self, attribute: str, messages: List[str]):
        self.attribute = attribute
        self.messages = list(messages)
        super().__init__(f"{attribute}: {'; '.join(self.messages)}")


class StrictSaveError(HasEasyError):
    """Raised by a strict save on the first failing attribute."""

    def __init__(self, failure: "Failure"):
        self.failure = failure
        super().__init__(f"Save aborted, {failure.attribute} {failure.message}")


__all__ = [
    "ConfigurationError",
    "HasEasyError",
    "MissingAssociationError",
    "StrictSaveError",
    "TypeCheckFailure",
    "UnknownAttributeError",
    "ValidationError",
    "ValidationFailure",
]
