from __future__ import annotations

from typing import Iterable, List, Literal

from pydantic import BaseModel, Field

from .errors import HasEasyError, TypeCheckFailure, ValidationFailure

TYPE_CHECK_MESSAGE = "failed type check"
VALIDATION_MESSAGE = "failed validation"
STORAGE_MESSAGE = "cannot be stored"


class Failure(BaseModel):
    """One failure message attributed to an attribute name."""

    attribute: str
    message: str
    kind: Literal["type_check", "validation"] = "validation"

    def to_exception(self) -> HasEasyError:
        if self.kind == "type_check":
            return TypeCheckFailure(self.attribute, self.message)
        return ValidationFailure(self.attribute, [self.message])


class ValidationOutcome(BaseModel):
    """Result of checking one attribute value: success or ordered failures."""

    attribute: str
    failures: List[Failure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def messages(self) -> List[str]:
        return [f.message for f in self.failures]

    @classmethod
    def success(cls, attribute: str) -> "ValidationOutcome":
        return cls(attribute=attribute)

    @classmethod
    def failure(
        cls,
        attribute: str,
        messages: Iterable[str],
        *,
        kind: Literal["type_check", "validation"] = "validation",
    ) -> "ValidationOutcome":
        failures = [Failure(attribute=attribute, message=str(m), kind=kind) for m in messages]
        if not failures:
            raise ValueError("a failed outcome needs at least one message")
        return cls(attribute=attribute, failures=failures)


__all__ = ["Failure", "STORAGE_MESSAGE", "TYPE_CHECK_MESSAGE", "VALIDATION_MESSAGE", "ValidationOutcome"]
