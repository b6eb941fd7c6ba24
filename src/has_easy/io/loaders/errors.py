"""Loader error pointing at the file, collection and attribute that failed."""

from __future__ import annotations

import os
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import ValidationError

# Pydantic errors listed in a LoaderError message before the rest are counted
MAX_REPORTED = 3


class LoaderError(RuntimeError):
    """A collection file could not be turned into schemas.

    Carries the file path and, when known, the collection and attribute the
    failure belongs to. Pydantic causes are summarized with their locations
    rewritten as collection/attribute positions.
    """

    def __init__(
        self,
        file_path: str,
        message: str,
        *,
        collection: Optional[str] = None,
        attribute: Optional[str] = None,
        cause: Exception | None = None,
    ):
        self.file_path = file_path
        self.message = message
        self.collection = collection
        self.attribute = attribute
        self.cause = cause
        super().__init__(self._build_message())

    @property
    def location(self) -> str:
        parts = [_relative_path(self.file_path)]
        if self.collection:
            parts.append(f"collection '{self.collection}'")
        if self.attribute:
            parts.append(f"attribute '{self.attribute}'")
        return ", ".join(parts)

    def _build_message(self) -> str:
        base = f"{self.message} ({self.location})"
        if isinstance(self.cause, ValidationError):
            return f"{base}: {_summarize(self.cause.errors())}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base

    def __str__(self) -> str:
        return self._build_message()


def _relative_path(path: str) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:  # pragma: no cover - different drive on Windows
        return path


def _describe_loc(loc: Sequence[Any]) -> str:
    """('collections', 0, 'attributes', 'x', 'defualt') -> "collection #1 attribute 'x' defualt"."""
    rest = list(loc)
    words: List[str] = []
    if len(rest) >= 2 and rest[0] == "collections" and isinstance(rest[1], int):
        words.append(f"collection #{rest[1] + 1}")
        rest = rest[2:]
    if len(rest) >= 2 and rest[0] == "attributes":
        words.append(f"attribute '{rest[1]}'")
        rest = rest[2:]
    if rest:
        words.append(".".join(str(part) for part in rest))
    return " ".join(words) or "<root>"


def _summarize(errors: Iterable[dict]) -> str:
    error_list = list(errors)
    snippets = [
        f"{_describe_loc(err.get('loc', ()))}: {err.get('msg') or err.get('type')}"
        for err in error_list[:MAX_REPORTED]
    ]
    if len(error_list) > MAX_REPORTED:
        snippets.append(f"... ({len(error_list) - MAX_REPORTED} more)")
    return "; ".join(snippets)
