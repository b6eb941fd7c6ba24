"""Per-instance attribute store shared by all accessor surfaces."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Literal, Optional, Tuple

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.orm import Session, object_session
from sqlalchemy.orm.attributes import flag_modified

from has_easy.core import pipeline
from has_easy.core.definition import AttributeDefinition
from has_easy.core.errors import MissingAssociationError
from has_easy.core.outcome import STORAGE_MESSAGE, ValidationOutcome
from has_easy.core.schema import CollectionSchema, qualified_type_name

from .models import HasEasyThing, storable

logger = logging.getLogger(__name__)

ValueState = Literal["unset", "pending", "persisted", "rejected"]


def owner_key(host: Any, schema: CollectionSchema) -> Tuple[str, Optional[str]]:
    """Return (model_type, model_id) for host; model_id is None until it has a primary key."""
    model_type = schema.owner_type or qualified_type_name(type(host))
    identity = sa_inspect(host).mapper.primary_key_from_instance(host)
    if len(identity) != 1:
        raise ValueError(f"{type(host).__name__} must have a single-column primary key")
    if identity[0] is None:
        return model_type, None
    return model_type, str(identity[0])


@dataclass
class AttributeValue:
    definition: AttributeDefinition
    value: Any = None
    state: ValueState = "unset"
    row: Optional[HasEasyThing] = None

    @property
    def is_set(self) -> bool:
        return self.state != "unset"

    @property
    def dirty(self) -> bool:
        return self.state in ("pending", "rejected")

    def unstage(self, session: Session) -> None:
        """Drop a row added for a flush that failed; the value stays dirty."""
        if self.row is not None and self.row in session.new:
            session.expunge(self.row)
            self.row = None


class AttributeCollection:
    """Attribute values of one collection on one host instance.

    Supports indexed access (``prefs["color"]``), object access
    (``prefs.color``) and ``prefs.present("color")``. Neither runs
    preprocess/postprocess; only the host's underscore accessors do.
    """

    def __init__(self, host: Any, schema: CollectionSchema):
        object.__setattr__(self, "_host", host)
        object.__setattr__(self, "_schema", schema)
        object.__setattr__(self, "_values", {})
        object.__setattr__(self, "_loaded", False)

    @property
    def schema(self) -> CollectionSchema:
        return self._schema

    @property
    def host(self) -> Any:
        return self._host

    # -- indexed surface ---------------------------------------------------

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    # -- object surface ----------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name not in self._schema:
            raise AttributeError(f"'{self._schema.name}' collection has no attribute '{name}'")
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._schema:
            self.set(name, value)
            return
        raise AttributeError(f"'{self._schema.name}' collection has no attribute '{name}'")

    def present(self, name: str) -> bool:
        return bool(self.get(name))

    # -- store -------------------------------------------------------------

    def get(self, name: str) -> Any:
        definition = self._schema.get(name)
        entry = self._entries().get(name)
        if entry is not None and entry.is_set:
            return entry.value
        return pipeline.resolve_default(definition, self._host)

    def set(self, name: str, value: Any) -> None:
        definition = self._schema.get(name)
        entries = self._entries()
        entry = entries.get(name)
        if entry is None:
            entry = entries[name] = AttributeValue(definition=definition)
        entry.value = value
        entry.state = "pending"

    def is_set(self, name: str) -> bool:
        self._schema.get(name)
        entry = self._entries().get(name)
        return entry is not None and entry.is_set

    def value_for(self, name: str) -> AttributeValue:
        definition = self._schema.get(name)
        return self._entries().get(name) or AttributeValue(definition=definition)

    def keys(self) -> List[str]:
        return self._schema.names()

    def to_dict(self) -> Dict[str, Any]:
        return {name: self.get(name) for name in self._schema.names()}

    def __iter__(self) -> Iterator[str]:
        return iter(self._schema.names())

    def __len__(self) -> int:
        return len(self._schema.names())

    def __contains__(self, name: object) -> bool:
        return name in self._schema

    def __repr__(self) -> str:
        set_names = [n for n, e in self._values.items() if e.is_set]
        return f"<AttributeCollection {self._schema.name} set={set_names}>"

    def reload(self) -> None:
        """Drop in-memory values and read rows again on next access."""
        self._values.clear()
        object.__setattr__(self, "_loaded", False)

    def _entries(self) -> Dict[str, AttributeValue]:
        if not self._loaded:
            object.__setattr__(self, "_loaded", True)
            self._load_rows()
        return self._values

    def _load_rows(self) -> None:
        session = object_session(self._host)
        if session is None:
            return
        model_type, model_id = owner_key(self._host, self._schema)
        if model_id is None:
            return
        stmt = select(HasEasyThing).where(
            HasEasyThing.model_type == model_type,
            HasEasyThing.model_id == model_id,
            HasEasyThing.context == self._schema.name,
        )
        with session.no_autoflush:
            rows = session.scalars(stmt).all()
        for row in rows:
            if row.name not in self._schema:
                logger.debug("Ignoring stored value for undefined attribute %s.%s", self._schema.name, row.name)
                continue
            self._values[row.name] = AttributeValue(
                definition=self._schema.get(row.name),
                value=row.value,
                state="persisted",
                row=row,
            )

    # -- save support ------------------------------------------------------

    def check(self) -> Iterator[ValidationOutcome]:
        """Yield an outcome for every value the next save stands behind.

        Values set since the last save are type checked, validated and must be
        storable in the value column. Attributes still on their default have
        the default checked as well; defaults are never written. A delegated
        default whose association is not set has no value and is skipped.
        """
        entries = self._entries()
        for definition in self._schema.all():
            entry = entries.get(definition.name)
            if entry is not None and entry.is_set:
                if entry.dirty:
                    yield self._check_set_value(definition, entry.value)
                continue
            if definition.default_strategy is None:
                continue
            try:
                default = pipeline.resolve_default(definition, self._host)
            except MissingAssociationError:
                continue
            yield pipeline.check(definition, default, self._host)

    def _check_set_value(self, definition: AttributeDefinition, value: Any) -> ValidationOutcome:
        outcome = pipeline.check(definition, value, self._host)
        if outcome.ok and not storable(value):
            return ValidationOutcome.failure(definition.name, [STORAGE_MESSAGE])
        return outcome

    def stage(self, session: Session, names: List[str]) -> List[AttributeValue]:
        """Add or update rows for the named set values and return their entries.

        Names without a set value (checked defaults) are skipped. Staged
        entries stay dirty until the caller has flushed them.
        """
        model_type, model_id = owner_key(self._host, self._schema)
        if model_id is None:
            raise ValueError(f"{type(self._host).__name__} has no primary key; flush it first")
        entries = self._entries()
        staged: List[AttributeValue] = []
        for name in names:
            entry = entries.get(name)
            if entry is None or not entry.dirty:
                continue
            if entry.row is None:
                entry.row = HasEasyThing(
                    model_type=model_type,
                    model_id=model_id,
                    context=self._schema.name,
                    name=name,
                    value=entry.value,
                )
                session.add(entry.row)
            else:
                entry.row.value = entry.value
                flag_modified(entry.row, "value")
            staged.append(entry)
        return staged

    def reject(self, name: str) -> None:
        entry = self._entries().get(name)
        if entry is not None and entry.dirty:
            entry.state = "rejected"


__all__ = ["AttributeCollection", "AttributeValue", "owner_key"]
