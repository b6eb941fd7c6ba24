"""Backing table for attribute collection values.

One row per (owner type, owner id, collection, attribute name). The owner type
is the host's module-qualified class name, so same-named classes in different
modules keep separate rows. Values are stored as YAML text; only values that
``storable`` accepts (scalars, lists and mappings that load back equal and of
the same type) are written. Create the table with
``ThingBase.metadata.create_all(engine)``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import yaml
from sqlalchemy import DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _dump(value: Any) -> str:
    return yaml.safe_dump(value, default_flow_style=True, allow_unicode=True)


def storable(value: Any) -> bool:
    """True when value reads back from the value column unchanged.

    Tuples would come back as lists and objects without a safe YAML
    representation (Decimal, custom classes) cannot be dumped at all.
    """
    try:
        loaded = yaml.safe_load(_dump(value))
    except yaml.YAMLError:
        return False
    return type(loaded) is type(value) and loaded == value


class YAMLValue(TypeDecorator):
    """Text column holding one YAML document."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> str:
        return _dump(value)

    def process_result_value(self, value: str | None, dialect: Any) -> Any:
        if value is None:
            return None
        return yaml.safe_load(value)


class ThingBase(DeclarativeBase):
    pass


class HasEasyThing(ThingBase):
    __tablename__ = "has_easy_things"
    __table_args__ = (
        UniqueConstraint("model_type", "model_id", "context", "name", name="uq_has_easy_things_owner_name"),
        Index("ix_has_easy_things_owner", "model_type", "model_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    model_type: Mapped[str] = mapped_column(String(255), nullable=False)
    model_id: Mapped[str] = mapped_column(String(255), nullable=False)
    context: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[Any] = mapped_column(YAMLValue, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return (
            f"<HasEasyThing({self.model_type}#{self.model_id} "
            f"{self.context}.{self.name}={self.value!r})>"
        )


metadata = ThingBase.metadata

__all__ = ["HasEasyThing", "ThingBase", "YAMLValue", "metadata", "storable"]
