from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Type tags accepted where a Python type cannot be written (YAML files, CLI output)
TYPE_TAGS: Dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "dict": dict,
    "none": type(None),
}


def type_tag(tp: type) -> str:
    for tag, candidate in TYPE_TAGS.items():
        if candidate is tp:
            return tag
    return tp.__name__


class AttributeDefinition(BaseModel):
    """Immutable configuration of one attribute in a collection.

    At most one default strategy may be configured:

    - ``default``: a static value
    - ``default_through``: name of an association on the host whose own
      collection of the same name supplies the value
    - ``default_dynamic``: a callable taking the host, or the name of a host method

    ``validate`` is either an enumeration of allowed values, a predicate taking
    the value, or the name of a host method taking the value.
    """

    name: str
    context: str = ""
    default: Any = None
    default_through: Optional[str] = None
    default_dynamic: Union[Callable[[Any], Any], str, None] = None
    type_check: Tuple[Any, ...] = ()
    validator: Any = Field(default=None, alias="validate")
    preprocess: Optional[Callable[[Any], Any]] = None
    postprocess: Optional[Callable[[Any], Any]] = None

    # Owner methods resolved against the host class by CollectionSchema.bind()
    bound_validator: Optional[Callable[..., Any]] = Field(default=None, exclude=True)
    bound_default: Optional[Callable[..., Any]] = Field(default=None, exclude=True)

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    @field_validator("name")
    @classmethod
    def _identifier(cls, v: str) -> str:
        if not v or not v.isidentifier() or v.startswith("_"):
            raise ValueError(f"attribute name must be a public identifier, got {v!r}")
        return v

    @field_validator("type_check", mode="before")
    @classmethod
    def _normalize_types(cls, v: Any) -> Tuple[type, ...]:
        if v is None:
            return ()
        if isinstance(v, (str, type)):
            v = [v]
        types = []
        for item in v:
            if isinstance(item, str):
                if item not in TYPE_TAGS:
                    available = ", ".join(sorted(TYPE_TAGS))
                    raise ValueError(f"unknown type tag '{item}'. Available: {available}")
                item = TYPE_TAGS[item]
            elif item is None:
                item = type(None)
            if not isinstance(item, type):
                raise ValueError(f"type_check entries must be types or type tags, got {item!r}")
            types.append(item)
        return tuple(types)

    @field_validator("validator", mode="before")
    @classmethod
    def _normalize_validator(cls, v: Any) -> Any:
        if v is None or isinstance(v, str) or callable(v):
            return v
        if isinstance(v, (list, tuple, set, frozenset)):
            return tuple(v)
        raise ValueError("validate must be a collection of allowed values, a callable or a method name")

    @model_validator(mode="after")
    def _single_default_strategy(self) -> "AttributeDefinition":
        strategies = [
            label
            for label, active in (
                ("default", "default" in self.model_fields_set),
                ("default_through", self.default_through is not None),
                ("default_dynamic", self.default_dynamic is not None),
            )
            if active
        ]
        if len(strategies) > 1:
            raise ValueError(f"only one default strategy allowed, got {', '.join(strategies)}")
        return self

    @property
    def has_static_default(self) -> bool:
        return "default" in self.model_fields_set

    @property
    def default_strategy(self) -> Optional[str]:
        if self.default_through is not None:
            return "through"
        if self.default_dynamic is not None:
            return "dynamic"
        if self.has_static_default:
            return "static"
        return None

    @property
    def qualified_name(self) -> str:
        return f"{self.context}.{self.name}" if self.context else self.name
