from __future__ import annotations

import glob
import os
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from has_easy.core.errors import ConfigurationError
from has_easy.core.registries.collection_registry import CollectionRegistry
from has_easy.core.schema import CollectionBuilder, CollectionSchema
from has_easy.io.loaders.errors import LoaderError
from has_easy.io.loaders.file_spec import CollectionEntrySpec, CollectionFileSpec
from has_easy.utils.logging import log_collection_load


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Invalid YAML", cause=exc) from exc


def _collection_files(path: str) -> List[str]:
    if os.path.isfile(path):
        return [path]
    files: List[str] = []
    for pattern in ("*.yaml", "*.yml"):
        files.extend(glob.glob(os.path.join(path, "**", pattern), recursive=True))
    return sorted(files)


def _pydantic_cause(exc: ConfigurationError) -> Exception:
    return exc.__cause__ if isinstance(exc.__cause__, ValidationError) else exc


def _build_collection(fp: str, entry: CollectionEntrySpec) -> CollectionSchema:
    builder = CollectionBuilder(entry.name, aliases=entry.aliases)
    for attr_name, attr_spec in entry.attributes.items():
        try:
            builder.define(attr_name, **attr_spec.options())
        except ConfigurationError as exc:
            raise LoaderError(
                fp,
                "Invalid attribute",
                collection=entry.name,
                attribute=attr_name,
                cause=_pydantic_cause(exc),
            ) from exc
    try:
        return builder.build()
    except ConfigurationError as exc:
        raise LoaderError(fp, "Invalid collection", collection=entry.name, cause=_pydantic_cause(exc)) from exc


@log_collection_load()
def load_collections(path: str, registry: Optional[CollectionRegistry] = None) -> CollectionRegistry:
    """Load collection schemas from a YAML file or every YAML file under a directory.

    Expected format:
    collections:
      - name: preferences
        aliases: [prefs]
        attributes:
          color:
            default: red
            type_check: str
            validate: [red, blue, green]
    """
    registry = registry if registry is not None else CollectionRegistry()
    if not os.path.exists(path):
        return registry
    for fp in _collection_files(path):
        data = _read_yaml(fp)
        try:
            spec = CollectionFileSpec.model_validate(data)
        except ValidationError as exc:
            raise LoaderError(fp, "Invalid collection file", cause=exc) from exc
        for entry in spec.collections:
            schema = _build_collection(fp, entry)
            try:
                registry.register(schema.name, schema)
            except ValueError as exc:
                raise LoaderError(fp, "Duplicate collection", collection=schema.name, cause=exc) from exc
    return registry
