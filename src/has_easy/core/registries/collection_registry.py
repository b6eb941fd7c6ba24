from __future__ import annotations

from typing import List

from has_easy.core.schema import CollectionSchema

from .registry_base import NameRegistry


class CollectionRegistry(NameRegistry[CollectionSchema]):
    """Collections keyed by collection name, in declaration order."""

    def accessor_names(self) -> List[str]:
        names: List[str] = []
        for schema in self.all():
            names.extend(schema.accessor_names())
        return names
