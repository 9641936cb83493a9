"""Key-value metadata that can be attached to geometries.

Collections are produced by a MetadataFactory and nowhere else, so every
collection knows the factory that made it. Measurement never reads
metadata; it travels with a geometry untouched.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from pydantic_core import core_schema

_FACTORY_TOKEN = object()


class MetadataCollection(MutableMapping[str, Any]):
    """String-keyed mapping of arbitrary values."""

    def __init__(self, factory: MetadataFactory, source: Mapping[str, Any] | None = None, *, _token: object = None):
        if _token is not _FACTORY_TOKEN:
            raise TypeError("MetadataCollection must be created via MetadataFactory")
        if not isinstance(factory, MetadataFactory):
            raise TypeError("The specified factory is invalid")
        self._factory = factory
        self._items: dict[str, Any] = {}
        if source is not None:
            for key, value in source.items():
                self[key] = value

    @property
    def factory(self) -> MetadataFactory:
        return self._factory

    def __getitem__(self, key: str) -> Any:
        return self._items[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Metadata keys must be strings, got {type(key).__name__}")
        self._items[key] = value

    def __delitem__(self, key: str) -> None:
        del self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler):
        # isinstance check only; metadata is never parsed or serialized
        return core_schema.is_instance_schema(cls)

    def __repr__(self) -> str:
        return f"MetadataCollection({self._items!r})"

    def clone(self) -> MetadataCollection:
        """Deep copy sharing no mutable state with this collection."""
        return self._factory.create_collection(copy.deepcopy(self._items))


class MetadataFactory:
    """Creates MetadataCollection instances."""

    def create_collection(self, source: Mapping[str, Any] | None = None) -> MetadataCollection:
        """Create an empty collection, or one holding a copy of ``source``."""
        return MetadataCollection(self, source, _token=_FACTORY_TOKEN)
