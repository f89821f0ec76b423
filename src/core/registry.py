"""Immutable registry of the Store Set.

The name -> provider table is static configuration: it is built once at
startup and handed to the aggregator by reference.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from core.interfaces.sources import ProfileStore


class StoreSet(Mapping[str, ProfileStore]):
    """Read-only mapping of store name to `ProfileStore`."""

    __slots__ = ("_stores",)

    def __init__(self, stores: Mapping[str, ProfileStore]) -> None:
        if not stores:
            raise ValueError("StoreSet requires at least one store")
        for name in stores:
            if not isinstance(name, str) or not name:
                raise ValueError(f"Invalid store name: {name!r}")
        self._stores = MappingProxyType(dict(stores))

    def __getitem__(self, name: str) -> ProfileStore:
        return self._stores[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._stores)

    def __len__(self) -> int:
        return len(self._stores)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._stores

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._stores)

    def __repr__(self) -> str:
        return f"StoreSet({', '.join(self._stores)})"
