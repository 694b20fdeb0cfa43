# -*- encoding: utf-8 -*-
# @File   : collection.py
# @Time   : 2026/10/13 00:05:51
# @Author : Kariko Lin

from collections.abc import Iterable, Mapping
from threading import RLock
from typing import Iterator, TypeVar

from ..errors import DuplicateKeyError
from ..guard import LoadGuard
from .model import Property

K = TypeVar('K')

__all__ = ['PropertyCollection']


class PropertyCollection(Mapping[K, Property]):
    """Ordered, duplicate-free key => `Property` mapping.

    Keys are kept in insertion order, which is also the order of
    serialization. Unlike a dict, inserting an existing key raises
    `DuplicateKeyError` instead of overwriting it.

    Note that, as a `Mapping`, `iter(self)` walks *keys*;
    use `iterate()` (or `values()`) for properties.
    """

    def __init__(self, properties: Iterable[Property] = ()) -> None:
        self._lock = RLock()
        self._entries: dict[K, Property] = {}
        self.guard = LoadGuard()
        for i in properties:
            self.insert(i)

    def __getitem__(self, key: K) -> Property:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return '%s { .cnt = %d }' % (self.__class__.__name__, len(self))

    def __eq__(self, other: object) -> bool:
        # unlike Property, compare values and comments, too.
        if not isinstance(other, PropertyCollection):
            return NotImplemented
        return self._snapshot() == other._snapshot()

    def _snapshot(self) -> list[tuple]:
        return [(i.kind, i.key, i.value, i.comment) for i in self.iterate()]

    def insert(self, prop: Property) -> None:
        with self._lock:
            if prop.key in self._entries:
                raise DuplicateKeyError(prop.key)
            self._entries[prop.key] = prop

    def get(self, key: K, default: Property | None = None) -> Property | None:
        return self._entries.get(key, default)

    def remove(self, key: K) -> Property | None:
        with self._lock:
            return self._entries.pop(key, None)

    def iterate(self) -> Iterator[Property]:
        """Fresh traversal over a snapshot of the current entries."""
        with self._lock:
            return iter(list(self._entries.values()))

    def size(self) -> int:
        return len(self._entries)

    def merge(self, other: Iterable[Property]) -> None:
        """Insert all properties of `other`, or none of them.

        Raises:
            DuplicateKeyError: the first key already present, or repeated
                within `other`. `self` is left as it was.
        """
        if isinstance(other, PropertyCollection):
            other = other.iterate()
        with self._lock:
            incoming: dict[K, Property] = {}
            for i in other:
                if i.key in self._entries or i.key in incoming:
                    raise DuplicateKeyError(i.key)
                incoming[i.key] = i
            self._entries.update(incoming)

    def clear(self) -> None:
        """Drop all entries and forget loaded sources."""
        with self._lock:
            self._entries.clear()
            self.guard.reset()
