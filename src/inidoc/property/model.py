# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/12 22:10:45
# @Author : Kariko Lin

"""Key/value/comment triples.

The key is fixed once constructed, while value and comment could be
changed, and those changes could be watched by listeners.

Equality and ordering only look at the key (and at the kind of property,
see `PropertyKind`). Values are just payload, so two properties holding
the same key are "the same entry" in a collection.
"""

from enum import Enum
from functools import total_ordering
from typing import Any, Callable, Generic, TypeVar

from ..errors import InvalidArgumentError, TypeMismatchError
from ..strings import is_single_line

__all__ = ['PropertyKind', 'Property', 'PropertyListener', 'compare']

# (property, field name, old value, new value)
K = TypeVar('K')
V = TypeVar('V')

PropertyListener = Callable[['Property', str, Any, Any], None]


class PropertyKind(str, Enum):
    """What a property stands for.

    Properties of different kinds never equal each other,
    and comparing them raises `TypeMismatchError`.
    """
    GENERIC = 'generic'
    INI = 'ini'


@total_ordering
class Property(Generic[K, V]):
    PROP_COMMENT = 'comment'
    PROP_VALUE = 'value'

    def __init__(
        self, key: K, value: V, comment: str | None = None, *,
        kind: PropertyKind = PropertyKind.GENERIC,
        id: int = -1
    ) -> None:
        if key is None:
            raise InvalidArgumentError('A None key is not valid.')
        self.__key = key
        self.__kind = PropertyKind(kind)
        self._check(self.PROP_VALUE, value)
        self._check(self.PROP_COMMENT, comment)
        # -1 unless the owner tracks changes of several properties.
        self.__id = id
        self._value = value
        self._comment = comment
        # field name (None for any field) => callbacks
        self.__listeners: dict[str | None, list[PropertyListener]] = {}

    def copy(self) -> 'Property[K, V]':
        """A new property with the same key, value, comment, kind and id.

        Listeners are not copied. `Property.copy(other)` reads fine, too.
        """
        return Property(
            self.__key, self._value, self._comment,
            kind=self.__kind, id=self.__id)

    @property
    def key(self) -> K:
        return self.__key

    @property
    def kind(self) -> PropertyKind:
        return self.__kind

    @property
    def id(self) -> int:
        return self.__id

    @property
    def value(self) -> V:
        return self._value

    @value.setter
    def value(self, value: V) -> None:
        self._check(self.PROP_VALUE, value)
        old, self._value = self._value, value
        self._fire(self.PROP_VALUE, old, value)

    @property
    def comment(self) -> str | None:
        return self._comment

    @comment.setter
    def comment(self, comment: str | None) -> None:
        self._check(self.PROP_COMMENT, comment)
        old, self._comment = self._comment, comment
        self._fire(self.PROP_COMMENT, old, comment)

    def _check(self, field: str, text: Any) -> None:
        # an INI entry is written on one line.
        if self.__kind is PropertyKind.INI and isinstance(text, str) \
                and not is_single_line(text):
            raise InvalidArgumentError(
                f'{self.__key}: {field} of an INI entry must be '
                f'a single line, got {text!r}.')

    def add_listener(
        self, callback: PropertyListener, field: str | None = None
    ) -> None:
        """Watch `field` (`PROP_VALUE`, `PROP_COMMENT`, or None for both)."""
        self.__listeners.setdefault(field, []).append(callback)

    def remove_listener(
        self, callback: PropertyListener, field: str | None = None
    ) -> None:
        callbacks = self.__listeners.get(field, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def _fire(self, field: str, old: Any, new: Any) -> None:
        if old is new or old == new:
            return
        for cb in (*self.__listeners.get(None, ()),
                   *self.__listeners.get(field, ())):
            cb(self, field, old, new)

    def compare_to(self, other: 'Property') -> int:
        """-1, 0 or 1, by key order.

        Equal properties always give 0.

        Raises:
            InvalidArgumentError: `other` is None.
            TypeMismatchError: `other` is of another kind.
        """
        if other is None:
            raise InvalidArgumentError('Cannot compare with None.')
        if self == other:
            return 0
        if self.__kind is not other.kind:
            raise TypeMismatchError(
                'Must be the same kind of Property: '
                f'{self.__kind.value} vs {other.kind.value}.')
        # keys could not be None, but keep the usual null-first order.
        if self.__key is None or other.key is None:
            return (self.__key is not None) - (other.key is not None)
        return (self.__key > other.key) - (self.__key < other.key)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Property):
            return NotImplemented
        return (self.__kind is other.kind
                and type(self._value) is type(other.value)
                and self.__key == other.key)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Property):
            return NotImplemented
        return self.compare_to(other) < 0

    def __hash__(self) -> int:
        return hash(self.__key)

    def __repr__(self) -> str:
        return (f'{self.__class__.__name__}({self.__key!r}, {self._value!r}, '
                f'comment={self._comment!r}, kind={self.__kind.value})')

    def __str__(self) -> str:
        return ('{ key = %s, value = %s, comment = %s }'
                % (self.__key, self._value, self._comment))


def compare(a: Property, b: Property) -> int:
    """Same as `a.compare_to(b)`."""
    if a is None:
        raise InvalidArgumentError('Cannot compare None.')
    return a.compare_to(b)
