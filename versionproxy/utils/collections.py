"""Keyed container that keeps one value per identity.

Docker Hub reports the same Node release under many tags (``18.0.0``,
``18.0.0-alpine``, ``18.0.0-bullseye-slim`` ...).  Each of them parses to the
same ``major.minor.patch`` triple, so the registry adapter funnels them
through :class:`UniqueOrderedSet` keyed by the dotted string.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from functools import cmp_to_key
from typing import Generic, TypeVar

_T = TypeVar("_T")


class UniqueOrderedSet(Generic[_T]):
    """Insertion-ordered mapping of string keys to values.

    Adding a key that is already present overwrites its value in place
    (last write wins, no merge) and keeps the key's original position.
    """

    def __init__(self) -> None:
        self._items: dict[str, _T] = {}

    def add(self, key: str, value: _T) -> None:
        self._items[key] = value

    def extend(self, entries: Iterable[tuple[str, _T]]) -> None:
        for key, value in entries:
            self.add(key, value)

    def values(self) -> list[_T]:
        """Return the current values in insertion order."""
        return list(self._items.values())

    def size(self) -> int:
        return len(self._items)

    def sort(self, compare: Callable[[_T, _T], int]) -> list[_T]:
        """Return a new list of values ordered by *compare*.

        *compare* follows the classic comparator contract: negative when
        ``a`` sorts first, zero when equal, positive otherwise.  Internal
        storage and its insertion order are left untouched.
        """
        return sorted(self._items.values(), key=cmp_to_key(compare))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[_T]:
        return iter(self.values())
