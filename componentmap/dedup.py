"""Insertion-ordered set that compares flat records by value."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Callable, Dict, Generic, Hashable, Iterable, Iterator, Mapping, TypeVar

T = TypeVar("T")


def canonical_key(item: Any) -> Hashable:
    """Derive a hashable key from a flat record's own fields.

    Dataclass fields are taken in declaration order and mapping keys in sorted
    order. Sequence values compare element-wise, one level deep only: nested
    records must themselves be hashable.
    """
    if is_dataclass(item) and not isinstance(item, type):
        pairs = [(f.name, getattr(item, f.name)) for f in fields(item)]
        return (type(item).__name__, tuple((name, _freeze(value)) for name, value in pairs))
    if isinstance(item, Mapping):
        return ("mapping", tuple((key, _freeze(item[key])) for key in sorted(item)))
    return ("value", _freeze(item))


def _freeze(value: Any) -> Hashable:
    if isinstance(value, (list, tuple)):
        return ("seq", tuple(value))
    return value


class DedupSet(Generic[T]):
    """Admits an item only when no equivalent item is already present."""

    def __init__(
        self,
        items: Iterable[T] = (),
        *,
        key: Callable[[T], Hashable] = canonical_key,
    ) -> None:
        self._key = key
        self._items: Dict[Hashable, T] = {}
        for item in items:
            self.add(item)

    def add(self, item: T) -> "DedupSet[T]":
        self._items.setdefault(self._key(item), item)
        return self

    def __contains__(self, item: object) -> bool:
        try:
            return self._key(item) in self._items  # type: ignore[arg-type]
        except TypeError:
            return False

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"DedupSet({list(self._items.values())!r})"


__all__ = ["DedupSet", "canonical_key"]
