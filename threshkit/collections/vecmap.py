"""Index-addressed vectors, with and without a missing ("hole") slot."""

from __future__ import annotations

import operator
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

from threshkit.collections.typed_usize import TypedUsize

V = TypeVar("V")
W = TypeVar("W")


class TofnFatal(Exception):
    """An unrecoverable error in protocol bookkeeping."""


def _position(index: Any) -> int:
    pos = operator.index(index)
    if pos < 0:
        raise TofnFatal(f"index {pos} is negative")
    return pos


class VecMap(Generic[V]):
    """A list addressed by `TypedUsize` indices; bad indices raise `TofnFatal`."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[V] = ()) -> None:
        self._items: list[V] = list(items)

    def get(self, index: TypedUsize | int) -> V:
        pos = _position(index)
        if pos >= len(self._items):
            raise TofnFatal(f"index {pos} out of bounds {len(self._items)}")
        return self._items[pos]

    def set(self, index: TypedUsize | int, value: V) -> None:
        pos = _position(index)
        if pos >= len(self._items):
            raise TofnFatal(f"index {pos} out of bounds {len(self._items)}")
        self._items[pos] = value

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def to_list(self) -> list[V]:
        return list(self._items)

    def puncture_hole(self, hole: TypedUsize | int) -> tuple[HoleVecMap[V], V]:
        """Remove the value at `hole`, returning the remainder and the removed value."""
        pos = _position(hole)
        if pos >= len(self._items):
            raise TofnFatal(f"hole {pos} out of bounds {len(self._items)}")
        rest = self._items[:pos] + self._items[pos + 1:]
        return HoleVecMap(VecMap(rest), pos), self._items[pos]

    def remember_hole(self, hole: TypedUsize | int) -> HoleVecMap[V]:
        """Treat this vector as having a hole at `hole` with no value removed."""
        pos = _position(hole)
        if pos > len(self._items):
            raise TofnFatal(f"hole {pos} out of bounds {len(self._items)}")
        return HoleVecMap(VecMap(self._items), pos)

    def __iter__(self) -> Iterator[tuple[TypedUsize, V]]:
        for i, value in enumerate(self._items):
            yield TypedUsize(i), value

    def values(self) -> Iterator[V]:
        return iter(self._items)

    def map(self, f: Callable[[V], W]) -> VecMap[W]:
        return VecMap(f(value) for value in self._items)

    def map2(self, f: Callable[[TypedUsize, V], W]) -> VecMap[W]:
        return VecMap(f(index, value) for index, value in self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VecMap):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"VecMap({self._items!r})"


class HoleVecMap(Generic[V]):
    """A `VecMap` with one index (the hole) that holds no value.

    Its length counts the hole, so it is never zero.
    """

    __slots__ = ("_vec", "_hole")

    def __init__(self, vec: VecMap[V] | Iterable[V], hole: TypedUsize | int) -> None:
        items = vec.to_list() if isinstance(vec, VecMap) else list(vec)
        pos = _position(hole)
        if pos > len(items):
            raise TofnFatal(f"hole {pos} out of bounds {len(items)}")
        self._vec: VecMap[V] = VecMap(items)
        self._hole = TypedUsize(pos)

    def _map_index(self, index: TypedUsize | int) -> int:
        i = _position(index)
        hole = self._hole.value
        if i < hole:
            return i
        if hole < i <= len(self._vec):
            return i - 1
        if i == hole:
            raise TofnFatal(f"attempt to index hole {i}")
        raise TofnFatal(f"index {i} out of bounds {len(self)}")

    def get(self, index: TypedUsize | int) -> V:
        return self._vec.get(self._map_index(index))

    def set(self, index: TypedUsize | int, value: V) -> None:
        self._vec.set(self._map_index(index), value)

    def __len__(self) -> int:
        return len(self._vec) + 1

    def is_empty(self) -> bool:
        """True when only the hole is present (length 1)."""
        return self._vec.is_empty()

    def plug_hole(self, val: V) -> VecMap[V]:
        items = self._vec.to_list()
        items.insert(self._hole.value, val)
        return VecMap(items)

    def get_hole(self) -> TypedUsize:
        return self._hole

    def forget_hole(self) -> VecMap[V]:
        return VecMap(self._vec.values())

    def __iter__(self) -> Iterator[tuple[TypedUsize, V]]:
        hole = self._hole.value
        for i, value in enumerate(self._vec.values()):
            yield TypedUsize(i + 1 if i >= hole else i), value

    def map(self, f: Callable[[V], W]) -> HoleVecMap[W]:
        return HoleVecMap(self._vec.map(f), self._hole)

    def map2(self, f: Callable[[TypedUsize, V], W]) -> HoleVecMap[W]:
        return HoleVecMap(VecMap(f(index, value) for index, value in self), self._hole)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HoleVecMap):
            return NotImplemented
        return self._hole == other._hole and self._vec == other._vec

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"HoleVecMap({self._vec.to_list()!r}, hole={self._hole.value})"