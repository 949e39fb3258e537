"""A fixed-size indexed vector that is filled in one slot at a time, and subsets of indices."""

from __future__ import annotations

import operator
from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar

from threshkit.collections.typed_usize import TypedUsize
from threshkit.collections.vecmap import TofnFatal, VecMap

V = TypeVar("V")
W = TypeVar("W")


class FillVecMap(Generic[V]):
    """Slots addressed by `TypedUsize`; each is either empty (`None`) or filled."""

    __slots__ = ("_slots", "_some_count")

    def __init__(self, size: int = 0) -> None:
        if size < 0:
            raise ValueError(f"size {size} is negative")
        self._slots: list[Optional[V]] = [None] * size
        self._some_count = 0

    @classmethod
    def from_options(cls, items: Iterable[Optional[V]]) -> FillVecMap[V]:
        """Build from values where `None` marks an empty slot."""
        result: FillVecMap[V] = cls(0)
        result._slots = list(items)
        result._some_count = sum(1 for item in result._slots if item is not None)
        return result

    def _check(self, index: TypedUsize | int) -> int:
        pos = operator.index(index)
        if not 0 <= pos < len(self._slots):
            raise TofnFatal(f"index {pos} out of bounds {len(self._slots)}")
        return pos

    def get(self, index: TypedUsize | int) -> Optional[V]:
        return self._slots[self._check(index)]

    def size(self) -> int:
        return len(self._slots)

    def set(self, index: TypedUsize | int, value: V) -> None:
        if value is None:
            raise ValueError("cannot store None; use unset to empty a slot")
        pos = self._check(index)
        if self._slots[pos] is None:
            self._some_count += 1
        self._slots[pos] = value

    def unset(self, index: TypedUsize | int) -> None:
        pos = self._check(index)
        if self._slots[pos] is not None:
            self._some_count -= 1
        self._slots[pos] = None

    def is_none(self, index: TypedUsize | int) -> bool:
        return self._slots[self._check(index)] is None

    def is_full(self) -> bool:
        return self._some_count == len(self._slots)

    def is_empty(self) -> bool:
        return self._some_count == 0

    def some_count(self) -> int:
        return self._some_count

    def __iter__(self) -> Iterator[tuple[TypedUsize, Optional[V]]]:
        for i, value in enumerate(self._slots):
            yield TypedUsize(i), value

    def iter_some(self) -> Iterator[tuple[TypedUsize, V]]:
        """Iterate only over filled slots."""
        for i, value in enumerate(self._slots):
            if value is not None:
                yield TypedUsize(i), value

    def map_to_vecmap(self, f: Callable[[V], W]) -> VecMap[W]:
        if not self.is_full():
            raise TofnFatal("FillVecMap is not full")
        return VecMap(f(value) for value in self._slots)  # type: ignore[arg-type]

    def to_vecmap(self) -> VecMap[V]:
        return self.map_to_vecmap(lambda value: value)

    def map(self, f: Callable[[V], W]) -> FillVecMap[W]:
        return FillVecMap.from_options(
            None if value is None else f(value) for value in self._slots
        )

    def map2(self, f: Callable[[TypedUsize, V], W]) -> FillVecMap[W]:
        return FillVecMap.from_options(
            None if value is None else f(index, value) for index, value in self
        )

    def as_subset(self) -> Subset:
        """The indices whose slots are filled."""
        return Subset.from_fillvecmap(self)

    def to_list(self) -> list[Optional[V]]:
        return list(self._slots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FillVecMap):
            return NotImplemented
        return self._slots == other._slots

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FillVecMap({self._slots!r})"


class Subset:
    """A subset of the indices `0..max_size`."""

    __slots__ = ("_marks",)

    def __init__(self, marks: FillVecMap[bool]) -> None:
        self._marks = marks

    @classmethod
    def with_max_size(cls, size: int) -> Subset:
        return cls(FillVecMap(size))

    @classmethod
    def from_fillvecmap(cls, v: FillVecMap) -> Subset:
        """The subset of indices at which `v` is filled."""
        return cls(v.map(lambda _: True))

    def max_size(self) -> int:
        return self._marks.size()

    def member_count(self) -> int:
        return self._marks.some_count()

    def add(self, index: TypedUsize | int) -> None:
        self._marks.set(index, True)

    def is_member(self, index: TypedUsize | int) -> bool:
        return not self._marks.is_none(index)

    def is_full(self) -> bool:
        return self._marks.is_full()

    def is_empty(self) -> bool:
        return self._marks.is_empty()

    def __iter__(self) -> Iterator[TypedUsize]:
        for index, _ in self._marks.iter_some():
            yield index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Subset):
            return NotImplemented
        return self._marks == other._marks

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Subset(max_size={self.max_size()}, members={[i.value for i in self]})"