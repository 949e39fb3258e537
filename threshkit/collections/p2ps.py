"""Point-to-point message tables: one row per sender, one slot per receiver other than the sender."""

from __future__ import annotations

import operator
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from threshkit.collections.typed_usize import TypedUsize
from threshkit.collections.vecmap import HoleVecMap, TofnFatal, VecMap

V = TypeVar("V")
W = TypeVar("W")


class FillHoleVecMap(Generic[V]):
    """A `HoleVecMap` whose slots are filled in one at a time."""

    __slots__ = ("_hole_vec", "_some_count")

    def __init__(self, size: int, hole: TypedUsize | int) -> None:
        if size <= 0:
            raise TofnFatal("FillHoleVecMap must have positive size")
        self._hole_vec: HoleVecMap[Optional[V]] = VecMap([None] * (size - 1)).remember_hole(hole)
        self._some_count = 0

    @classmethod
    def _from_parts(
        cls, hole_vec: HoleVecMap[Optional[W]], some_count: int
    ) -> FillHoleVecMap[W]:
        result = cls.__new__(cls)
        result._hole_vec = hole_vec
        result._some_count = some_count
        return result

    def size(self) -> int:
        return len(self._hole_vec)

    def set(self, index: TypedUsize | int, value: V) -> None:
        if value is None:
            raise ValueError("cannot store None; use unset to empty a slot")
        if self._hole_vec.get(index) is None:
            self._some_count += 1
        self._hole_vec.set(index, value)

    def unset(self, index: TypedUsize | int) -> None:
        if self._hole_vec.get(index) is not None:
            self._some_count -= 1
        self._hole_vec.set(index, None)

    def is_none(self, index: TypedUsize | int) -> bool:
        return self._hole_vec.get(index) is None

    def is_full(self) -> bool:
        return self._some_count == len(self._hole_vec) - 1

    def is_empty(self) -> bool:
        return self._some_count == 0

    def __iter__(self) -> Iterator[tuple[TypedUsize, Optional[V]]]:
        return iter(self._hole_vec)

    def map_to_holevec(self, f: Callable[[V], W]) -> HoleVecMap[W]:
        if not self.is_full():
            raise TofnFatal("FillHoleVecMap is not full")
        return self._hole_vec.map(f)  # type: ignore[arg-type]

    def to_holevec(self) -> HoleVecMap[V]:
        return self.map_to_holevec(lambda value: value)

    def map(self, f: Callable[[V], W]) -> FillHoleVecMap[W]:
        mapped = self._hole_vec.map(lambda value: None if value is None else f(value))
        return FillHoleVecMap._from_parts(mapped, self._some_count)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FillHoleVecMap):
            return NotImplemented
        return self._hole_vec == other._hole_vec

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FillHoleVecMap({self._hole_vec!r})"


class FillP2ps(Generic[V]):
    """A square table of messages from each sender to every other party, filled one at a time."""

    __slots__ = ("_rows",)

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"size {size} is negative")
        self._rows: VecMap[FillHoleVecMap[V]] = VecMap(
            FillHoleVecMap(size, hole) for hole in range(size)
        )

    def size(self) -> int:
        return len(self._rows)

    def set(self, sender: TypedUsize | int, receiver: TypedUsize | int, value: V) -> None:
        self._rows.get(sender).set(receiver, value)

    def unset_all(self, sender: TypedUsize | int) -> None:
        """Empty every slot sent by `sender`."""
        self._rows.get(sender)
        self._rows.set(sender, FillHoleVecMap(self.size(), sender))

    def is_none(self, sender: TypedUsize | int, receiver: TypedUsize | int) -> bool:
        return self._rows.get(sender).is_none(receiver)

    def is_full(self) -> bool:
        return all(row.is_full() for row in self._rows.values())

    def is_full_from(self, sender: TypedUsize | int) -> bool:
        return self._rows.get(sender).is_full()

    def map_to_p2ps(self, f: Callable[[V], W]) -> P2ps[W]:
        """Rows with no messages become `None`; partially filled rows are an error."""
        return P2ps(
            self._rows.map(lambda row: None if row.is_empty() else row.map_to_holevec(f))
        )

    def map_to_fullp2ps(self, f: Callable[[V], W]) -> FullP2ps[W]:
        return FullP2ps(self._rows.map(lambda row: row.map_to_holevec(f)))

    def to_fullp2ps(self) -> FullP2ps[V]:
        return self.map_to_fullp2ps(lambda value: value)

    def to_p2ps(self) -> P2ps[V]:
        return self.map_to_p2ps(lambda value: value)

    def map(self, f: Callable[[V], W]) -> FillP2ps[W]:
        result: FillP2ps[W] = FillP2ps.__new__(FillP2ps)
        result._rows = self._rows.map(lambda row: row.map(f))
        return result

    def __iter__(self) -> Iterator[tuple[TypedUsize, FillHoleVecMap[V]]]:
        return iter(self._rows)

    def iter_from(self, sender: TypedUsize | int) -> Iterator[tuple[TypedUsize, Optional[V]]]:
        return iter(self._rows.get(sender))

    def __repr__(self) -> str:
        return f"FillP2ps({self._rows.to_list()!r})"


class FullP2ps(Generic[V]):
    """A complete table of messages from each sender to every other party."""

    __slots__ = ("_rows",)

    def __init__(self, rows: VecMap[HoleVecMap[V]] | Iterable[HoleVecMap[V]]) -> None:
        self._rows: VecMap[HoleVecMap[V]] = (
            VecMap(rows.values()) if isinstance(rows, VecMap) else VecMap(rows)
        )

    def get(self, sender: TypedUsize | int, receiver: TypedUsize | int) -> V:
        return self._rows.get(sender).get(receiver)

    def size(self) -> int:
        return len(self._rows)

    def to_me(self, me: TypedUsize | int) -> Iterator[tuple[TypedUsize, V]]:
        """Messages addressed to `me`, as `(sender, value)` pairs."""
        pos = operator.index(me)
        if not 0 <= pos < len(self._rows):
            raise TofnFatal(f"index {pos} out of bounds {len(self._rows)}")
        return self._to_me(pos)

    def _to_me(self, me: int) -> Iterator[tuple[TypedUsize, V]]:
        for sender, row in self._rows:
            if sender.value != me:
                yield sender, row.get(me)

    def __iter__(self) -> Iterator[tuple[TypedUsize, HoleVecMap[V]]]:
        return iter(self._rows)

    def map_to_me(self, me: TypedUsize | int, f: Callable[[V], W]) -> HoleVecMap[W]:
        return VecMap(f(value) for _, value in self.to_me(me)).remember_hole(me)

    def map_to_me2(
        self, me: TypedUsize | int, f: Callable[[TypedUsize, V], W]
    ) -> HoleVecMap[W]:
        return VecMap(f(sender, value) for sender, value in self.to_me(me)).remember_hole(me)

    def map(self, f: Callable[[V], W]) -> FullP2ps[W]:
        return FullP2ps(self._rows.map(lambda row: row.map(f)))

    def map2(self, f: Callable[[TypedUsize, V], W]) -> FullP2ps[W]:
        """Map each value together with its receiver index."""
        return FullP2ps(self._rows.map(lambda row: row.map2(f)))

    def to_p2ps(self) -> P2ps[V]:
        return P2ps(self._rows.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FullP2ps):
            return NotImplemented
        return self._rows == other._rows

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FullP2ps({self._rows.to_list()!r})"


class P2ps(Generic[V]):
    """A table of messages in which some senders may have sent nothing (`None` rows)."""

    __slots__ = ("_rows",)

    def __init__(
        self, rows: VecMap[Optional[HoleVecMap[V]]] | Iterable[Optional[HoleVecMap[V]]]
    ) -> None:
        self._rows: VecMap[Optional[HoleVecMap[V]]] = (
            VecMap(rows.values()) if isinstance(rows, VecMap) else VecMap(rows)
        )

    @classmethod
    def new_size_1_some(cls) -> P2ps[Any]:
        return cls([HoleVecMap([], 0)])

    def size(self) -> int:
        return len(self._rows)

    def get(self, sender: TypedUsize | int) -> Optional[HoleVecMap[V]]:
        return self._rows.get(sender)

    def __iter__(self) -> Iterator[tuple[TypedUsize, Optional[HoleVecMap[V]]]]:
        return iter(self._rows)

    def map(self, f: Callable[[V], W]) -> P2ps[W]:
        return P2ps(self._rows.map(lambda row: None if row is None else row.map(f)))

    def map_to_fullp2ps(self, f: Callable[[V], W]) -> FullP2ps[W]:
        def convert(sender: TypedUsize, row: Optional[HoleVecMap[V]]) -> HoleVecMap[W]:
            if row is None:
                raise TofnFatal(f"missing HoleVecMap at index {sender}")
            return row.map(f)

        return FullP2ps(self._rows.map2(convert))

    def to_fullp2ps(self) -> FullP2ps[V]:
        return self.map_to_fullp2ps(lambda value: value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, P2ps):
            return NotImplemented
        return self._rows == other._rows

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"P2ps({self._rows.to_list()!r})"


def iter_p2ps(
    rows: Iterable[tuple[TypedUsize, Optional[Iterable[tuple[TypedUsize, V]]]]],
) -> Iterator[tuple[TypedUsize, TypedUsize, V]]:
    """Flatten `(sender, row)` pairs into `(sender, receiver, value)` triples; `None` rows are skipped."""
    for sender, row in rows:
        if row is None:
            continue
        for receiver, value in row:
            yield sender, receiver, value