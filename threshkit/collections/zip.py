"""Lock-step iteration over index-addressed collections."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Tuple

from threshkit.collections.typed_usize import TypedUsize


def zip2(
    v0: Iterable[Tuple[TypedUsize, Any]], v1: Iterable[Tuple[TypedUsize, Any]]
) -> Iterator[Tuple[TypedUsize, Any, Any]]:
    """Yield `(index, a0, a1)`, taking the index from `v0`; stops at the shorter input."""
    for (index, a0), (_, a1) in zip(v0, v1):
        yield index, a0, a1


def zip3(
    v0: Iterable[Tuple[TypedUsize, Any]],
    v1: Iterable[Tuple[TypedUsize, Any]],
    v2: Iterable[Tuple[TypedUsize, Any]],
) -> Iterator[Tuple[TypedUsize, Any, Any, Any]]:
    """Yield `(index, a0, a1, a2)`, taking the index from `v0`; stops at the shortest input."""
    for (index, a0), (_, a1), (_, a2) in zip(v0, v1, v2):
        yield index, a0, a1, a2