"""A non-negative index used to address parties and shares."""

from __future__ import annotations

from dataclasses import dataclass

_MAX = 1 << 64
_WIDTH = 8


@dataclass(frozen=True, order=True)
class TypedUsize:
    """An unsigned 64-bit index; usable anywhere Python expects an integer index."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"index must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value < _MAX:
            raise ValueError(f"index {self.value} is not an unsigned 64-bit integer")

    @classmethod
    def from_usize(cls, index: int) -> TypedUsize:
        return cls(index)

    def as_usize(self) -> int:
        return self.value

    def to_bytes(self) -> bytes:
        """Platform-independent 8-byte big-endian encoding."""
        return self.value.to_bytes(_WIDTH, "big")

    @classmethod
    def from_bytes(cls, data: bytes) -> TypedUsize:
        if len(data) != _WIDTH:
            raise ValueError(f"expected {_WIDTH} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big"))

    def __index__(self) -> int:
        return self.value

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)