"""Hash commitments bound to a domain tag and a peer index."""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass, field
from typing import Tuple, Union

from threshkit.collections.typed_usize import TypedUsize

_SIZE = 32

BytesLike = Union[bytes, bytearray, memoryview]


def _check_size(data: bytes, what: str) -> bytes:
    data = bytes(data)
    if len(data) != _SIZE:
        raise ValueError(f"{what} must be {_SIZE} bytes, got {len(data)}")
    return data


@dataclass(frozen=True)
class Output:
    """A 32-byte commitment."""

    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _check_size(self.data, "commitment"))

    def __bytes__(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class Randomness:
    """The 32 random bytes that open a commitment."""

    data: bytes = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _check_size(self.data, "randomness"))

    def __bytes__(self) -> bytes:
        return self.data


def _tag_byte(tag: int) -> bytes:
    if isinstance(tag, bool) or not isinstance(tag, int) or not 0 <= tag <= 0xFF:
        raise ValueError(f"tag {tag!r} is not a byte")
    return bytes([tag])


def commit(tag: int, peer_id: TypedUsize, msg: BytesLike) -> Tuple[Output, Randomness]:
    """Commit to `msg` with fresh randomness; returns the commitment and its opening."""
    randomness = Randomness(secrets.token_bytes(_SIZE))
    return commit_with_randomness(tag, peer_id, msg, randomness), randomness


def commit_with_randomness(
    tag: int, peer_id: TypedUsize, msg: BytesLike, randomness: Randomness
) -> Output:
    """SHA-256 over the tag, the peer index, the message and the randomness."""
    hasher = hashlib.sha256()
    hasher.update(_tag_byte(tag))
    hasher.update(TypedUsize(int(peer_id)).to_bytes())
    hasher.update(bytes(msg))
    hasher.update(randomness.data)
    return Output(hasher.digest())