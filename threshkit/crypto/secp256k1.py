"""secp256k1 scalars and curve points, their byte encodings, and prehashed ECDSA."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

FIELD_PRIME = 2**256 - 2**32 - 977
ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_GX = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
_GY = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8
_B = 7
_SCALAR_BYTES = 32
_COORD_BYTES = 32


def _default_rng(rng: Any) -> Any:
    return rng if rng is not None else secrets.SystemRandom()


class Scalar:
    """An integer modulo the secp256k1 group order."""

    __slots__ = ("value",)

    def __init__(self, value: Union[int, "Scalar"] = 0) -> None:
        if isinstance(value, Scalar):
            value = value.value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"scalar must be an int, got {type(value).__name__}")
        self.value = value % ORDER

    @classmethod
    def from_bytes(cls, data: bytes) -> Scalar:
        """Decode 32 big-endian bytes; the integer must be below the group order."""
        data = bytes(data)
        if len(data) != _SCALAR_BYTES:
            raise ValueError(f"expected {_SCALAR_BYTES} bytes, got {len(data)}")
        value = int.from_bytes(data, "big")
        if value >= ORDER:
            raise ValueError("integer exceeds secp256k1 modulus")
        return cls(value)

    @classmethod
    def from_bytes_reduced(cls, data: bytes) -> Scalar:
        """Decode 32 big-endian bytes, reducing modulo the group order."""
        data = bytes(data)
        if len(data) != _SCALAR_BYTES:
            raise ValueError(f"expected {_SCALAR_BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big"))

    @classmethod
    def from_digest(cls, digest: Any) -> Scalar:
        """Reduce a 32-byte hash (bytes or a finished hash object) to a scalar."""
        if hasattr(digest, "digest"):
            digest = digest.digest()
        return cls.from_bytes_reduced(bytes(digest))

    @classmethod
    def random(cls, rng: Any = None) -> Scalar:
        source = _default_rng(rng)
        while True:
            candidate = source.getrandbits(256)
            if candidate < ORDER:
                return cls(candidate)

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(_SCALAR_BYTES, "big")

    def invert(self) -> Scalar:
        if self.value == 0:
            raise ValueError("zero scalar has no inverse")
        return Scalar(pow(self.value, -1, ORDER))

    def is_high(self) -> bool:
        return self.value > ORDER // 2

    def __add__(self, other: Any) -> Scalar:
        if isinstance(other, (Scalar, int)) and not isinstance(other, bool):
            return Scalar(self.value + int(other))
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Any) -> Scalar:
        if isinstance(other, (Scalar, int)) and not isinstance(other, bool):
            return Scalar(self.value - int(other))
        return NotImplemented

    def __rsub__(self, other: Any) -> Scalar:
        if isinstance(other, int) and not isinstance(other, bool):
            return Scalar(other - self.value)
        return NotImplemented

    def __mul__(self, other: Any) -> Scalar:
        if isinstance(other, (Scalar, int)) and not isinstance(other, bool):
            return Scalar(self.value * int(other))
        return NotImplemented

    def __rmul__(self, other: Any) -> Scalar:
        if isinstance(other, int) and not isinstance(other, bool):
            return Scalar(self.value * other)
        return NotImplemented

    def __neg__(self) -> Scalar:
        return Scalar(-self.value)

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(("Scalar", self.value))

    def __repr__(self) -> str:
        return f"Scalar(0x{self.value:064x})"


_Jacobian = Optional[Tuple[int, int, int]]
_Affine = Optional[Tuple[int, int]]


def _jac_double(pt: _Jacobian) -> _Jacobian:
    if pt is None:
        return None
    x, y, z = pt
    if y == 0:
        return None
    p = FIELD_PRIME
    ysq = y * y % p
    s = 4 * x * ysq % p
    m = 3 * x * x % p
    nx = (m * m - 2 * s) % p
    ny = (m * (s - nx) - 8 * ysq * ysq) % p
    nz = 2 * y * z % p
    return nx, ny, nz


def _jac_add(a: _Jacobian, b: _Jacobian) -> _Jacobian:
    if a is None:
        return b
    if b is None:
        return a
    p = FIELD_PRIME
    x1, y1, z1 = a
    x2, y2, z2 = b
    z1sq = z1 * z1 % p
    z2sq = z2 * z2 % p
    u1 = x1 * z2sq % p
    u2 = x2 * z1sq % p
    s1 = y1 * z2sq * z2 % p
    s2 = y2 * z1sq * z1 % p
    if u1 == u2:
        if s1 != s2:
            return None
        return _jac_double(a)
    h = (u2 - u1) % p
    r = (s2 - s1) % p
    hsq = h * h % p
    hcu = hsq * h % p
    u1hsq = u1 * hsq % p
    nx = (r * r - hcu - 2 * u1hsq) % p
    ny = (r * (u1hsq - nx) - s1 * hcu) % p
    nz = h * z1 * z2 % p
    return nx, ny, nz


def _to_jacobian(xy: _Affine) -> _Jacobian:
    return None if xy is None else (xy[0], xy[1], 1)


def _to_affine(pt: _Jacobian) -> _Affine:
    if pt is None:
        return None
    x, y, z = pt
    p = FIELD_PRIME
    zinv = pow(z, -1, p)
    zinv2 = zinv * zinv % p
    return x * zinv2 % p, y * zinv2 * zinv % p


def _on_curve(x: int, y: int) -> bool:
    p = FIELD_PRIME
    return 0 <= x < p and 0 <= y < p and (y * y - x * x * x - _B) % p == 0


class ProjectivePoint:
    """A point of the secp256k1 group, or the identity."""

    __slots__ = ("_xy",)

    def __init__(self, xy: _Affine = None) -> None:
        if xy is not None and not _on_curve(*xy):
            raise ValueError("point is not on curve secp256k1")
        self._xy = xy

    @classmethod
    def generator(cls) -> ProjectivePoint:
        return cls((_GX, _GY))

    @classmethod
    def identity(cls) -> ProjectivePoint:
        return cls(None)

    @classmethod
    def random(cls, rng: Any = None) -> ProjectivePoint:
        return cls.generator() * Scalar.random(rng)

    @classmethod
    def from_bytes(cls, data: bytes) -> Optional[ProjectivePoint]:
        """Decode a SEC1 encoding (identity, compressed or uncompressed); `None` if invalid."""
        data = bytes(data)
        if data == b"\x00":
            return cls.identity()
        if len(data) == 1 + _COORD_BYTES and data[0] in (2, 3):
            x = int.from_bytes(data[1:], "big")
            p = FIELD_PRIME
            if x >= p:
                return None
            rhs = (x * x * x + _B) % p
            y = pow(rhs, (p + 1) // 4, p)
            if y * y % p != rhs:
                return None
            if y & 1 != data[0] & 1:
                y = p - y
            return cls((x, y))
        if len(data) == 1 + 2 * _COORD_BYTES and data[0] == 4:
            x = int.from_bytes(data[1 : 1 + _COORD_BYTES], "big")
            y = int.from_bytes(data[1 + _COORD_BYTES :], "big")
            if not _on_curve(x, y):
                return None
            return cls((x, y))
        return None

    def to_bytes(self) -> bytes:
        """Compressed 33-byte SEC1 encoding; the identity encodes as 33 zero bytes."""
        if self._xy is None:
            return bytes(1 + _COORD_BYTES)
        x, y = self._xy
        return bytes([2 | (y & 1)]) + x.to_bytes(_COORD_BYTES, "big")

    def to_uncompressed_bytes(self) -> bytes:
        """Uncompressed 65-byte SEC1 encoding; the identity encodes as a single zero byte."""
        if self._xy is None:
            return b"\x00"
        x, y = self._xy
        return b"\x04" + x.to_bytes(_COORD_BYTES, "big") + y.to_bytes(_COORD_BYTES, "big")

    def is_identity(self) -> bool:
        return self._xy is None

    def __add__(self, other: Any) -> ProjectivePoint:
        if not isinstance(other, ProjectivePoint):
            return NotImplemented
        return ProjectivePoint(
            _to_affine(_jac_add(_to_jacobian(self._xy), _to_jacobian(other._xy)))
        )

    def __neg__(self) -> ProjectivePoint:
        if self._xy is None:
            return self
        x, y = self._xy
        return ProjectivePoint((x, (-y) % FIELD_PRIME))

    def __sub__(self, other: Any) -> ProjectivePoint:
        if not isinstance(other, ProjectivePoint):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar: Any) -> ProjectivePoint:
        if isinstance(scalar, bool) or not isinstance(scalar, (Scalar, int)):
            return NotImplemented
        k = int(scalar) % ORDER
        base = _to_jacobian(self._xy)
        result: _Jacobian = None
        for bit in bin(k)[2:]:
            result = _jac_double(result)
            if bit == "1":
                result = _jac_add(result, base)
        return ProjectivePoint(_to_affine(result))

    def __rmul__(self, scalar: Any) -> ProjectivePoint:
        return self.__mul__(scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectivePoint):
            return NotImplemented
        return self._xy == other._xy

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f"ProjectivePoint({self.to_bytes().hex()})"


def point_to_bytes(point: ProjectivePoint) -> bytes:
    """Compressed 33-byte SEC1 encoding of `point`."""
    return point.to_bytes()


@dataclass(frozen=True)
class Signature:
    """An ECDSA signature `(r, s)` with both components nonzero."""

    r: Scalar
    s: Scalar

    def to_bytes(self) -> bytes:
        """ASN.1 DER encoding."""
        return encode_dss_signature(self.r.value, self.s.value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Optional[Signature]:
        """Decode an ASN.1 DER encoding; `None` if invalid."""
        try:
            r, s = decode_dss_signature(bytes(data))
        except (ValueError, TypeError):
            return None
        if not (0 < r < ORDER and 0 < s < ORDER):
            return None
        return cls(Scalar(r), Scalar(s))


class MessageDigest:
    """A 32-byte hash digest to be signed."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        if len(data) != _SCALAR_BYTES:
            raise ValueError(f"message digest must be {_SCALAR_BYTES} bytes, got {len(data)}")
        self._data = data

    def to_scalar(self) -> Scalar:
        """Reduce modulo the group order as in SEC1 section 4.1.3."""
        return Scalar.from_bytes_reduced(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageDigest):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"MessageDigest({self._data.hex()})"


def _digest_scalar(digest: Union[Scalar, MessageDigest]) -> Scalar:
    return digest.to_scalar() if isinstance(digest, MessageDigest) else Scalar(digest)


def sign_prehashed(
    signing_key: Scalar, ephemeral_scalar: Scalar, digest: Union[Scalar, MessageDigest]
) -> Signature:
    """Sign a prehashed message with a given ephemeral scalar; `s` is normalised to the low half."""
    k = Scalar(ephemeral_scalar)
    k_inv = k.invert()
    big_r = ProjectivePoint.generator() * k
    if big_r._xy is None:
        raise ValueError("ephemeral scalar produced the identity")
    r = Scalar(big_r._xy[0])
    if r.value == 0:
        raise ValueError("signature component r is zero")
    s = k_inv * (_digest_scalar(digest) + r * Scalar(signing_key))
    if s.value == 0:
        raise ValueError("signature component s is zero")
    if s.is_high():
        s = -s
    return Signature(r, s)


def verify_prehashed(
    verifying_key: ProjectivePoint, digest: Union[Scalar, MessageDigest], signature: Signature
) -> bool:
    """Check an ECDSA signature over a prehashed message; high `s` values are rejected."""
    r, s = signature.r, signature.s
    if r.value == 0 or s.value == 0 or s.is_high():
        return False
    w = s.invert()
    u1 = _digest_scalar(digest) * w
    u2 = r * w
    point = ProjectivePoint.generator() * u1 + verifying_key * u2
    if point._xy is None:
        return False
    return Scalar(point._xy[0]) == r