"""Paillier encryption over arbitrary-precision integers, with helpers for secp256k1 scalars."""

from __future__ import annotations

import math
import secrets
from dataclasses import dataclass, field
from typing import Any, Tuple

from threshkit.collections.vecmap import TofnFatal
from threshkit.crypto.secp256k1 import ORDER, Scalar


def _sieve(limit: int) -> list[int]:
    flags = bytearray([1]) * limit
    flags[0:2] = b"\x00\x00"
    for i in range(2, int(limit**0.5) + 1):
        if flags[i]:
            flags[i * i :: i] = bytearray(len(flags[i * i :: i]))
    return [i for i, flag in enumerate(flags) if flag]


_SMALL_PRIMES = _sieve(2000)
_WITNESS_BASES = _SMALL_PRIMES[:12]
_EXTRA_ROUNDS = 20


def _rng(rng: Any) -> Any:
    return rng if rng is not None else secrets.SystemRandom()


def member_of_mod(x: int, n: int) -> bool:
    """True iff `x` lies in `Z_n`, i.e. `0 <= x < n`."""
    return 0 <= x < n


def member_of_mul_group(x: int, n: int) -> bool:
    """True iff `x` lies in the multiplicative group `Z*_n`."""
    return 1 <= x < n and math.gcd(x, n) == 1


def _miller_rabin(n: int, d: int, r: int, base: int) -> bool:
    x = pow(base, d, n)
    if x in (1, n - 1):
        return True
    for _ in range(r - 1):
        x = x * x % n
        if x == n - 1:
            return True
    return False


def is_probable_prime(n: int) -> bool:
    """Miller-Rabin primality test, deterministic below about 3.3e24."""
    if n < 2:
        return False
    for prime in _SMALL_PRIMES:
        if n == prime:
            return True
        if n % prime == 0:
            return False
    d, r = n - 1, 0
    while d % 2 == 0:
        d //= 2
        r += 1
    if not all(_miller_rabin(n, d, r, base) for base in _WITNESS_BASES):
        return False
    if n < 3_317_044_064_679_887_385_961_981:
        return True
    source = secrets.SystemRandom()
    return all(
        _miller_rabin(n, d, r, source.randrange(2, n - 1)) for _ in range(_EXTRA_ROUNDS)
    )


def random_prime(bits: int, rng: Any = None) -> int:
    """A random prime of exactly `bits` bits."""
    if bits < 2:
        raise ValueError(f"cannot generate a prime of {bits} bits")
    source = _rng(rng)
    while True:
        candidate = source.getrandbits(bits) | (1 << (bits - 1)) | 1
        if is_probable_prime(candidate):
            return candidate


def _random_safe_prime(bits: int, rng: Any = None) -> int:
    """A random prime `p` of exactly `bits` bits with `(p - 1) / 2` also prime."""
    if bits < 3:
        raise ValueError(f"cannot generate a safe prime of {bits} bits")
    source = _rng(rng)
    while True:
        half = source.getrandbits(bits - 1) | (1 << (bits - 2)) | 1
        candidate = 2 * half + 1
        if any(
            (half % prime == 0 and half != prime) or (candidate % prime == 0 and candidate != prime)
            for prime in _SMALL_PRIMES
        ):
            continue
        if pow(2, candidate - 1, candidate) != 1:
            continue
        if is_probable_prime(half) and is_probable_prime(candidate):
            return candidate


def random_below(n: int, rng: Any = None) -> int:
    """A uniformly random integer in `[0, n)`."""
    if n <= 0:
        raise ValueError(f"upper bound {n} must be positive")
    source = _rng(rng)
    bits = n.bit_length()
    while True:
        candidate = source.getrandbits(bits)
        if candidate < n:
            return candidate


def secp256k1_modulus() -> int:
    """The order of the secp256k1 group."""
    return ORDER


def to_bigint(scalar: Scalar) -> int:
    return scalar.value


def to_scalar(value: int) -> Scalar:
    """Reduce an integer modulo the secp256k1 group order."""
    return Scalar(value % ORDER)


@dataclass(frozen=True)
class Plaintext:
    value: int

    @classmethod
    def generate(cls, n: int) -> Plaintext:
        """A random plaintext in `[0, n)`."""
        return cls(random_below(n))

    @classmethod
    def from_scalar(cls, scalar: Scalar) -> Plaintext:
        return cls(to_bigint(scalar))

    def to_scalar(self) -> Scalar:
        return to_scalar(self.value)


@dataclass(frozen=True)
class Ciphertext:
    value: int


@dataclass(frozen=True)
class Randomness:
    value: int = field(repr=False)

    @classmethod
    def generate(cls, n: int, rng: Any = None) -> Randomness:
        """A random number in `[0, n)`."""
        return cls(random_below(n, rng))


@dataclass(frozen=True)
class EncryptionKey:
    """A Paillier public key with modulus `n` and generator `n + 1`."""

    n: int

    def __post_init__(self) -> None:
        if self.n <= 1:
            raise ValueError(f"modulus {self.n} is too small")

    def nn(self) -> int:
        return self.n * self.n

    def sample_randomness(self) -> Randomness:
        return Randomness(random_below(self.n))

    def random_plaintext(self) -> Plaintext:
        return Plaintext(random_below(self.n))

    def validate_plaintext(self, p: Plaintext) -> bool:
        return member_of_mod(p.value, self.n)

    def validate_ciphertext(self, c: Ciphertext) -> bool:
        return member_of_mul_group(c.value, self.nn())

    def validate_randomness(self, r: Randomness) -> bool:
        return member_of_mul_group(r.value, self.n)

    def encrypt(self, p: Plaintext) -> Tuple[Ciphertext, Randomness]:
        # A random element of Z_N is coprime to N with overwhelming probability.
        r = self.sample_randomness()
        return self.encrypt_with_randomness(p, r), r

    def encrypt_with_randomness(self, p: Plaintext, r: Randomness) -> Ciphertext:
        nn = self.nn()
        return Ciphertext((1 + p.value * self.n) * pow(r.value, self.n, nn) % nn)

    def add(self, c1: Ciphertext, c2: Ciphertext) -> Ciphertext:
        """Homomorphic addition of the underlying plaintexts."""
        return Ciphertext(c1.value * c2.value % self.nn())

    def mul(self, c: Ciphertext, p: Plaintext) -> Ciphertext:
        """Homomorphic multiplication of the underlying plaintext by `p`."""
        return Ciphertext(pow(c.value, p.value, self.nn()))


@dataclass(frozen=True)
class DecryptionKey:
    """A Paillier secret key given by its two prime factors."""

    p: int = field(repr=False)
    q: int = field(repr=False)
    _n: int = field(init=False, repr=False, compare=False)
    _totient: int = field(init=False, repr=False, compare=False)
    _n_inv: int = field(init=False, repr=False, compare=False)
    _mu: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.p < 2 or self.q < 2 or self.p == self.q:
            raise TofnFatal("decryption key needs two distinct primes")
        n = self.p * self.q
        totient = (self.p - 1) * (self.q - 1)
        if math.gcd(n, totient) != 1:
            raise TofnFatal("modulus is not coprime to its totient")
        object.__setattr__(self, "_n", n)
        object.__setattr__(self, "_totient", totient)
        object.__setattr__(self, "_n_inv", pow(n, -1, totient))
        object.__setattr__(self, "_mu", pow(totient, -1, n))

    def n(self) -> int:
        return self._n

    def totient(self) -> int:
        return self._totient

    def n_inv(self) -> int:
        """The inverse of `n` modulo the totient."""
        return self._n_inv

    def encryption_key(self) -> EncryptionKey:
        return EncryptionKey(self._n)

    def decrypt(self, c: Ciphertext) -> Plaintext:
        n = self._n
        u = pow(c.value, self._totient, n * n)
        return Plaintext((u - 1) // n * self._mu % n)

    def decrypt_with_randomness(self, c: Ciphertext) -> Tuple[Plaintext, Randomness]:
        """Recover both the plaintext and the randomness used to encrypt it."""
        m = self.decrypt(c)
        n = self._n
        nn = n * n
        r_to_n = c.value * (1 - m.value * n) % nn
        r = pow(r_to_n % n, self._n_inv, n)
        return m, Randomness(r)


def _keypair(p: int, q: int) -> Tuple[EncryptionKey, DecryptionKey]:
    dk = DecryptionKey(p, q)
    return dk.encryption_key(), dk


def keygen_unsafe(rng: Any = None) -> Tuple[EncryptionKey, DecryptionKey]:
    """A key pair from two random 1024-bit primes that are not safe primes."""
    p = random_prime(1024, rng)
    q = random_prime(1024, rng)
    if p == q:
        raise TofnFatal("generated equal primes")
    return _keypair(p, q)


def keygen(rng: Any = None) -> Tuple[EncryptionKey, DecryptionKey]:
    """A key pair from two random 1024-bit safe primes."""
    p = _random_safe_prime(1024, rng)
    q = _random_safe_prime(1024, rng)
    if p == q:
        raise TofnFatal("generated equal primes")
    return _keypair(p, q)