"""Proof of knowledge of a discrete log modulo a composite (Girault's scheme).

With a 128-bit security target the parameters are K = K' = 128 and S = 256.
The modulus is assumed to be a product of safe primes, and the base `g` is
assumed to be an asymmetric basis, i.e. its Jacobi symbol modulo `n` is -1.
"""

from __future__ import annotations

import hashlib
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Tuple, TypeVar

from threshkit import constants
from threshkit.crypto.paillier import is_probable_prime, member_of_mul_group, random_below

log = logging.getLogger(__name__)

W = TypeVar("W")
P = TypeVar("P")

# The challenge is a full SHA-256 output, hence 256 bits rather than 128.
CHALLENGE_K = 256
SECURITY_PARAM_K_PRIME = 128
S_WITNESS_SIZE = 256

# s^-1 is taken modulo phi(N), which has at most MODULUS_MAX_SIZE bits.
S_INV_WITNESS_SIZE = constants.MODULUS_MAX_SIZE


class NIZKStatement(ABC, Generic[W, P]):
    """A statement with a non-interactive zero-knowledge proof of a witness."""

    @abstractmethod
    def prove(self, wit: W, domain: bytes) -> P:
        """Produce a proof that `wit` is a witness for this statement."""

    @abstractmethod
    def verify(self, proof: P, domain: bytes) -> bool:
        """Check a proof of this statement."""


def r_mask_size(witness_size: int) -> int:
    """Bit length of the mask `r` needed to hide a witness of `witness_size` bits."""
    return CHALLENGE_K + SECURITY_PARAM_K_PRIME + witness_size


def _int_bytes(value: int) -> bytes:
    """Minimal big-endian encoding of a non-negative integer."""
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def legendre_symbol(a: int, p: int) -> int:
    """The Legendre symbol `(a | p) = a^((p-1)/2) mod p`, as 1 or -1."""
    return 1 if pow(a, (p - 1) >> 1, p) == 1 else -1


def jacobi_symbol(a: int, p: int, q: int) -> int:
    """The Jacobi symbol `(a | pq) = (a | p) (a | q)`."""
    return legendre_symbol(a, p) * legendre_symbol(a, q)


@dataclass(frozen=True)
class CompositeDLogProof:
    x: int
    y: int


@dataclass(frozen=True)
class CompositeDLogStmt(NIZKStatement[int, CompositeDLogProof]):
    """The statement `v = g^(-s) mod n` for a witness `s` of `witness_size` bits."""

    n: int
    g: int
    v: int
    witness_size: int = S_WITNESS_SIZE

    @classmethod
    def setup(
        cls, rng: Any, n: int, p: int, q: int, totient: int
    ) -> Tuple[CompositeDLogStmt, int, CompositeDLogStmt, int]:
        """Sample an asymmetric basis `g` and an odd witness `s` with `g^(-s)` also asymmetric.

        Returns `(stmt, s, stmt_inv, s_inv)`: `stmt` is `v = g^(-s)` with witness `s`,
        and `stmt_inv` is `g = v^(-s^-1)` with witness `s^-1 mod totient`.
        """
        half_range = 1 << (S_WITNESS_SIZE - 1)
        while True:
            g = random_below(n, rng)
            if math.gcd(g, n) != 1 or jacobi_symbol(g, p, q) != -1:
                continue

            # Odd s is invertible modulo phi(n) with overwhelming probability for safe primes.
            while True:
                s = (random_below(half_range, rng) << 1) + 1
                try:
                    s_inv = pow(s, -1, totient)
                except ValueError:
                    log.warning(
                        "are you using unsafe primes? random `s` not in `Z*_phi(n)`, "
                        "which is cryptographically unreachable with safe primes. trying again..."
                    )
                    continue
                break

            v = pow(g, -s, n)
            if jacobi_symbol(v, p, q) != -1:
                continue

            stmt = cls(n=n, g=g, v=v)
            return stmt, s, stmt.get_inverse_statement(), s_inv

    def get_inverse_statement(self) -> CompositeDLogStmt:
        """For `v = g^(-s)`, the statement `g = v^(-s^-1)`; shows `g` and `v` have equal order."""
        return CompositeDLogStmt(n=self.n, g=self.v, v=self.g, witness_size=S_INV_WITNESS_SIZE)

    def _challenge(self, domain: bytes, x: int) -> int:
        hasher = hashlib.sha256()
        hasher.update(bytes([constants.COMPOSITE_DLOG_PROOF_TAG]))
        hasher.update(bytes(domain))
        hasher.update(_int_bytes(x))
        hasher.update(_int_bytes(self.g))
        hasher.update(_int_bytes(self.v))
        hasher.update(_int_bytes(self.n))
        return int.from_bytes(hasher.digest(), "big")

    def prove(self, wit: int, domain: bytes) -> CompositeDLogProof:
        r = random_below(1 << r_mask_size(self.witness_size))
        x = pow(self.g, r, self.n)
        e = self._challenge(domain, x)
        # Computed over the integers, not modulo anything.
        return CompositeDLogProof(x=x, y=r + e * wit)

    def verify(self, proof: CompositeDLogProof, domain: bytes) -> bool:
        # Sanity checks on the statement; a bad statement only harms its author.
        n = self.n
        if n <= 0 or not (
            constants.MODULUS_MIN_SIZE <= n.bit_length() <= constants.MODULUS_MAX_SIZE
        ):
            return False
        if is_probable_prime(n):
            return False
        if not member_of_mul_group(self.g, n) or not member_of_mul_group(self.v, n):
            return False

        # Required checks on the proof.
        if not member_of_mul_group(proof.x, n):
            return False
        bound = r_mask_size(self.witness_size)
        if proof.y < 0 or proof.y.bit_length() > bound:
            log.warning(
                "composite dlog proof: y (%d bits) is not in range %d",
                max(proof.y.bit_length(), 0),
                bound,
            )
            return False

        e = self._challenge(domain, proof.x)
        if pow(self.g, proof.y, n) * pow(self.v, e, n) % n == proof.x:
            return True
        log.warning("composite dlog proof: failed to verify")
        return False