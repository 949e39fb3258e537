"""Schnorr proof of knowledge of a discrete log."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from threshkit import constants
from threshkit.collections.typed_usize import TypedUsize
from threshkit.crypto.secp256k1 import ProjectivePoint, Scalar, point_to_bytes

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Statement:
    """`target == scalar * base`."""

    prover_id: TypedUsize
    base: ProjectivePoint
    target: ProjectivePoint


@dataclass(frozen=True)
class Witness:
    scalar: Scalar


@dataclass(frozen=True)
class Proof:
    c: Scalar
    t: Scalar


def _challenge(stmt: Statement, alpha: ProjectivePoint) -> Scalar:
    hasher = hashlib.sha256()
    hasher.update(bytes([constants.SCHNORR_PROOF_TAG]))
    hasher.update(TypedUsize(int(stmt.prover_id)).to_bytes())
    hasher.update(point_to_bytes(stmt.base))
    hasher.update(point_to_bytes(stmt.target))
    hasher.update(point_to_bytes(alpha))
    return Scalar.from_digest(hasher)


def prove(stmt: Statement, wit: Witness) -> Proof:
    a = Scalar.random()
    alpha = stmt.base * a
    c = _challenge(stmt, alpha)
    return Proof(c=c, t=a - c * wit.scalar)


def verify(stmt: Statement, proof: Proof) -> bool:
    alpha = stmt.base * proof.t + stmt.target * proof.c
    if _challenge(stmt, alpha) == proof.c:
        return True
    log.warning("schnorr proof: verify failed")
    return False