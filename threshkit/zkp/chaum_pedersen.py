"""Chaum-Pedersen proof that two points share one discrete log over two bases."""

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
    """`target1 == scalar * base1` and `target2 == scalar * base2`."""

    prover_id: TypedUsize
    base1: ProjectivePoint
    base2: ProjectivePoint
    target1: ProjectivePoint
    target2: ProjectivePoint


@dataclass(frozen=True)
class Witness:
    scalar: Scalar


@dataclass(frozen=True)
class Proof:
    alpha1: ProjectivePoint
    alpha2: ProjectivePoint
    t: Scalar


def _challenge(stmt: Statement, alpha1: ProjectivePoint, alpha2: ProjectivePoint) -> Scalar:
    hasher = hashlib.sha256()
    hasher.update(bytes([constants.CHAUM_PEDERSEN_PROOF_TAG]))
    hasher.update(TypedUsize(int(stmt.prover_id)).to_bytes())
    for point in (stmt.base1, stmt.base2, stmt.target1, stmt.target2, alpha1, alpha2):
        hasher.update(point_to_bytes(point))
    return Scalar.from_digest(hasher)


def prove(stmt: Statement, wit: Witness) -> Proof:
    a = Scalar.random()
    alpha1 = stmt.base1 * a
    alpha2 = stmt.base2 * a
    c = _challenge(stmt, alpha1, alpha2)
    return Proof(alpha1=alpha1, alpha2=alpha2, t=a + c * wit.scalar)


def verify(stmt: Statement, proof: Proof) -> bool:
    c = _challenge(stmt, proof.alpha1, proof.alpha2)
    ok1 = stmt.base1 * proof.t == proof.alpha1 + stmt.target1 * c
    ok2 = stmt.base2 * proof.t == proof.alpha2 + stmt.target2 * c
    if ok1 and ok2:
        return True
    if not ok1 and not ok2:
        failed = "both targets"
    elif not ok1:
        failed = "target1"
    else:
        failed = "target2"
    log.warning("chaum pedersen proof: verify failed for %s", failed)
    return False