"""Pedersen commitments on secp256k1 and proofs of knowledge of their openings."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from threshkit import constants
from threshkit.collections.typed_usize import TypedUsize
from threshkit.crypto.secp256k1 import ProjectivePoint, Scalar, point_to_bytes

log = logging.getLogger(__name__)

# Coordinates of a point of unknown discrete log with respect to the generator.
_ALT_X = 0x09C9F8E1C7E25CB871391BEBE1F5807AC5CCCA85C5A1DD57338518C490481DAE
_ALT_Y = 0x4C5A4DF7C3AD74F18E7D87FF5D16A43C168720A9BA354D2C2826D05279EA4984

_ZERO_POINT_BYTES = bytes(33)


@dataclass(frozen=True)
class Statement:
    prover_id: TypedUsize
    commit: ProjectivePoint


@dataclass(frozen=True)
class Witness:
    msg: Scalar
    randomness: Scalar


@dataclass(frozen=True)
class Proof:
    alpha: ProjectivePoint
    t: Scalar
    u: Scalar


@dataclass(frozen=True)
class StatementWc:
    """A statement with the additional check `msg_g == msg * g`."""

    stmt: Statement
    msg_g: ProjectivePoint
    g: ProjectivePoint


@dataclass(frozen=True)
class ProofWc:
    proof: Proof
    beta: ProjectivePoint


@lru_cache(maxsize=1)
def alternate_generator() -> ProjectivePoint:
    """The second commitment base `h`."""
    return ProjectivePoint((_ALT_X, _ALT_Y))


def commit(msg: Scalar) -> Tuple[ProjectivePoint, Scalar]:
    """Commit to `msg` with fresh randomness; returns the commitment and the randomness."""
    randomness = Scalar.random()
    return commit_with_randomness(msg, randomness), randomness


def commit_with_randomness(msg: Scalar, randomness: Scalar) -> ProjectivePoint:
    """`g^msg h^randomness`."""
    return ProjectivePoint.generator() * msg + alternate_generator() * randomness


def _opt_bytes(point: Optional[ProjectivePoint]) -> bytes:
    return _ZERO_POINT_BYTES if point is None else point_to_bytes(point)


def _challenge(
    stmt: Statement,
    msg_g_g: Optional[Tuple[ProjectivePoint, ProjectivePoint]],
    alpha: ProjectivePoint,
    beta: Optional[ProjectivePoint],
) -> Scalar:
    msg_g, g = msg_g_g if msg_g_g is not None else (None, None)
    hasher = hashlib.sha256()
    hasher.update(bytes([constants.PEDERSEN_PROOF_TAG]))
    hasher.update(TypedUsize(int(stmt.prover_id)).to_bytes())
    hasher.update(point_to_bytes(stmt.commit))
    hasher.update(_opt_bytes(msg_g))
    hasher.update(_opt_bytes(g))
    hasher.update(point_to_bytes(alpha))
    hasher.update(_opt_bytes(beta))
    return Scalar.from_digest(hasher)


def _prove_inner(
    stmt: Statement,
    msg_g_g: Optional[Tuple[ProjectivePoint, ProjectivePoint]],
    wit: Witness,
) -> Tuple[Proof, Optional[ProjectivePoint]]:
    a = Scalar.random()
    b = Scalar.random()
    alpha = commit_with_randomness(a, b)
    beta = None if msg_g_g is None else msg_g_g[1] * a
    c = _challenge(stmt, msg_g_g, alpha, beta)
    t = a + c * wit.msg
    u = b + c * wit.randomness
    return Proof(alpha=alpha, t=t, u=u), beta


def _verify_inner(
    stmt: Statement,
    proof: Proof,
    msg_g_g_beta: Optional[Tuple[ProjectivePoint, ProjectivePoint, ProjectivePoint]],
) -> bool:
    msg_g_g = None if msg_g_g_beta is None else msg_g_g_beta[:2]
    beta = None if msg_g_g_beta is None else msg_g_g_beta[2]
    c = _challenge(stmt, msg_g_g, proof.alpha, beta)

    if msg_g_g_beta is not None:
        msg_g, g, beta = msg_g_g_beta
        if g * proof.t != msg_g * c + beta:
            log.warning("pedersen proof: 'wc' check failed")
            return False

    if commit_with_randomness(proof.t, proof.u) != stmt.commit * c + proof.alpha:
        log.warning("pedersen proof: verify failed")
        return False
    return True


def prove(stmt: Statement, wit: Witness) -> Proof:
    return _prove_inner(stmt, None, wit)[0]


def verify(stmt: Statement, proof: Proof) -> bool:
    return _verify_inner(stmt, proof, None)


def prove_wc(stmt: StatementWc, wit: Witness) -> ProofWc:
    proof, beta = _prove_inner(stmt.stmt, (stmt.msg_g, stmt.g), wit)
    assert beta is not None
    return ProofWc(proof=proof, beta=beta)


def verify_wc(stmt: StatementWc, proof: ProofWc) -> bool:
    return _verify_inner(stmt.stmt, proof.proof, (stmt.msg_g, stmt.g, proof.beta))