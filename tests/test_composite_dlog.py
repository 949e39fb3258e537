import pytest

from threshkit.constants import MODULUS_MIN_SIZE
from threshkit.crypto.paillier import keygen_unsafe
from threshkit.zk.composite_dlog import (
    S_INV_WITNESS_SIZE,
    S_WITNESS_SIZE,
    CompositeDLogProof,
    CompositeDLogStmt,
    jacobi_symbol,
    legendre_symbol,
    r_mask_size,
)


@pytest.fixture(scope="module")
def keypair():
    return keygen_unsafe()


@pytest.fixture(scope="module")
def statements(keypair):
    ek, dk = keypair
    return CompositeDLogStmt.setup(None, ek.n, dk.p, dk.q, dk.totient())


def test_r_mask_size():
    assert r_mask_size(S_WITNESS_SIZE) == 640
    assert r_mask_size(S_INV_WITNESS_SIZE) == 2432


def test_legendre_symbol_small_prime():
    # quadratic residues mod 7 are 1, 2, 4
    assert [legendre_symbol(a, 7) for a in range(1, 7)] == [1, 1, -1, 1, -1, -1]


def test_jacobi_symbol_small():
    # (2 | 3) = -1, (2 | 7) = 1
    assert jacobi_symbol(2, 3, 7) == -1
    assert jacobi_symbol(4, 3, 7) == 1


def test_setup_statements(statements, keypair):
    ek, dk = keypair
    stmt1, witness1, stmt2, witness2 = statements
    assert stmt1.n == ek.n
    assert stmt1.v == pow(stmt1.g, -witness1, ek.n)
    assert jacobi_symbol(stmt1.g, dk.p, dk.q) == -1
    assert jacobi_symbol(stmt1.v, dk.p, dk.q) == -1
    assert stmt2 == stmt1.get_inverse_statement()
    assert (stmt2.g, stmt2.v) == (stmt1.v, stmt1.g)
    assert witness1 * witness2 % dk.totient() == 1


def test_basic_correctness(statements, keypair):
    _, dk = keypair
    stmt1, witness1, stmt2, witness2 = statements

    assert witness1.bit_length() <= S_WITNESS_SIZE
    assert witness1.bit_length() >= S_WITNESS_SIZE // 2
    assert witness2.bit_length() <= S_INV_WITNESS_SIZE
    assert witness2.bit_length() >= S_INV_WITNESS_SIZE // 2

    domain = (1).to_bytes(4, "big")
    proof1 = stmt1.prove(witness1, domain)
    proof2 = stmt2.prove(witness2, domain)

    assert stmt1.verify(proof1, domain)
    assert stmt2.verify(proof2, domain)

    other_domain = (10).to_bytes(4, "big")
    assert not stmt1.verify(proof1, other_domain)
    assert not stmt2.verify(proof2, other_domain)

    bad_proof1 = CompositeDLogProof(proof1.x, proof1.y - 1)
    bad_proof2 = CompositeDLogProof(proof2.x, proof2.y - 1)
    assert not stmt1.verify(bad_proof1, domain)
    assert not stmt2.verify(bad_proof2, domain)

    # y + a*phi(N) gives the same g^y but must fail the bounds check
    long_proof1 = CompositeDLogProof(proof1.x, proof1.y + dk.totient())
    shift = r_mask_size(S_INV_WITNESS_SIZE) - MODULUS_MIN_SIZE + 1
    long_proof2 = CompositeDLogProof(proof2.x, proof2.y + (dk.totient() << shift))
    assert not stmt1.verify(long_proof1, domain)
    assert not stmt2.verify(long_proof2, domain)


def test_verify_rejects_small_modulus(statements):
    stmt1, witness1, _, _ = statements
    small = CompositeDLogStmt(n=15, g=2, v=8)
    proof = small.prove(3, b"d")
    assert small.verify(proof, b"d") is False
    assert stmt1.verify(CompositeDLogProof(0, 1), b"d") is False


def test_verify_rejects_negative_y(statements):
    stmt1, witness1, _, _ = statements
    proof = stmt1.prove(witness1, b"dom")
    assert stmt1.verify(CompositeDLogProof(proof.x, -proof.y), b"dom") is False