# threshkit

Building blocks for threshold ECDSA protocols over secp256k1.

## What is inside

- `threshkit.collections` — containers indexed by party:
  - `typed_usize.TypedUsize`, an unsigned 64-bit index with an 8-byte big-endian encoding;
  - `vecmap.VecMap` and `vecmap.HoleVecMap` (a map with one index, the hole, left out);
  - `fillvecmap.FillVecMap` and `fillvecmap.Subset` for collecting values as they arrive;
  - `p2ps.FillP2ps`, `p2ps.P2ps` and `p2ps.FullP2ps` for point-to-point message grids,
    plus `p2ps.iter_p2ps` to flatten them into `(sender, receiver, value)` triples;
  - `zip.zip2` / `zip.zip3` for walking several maps side by side.
- `threshkit.crypto`:
  - `secp256k1` — `Scalar`, `ProjectivePoint` (SEC1 compressed and uncompressed
    encodings), `Signature` (DER), `MessageDigest`, and `sign_prehashed` /
    `verify_prehashed`;
  - `paillier` — `keygen` (safe primes), `keygen_unsafe`, `EncryptionKey`,
    `DecryptionKey`, `Plaintext`, `Ciphertext`, `Randomness`, homomorphic `add` and `mul`,
    and the membership checks `member_of_mod` / `member_of_mul_group`;
  - `hash` — SHA-256 commitments bound to a tag and a peer index (`commit`,
    `commit_with_randomness`);
  - `rng` — `ChaCha20Rng` seeded by HMAC-SHA256 from a `SecretRecoveryKey` and a
    session nonce, or from a signing key and a message digest.
- `threshkit.zkp` — `schnorr`, `chaum_pedersen` and `pedersen` proofs on the curve
  (Pedersen also with the extra `msg_g == msg * g` check: `prove_wc` / `verify_wc`).
- `threshkit.zk.composite_dlog` — `CompositeDLogStmt`, a proof of knowledge of a
  discrete log modulo a composite, with `setup` to sample a statement and its inverse.

Bookkeeping errors (an index out of range, a map that is not yet full, a session
nonce of the wrong length, a bad Paillier key) raise `threshkit.collections.vecmap.TofnFatal`.
Malformed inputs such as wrong byte lengths raise `ValueError`. Proof verification
returns `True` or `False` and logs the reason for a failure through `logging`.

## Installation

```
pip install threshkit
```

## Examples

```python
from threshkit.collections.typed_usize import TypedUsize
from threshkit.collections.p2ps import FillP2ps

zero, one = TypedUsize.from_usize(0), TypedUsize.from_usize(1)
grid = FillP2ps(2)
grid.set(zero, one, "hello")
grid.set(one, zero, "world")
full = grid.to_fullp2ps()
print(full.get(zero, one))  # hello
```

```python
import secrets
from threshkit.collections.typed_usize import TypedUsize
from threshkit.crypto.secp256k1 import ProjectivePoint, Scalar
from threshkit.zkp import schnorr

base = ProjectivePoint.generator()
scalar = Scalar.random(secrets.SystemRandom())
stmt = schnorr.Statement(prover_id=TypedUsize.from_usize(5), base=base, target=base * scalar)
proof = schnorr.prove(stmt, schnorr.Witness(scalar=scalar))
assert schnorr.verify(stmt, proof)
```

```python
from threshkit.crypto.paillier import Plaintext, keygen_unsafe

ek, dk = keygen_unsafe()
c1, _ = ek.encrypt(Plaintext(20))
c2, _ = ek.encrypt(Plaintext(22))
assert dk.decrypt(ek.add(c1, c2)).value == 42
```

## What this package does not do

It offers building blocks only. There are no keygen or signing protocols built
from them, no command-line tool, and no network or storage layer. Among the
zero-knowledge proofs it has no setup of auxiliary RSA parameters for range or
MtA proofs and no proof that a Paillier modulus is well formed; the Paillier
module encrypts and decrypts but proves nothing about its keys.

## Running the tests

```
pip install -e ".[test]"
pytest
```