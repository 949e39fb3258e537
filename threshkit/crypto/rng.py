"""Deterministic random number generators seeded by HMAC-SHA256 over secret inputs."""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass, field

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from threshkit.collections.typed_usize import TypedUsize
from threshkit.collections.vecmap import TofnFatal
from threshkit.crypto.secp256k1 import Scalar

log = logging.getLogger(__name__)

SESSION_NONCE_LENGTH_MIN = 4
SESSION_NONCE_LENGTH_MAX = 256
_KEY_SIZE = 64
_SEED_SIZE = 32
_HMAC_ZERO_KEY = bytes(64)


@dataclass(frozen=True)
class SecretRecoveryKey:
    """A 64-byte secret from which per-session randomness is derived."""

    data: bytes = field(repr=False)

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != _KEY_SIZE:
            raise ValueError(f"secret recovery key must be {_KEY_SIZE} bytes, got {len(data)}")
        object.__setattr__(self, "data", data)


class ChaCha20Rng:
    """A ChaCha20 keystream generator with a 32-byte seed, zero nonce and zero counter."""

    def __init__(self, seed: bytes) -> None:
        seed = bytes(seed)
        if len(seed) != _SEED_SIZE:
            raise ValueError(f"seed must be {_SEED_SIZE} bytes, got {len(seed)}")
        cipher = Cipher(algorithms.ChaCha20(seed, bytes(16)), mode=None)
        self._stream = cipher.encryptor()

    def fill_bytes(self, size: int) -> bytes:
        """The next `size` bytes of the keystream."""
        if size < 0:
            raise ValueError(f"size {size} is negative")
        return self._stream.update(bytes(size))

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        if k == 0:
            return 0
        value = int.from_bytes(self.fill_bytes((k + 7) // 8), "little")
        return value & ((1 << k) - 1)

    def randbelow(self, n: int) -> int:
        """A uniformly random integer in `[0, n)`."""
        if n <= 0:
            raise ValueError(f"upper bound {n} must be positive")
        bits = n.bit_length()
        while True:
            candidate = self.getrandbits(bits)
            if candidate < n:
                return candidate


def _check_nonce(session_nonce: bytes) -> bytes:
    session_nonce = bytes(session_nonce)
    if not SESSION_NONCE_LENGTH_MIN <= len(session_nonce) <= SESSION_NONCE_LENGTH_MAX:
        raise TofnFatal(
            f"invalid session_nonce length {len(session_nonce)} not in "
            f"[{SESSION_NONCE_LENGTH_MIN},{SESSION_NONCE_LENGTH_MAX}]"
        )
    return session_nonce


def _tag_byte(tag: int) -> bytes:
    if isinstance(tag, bool) or not isinstance(tag, int) or not 0 <= tag <= 0xFF:
        raise ValueError(f"tag {tag!r} is not a byte")
    return bytes([tag])


def _rng_from(key: bytes, *parts: bytes) -> ChaCha20Rng:
    prf = hmac.new(key, digestmod=hashlib.sha256)
    for part in parts:
        prf.update(part)
    return ChaCha20Rng(prf.digest())


def rng_seed(
    tag: int,
    party_id: TypedUsize,
    secret_recovery_key: SecretRecoveryKey,
    session_nonce: bytes,
) -> ChaCha20Rng:
    nonce = _check_nonce(session_nonce)
    return _rng_from(
        secret_recovery_key.data,
        _tag_byte(tag),
        TypedUsize(int(party_id)).to_bytes(),
        nonce,
    )


def rng_seed_ecdsa_signing_key(
    protocol_tag: int,
    tag: int,
    secret_recovery_key: SecretRecoveryKey,
    session_nonce: bytes,
) -> ChaCha20Rng:
    """An RNG for generating an ECDSA signing key."""
    nonce = _check_nonce(session_nonce)
    return _rng_from(secret_recovery_key.data, _tag_byte(protocol_tag), _tag_byte(tag), nonce)


def rng_seed_ecdsa_ephemeral_scalar_with_party_id(
    tag: int,
    party_id: TypedUsize,
    signing_key: Scalar,
    msg_to_sign: Scalar,
) -> ChaCha20Rng:
    """An RNG for an ephemeral ECDSA scalar, in the spirit of (but not conforming to) RFC 6979."""
    return _rng_from(
        _HMAC_ZERO_KEY,
        _tag_byte(tag),
        TypedUsize(int(party_id)).to_bytes(),
        signing_key.to_bytes(),
        msg_to_sign.to_bytes(),
    )


def rng_seed_ecdsa_ephemeral_scalar(
    protocol_tag: int,
    tag: int,
    signing_key: Scalar,
    message_digest: Scalar,
) -> ChaCha20Rng:
    """An RNG for an ephemeral ECDSA scalar, in the spirit of (but not conforming to) RFC 6979."""
    return _rng_from(
        _HMAC_ZERO_KEY,
        _tag_byte(protocol_tag),
        _tag_byte(tag),
        signing_key.to_bytes(),
        message_digest.to_bytes(),
    )


def dummy_secret_recovery_key(index: int) -> SecretRecoveryKey:
    """An all-zero key whose first 8 bytes hold `index` big-endian."""
    return SecretRecoveryKey(index.to_bytes(8, "big") + bytes(_KEY_SIZE - 8))