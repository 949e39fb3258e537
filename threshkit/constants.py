"""Domain-separation tags and size limits shared across the package."""

# Protocol/scheme domain separation
ECDSA_TAG = 0x00

# Domain separation for hash function calls
Y_I_COMMIT_TAG = 0x00
MTA_PROOF_TAG = 0x01
MTA_PROOF_WC_TAG = 0x02
RANGE_PROOF_TAG = 0x03
RANGE_PROOF_WC_TAG = 0x04
CHAUM_PEDERSEN_PROOF_TAG = 0x05
PEDERSEN_PROOF_TAG = 0x06
SCHNORR_PROOF_TAG = 0x07
GAMMA_I_COMMIT_TAG = 0x08
PEDERSEN_SECP256K1_ALTERNATE_GENERATOR_TAG = 0x09
COMPOSITE_DLOG_PROOF_TAG = 0x0A
PAILLIER_KEY_PROOF_TAG = 0x0B

# Each prime is at most 1024 bits, so the modulus is at most 2048 bits.
MODULUS_MAX_SIZE = 2048

# Each prime is at least 1023 bits, so the modulus is at least 2045 bits.
MODULUS_MIN_SIZE = 2045

# Domain separation for the two composite dlog proofs
COMPOSITE_DLOG_PROOF1 = 0x00
COMPOSITE_DLOG_PROOF2 = 0x01