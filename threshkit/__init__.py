"""Building blocks for threshold ECDSA over secp256k1."""

__version__ = "0.1.0"