"""Schnorr, Chaum-Pedersen and Pedersen proofs over the secp256k1 curve."""