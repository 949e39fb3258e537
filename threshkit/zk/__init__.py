"""Proofs of knowledge of a discrete log modulo a composite."""