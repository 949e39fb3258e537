"""secp256k1 arithmetic, Paillier encryption, hash commitments and seeded RNGs."""