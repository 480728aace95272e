"""
Deterministic pseudorandom generator.

AES-128 in counter mode, keyed by a 128-bit seed, zero initial counter.
The stream is fully determined by the seed, so the same input always
expands to the same matrix.
"""

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .entropy import secure_seed
from .hashing import SEED_BYTES


class AESCTRGenerator:
    """
    AES-128-CTR keystream generator.

    Not safe to share between threads: draws advance a single counter.
    """

    def __init__(self, seed: int):
        """
        Initialize generator from a seed.

        Args:
            seed: Integer in [0, 2^128), used little-endian as the AES key
        """
        if not 0 <= seed < 1 << (8 * SEED_BYTES):
            raise ValueError("Seed must be a non-negative 128-bit integer")
        key = seed.to_bytes(SEED_BYTES, "little")
        cipher = Cipher(algorithms.AES(key), modes.CTR(bytes(16)))
        self._encryptor = cipher.encryptor()

    def next_uniform_bytes(self, n: int) -> bytes:
        """Return the next n keystream bytes."""
        if n < 0:
            raise ValueError("n must be non-negative")
        return self._encryptor.update(bytes(n))


def fresh_generator() -> AESCTRGenerator:
    """Generator seeded from the operating system entropy source."""
    return AESCTRGenerator(secure_seed(SEED_BYTES))
