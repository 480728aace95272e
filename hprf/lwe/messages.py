"""
Key and ciphertext types for the LWE backend.
"""

from dataclasses import dataclass, field

import numpy as np

from .params import LWEParams, MODULUS_BITS


@dataclass(frozen=True, eq=False)
class ClientKey:
    """
    Secret key. Can encrypt and decrypt.

    The secret vector is binary, one coordinate per LWE dimension.
    """

    secret: np.ndarray = field(repr=False)  # uint64, values in {0, 1}
    params: LWEParams
    key_id: bytes  # shared with the matching ServerKey


@dataclass(frozen=True)
class ServerKey:
    """
    Evaluation key. Holds no secret, so it cannot decrypt.

    key_id binds it to the ciphertexts of one client key.
    """

    params: LWEParams
    key_id: bytes


@dataclass(frozen=True, eq=False)
class Ciphertext:
    """
    LWE encryption of one plaintext modulo 2^width.

    phase = body - <mask, secret> = delta * m + slack_term + noise (mod 2^64)
    where delta = 2^(64 - width). slack bounds the deterministic offset a
    right shift leaves behind; it is 0 for ciphertexts that have only been
    added and scaled.
    """

    mask: np.ndarray = field(repr=False)  # read-only uint64 array
    body: int
    width: int
    key_id: bytes
    slack: int = 0

    @property
    def delta(self) -> int:
        return 1 << (MODULUS_BITS - self.width)

    @property
    def is_trivial(self) -> bool:
        """True for noiseless encodings of public values (all-zero mask)."""
        return not self.mask.any()
