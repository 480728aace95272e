"""
Input-to-seed derivation.

The generator seed for H(x) is the first 16 bytes of Hash(x), read as a
little-endian 128-bit integer.
"""

import hashlib

from ..errors import ParameterMismatchError

SEED_BYTES = 16


def hash_to_seed(x: bytes, digest=hashlib.sha256) -> int:
    """
    Derive a 128-bit seed from an arbitrary-length input.

    Args:
        x: Input bytes (may be empty)
        digest: hashlib-style constructor, SHA-256 by default

    Returns:
        Seed in [0, 2^128)

    Raises:
        TypeError: x is not bytes-like
    """
    try:
        data = bytes(memoryview(x))
    except TypeError:
        raise TypeError(f"Input must be bytes-like, got {type(x).__name__}") from None
    output = digest(data).digest()
    if len(output) < SEED_BYTES:
        raise ParameterMismatchError(
            f"Digest must produce at least {SEED_BYTES} bytes, got {len(output)}"
        )
    return int.from_bytes(output[:SEED_BYTES], "little")
