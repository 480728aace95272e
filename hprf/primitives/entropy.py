"""
Operating system entropy source.

Key material and encryption randomness are seeded from here, never from
any PRF input. A missing source is fatal: callers must not fall back to a
weaker generator.
"""

import secrets

from ..errors import EntropyError


def secure_bytes(n: int) -> bytes:
    """
    Draw n bytes from the operating system CSPRNG.

    Raises:
        EntropyError: the entropy source is unavailable
    """
    try:
        return secrets.token_bytes(n)
    except (OSError, NotImplementedError) as e:
        raise EntropyError("Secure entropy source unavailable") from e


def secure_seed(num_bytes: int = 16) -> int:
    """Return a uniformly random seed of num_bytes bytes, little-endian."""
    return int.from_bytes(secure_bytes(num_bytes), "little")
