"""
LWE homomorphic backend.

Secret-key LWE over Z_{2^64} with a binary secret. Supports the linear
operations and the modulus-switching right shift used by the PRF
evaluator. Intended as a reference backend: parameters are sized for
correctness, not for a concrete security level.
"""

from .params import LWEParams, MODULUS_BITS
from .messages import ClientKey, ServerKey, Ciphertext
from .scheme import LWEScheme, check_plaintext_width

__all__ = [
    "LWEParams",
    "MODULUS_BITS",
    "ClientKey",
    "ServerKey",
    "Ciphertext",
    "LWEScheme",
    "check_plaintext_width",
]
