"""
Cryptographic primitives for the homomorphic PRF.

- hashing: derive a 128-bit generator seed from an arbitrary input
- prg: AES-128-CTR deterministic generator
- entropy: operating system seed source
"""

from .entropy import secure_bytes, secure_seed
from .hashing import SEED_BYTES, hash_to_seed
from .prg import AESCTRGenerator, fresh_generator

__all__ = [
    "SEED_BYTES",
    "hash_to_seed",
    "AESCTRGenerator",
    "fresh_generator",
    "secure_bytes",
    "secure_seed",
]
