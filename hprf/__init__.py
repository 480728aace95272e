"""
Homomorphically evaluable lattice PRF.

Modules:
- protocols: Interfaces for the encryption scheme, generator and operands
- primitives: Hash-to-seed, AES-CTR generator, entropy source
- lwe: LWE homomorphic backend
- lwr: The learning-with-rounding PRF (client, server, key material)
- errors: Error taxonomy
"""

from . import errors
from . import primitives
from . import protocols
from . import lwe
from . import lwr

__all__ = [
    "errors",
    "primitives",
    "protocols",
    "lwe",
    "lwr",
]
