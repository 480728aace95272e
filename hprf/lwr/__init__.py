"""
Homomorphic learning-with-rounding PRF.

F_s(x) = round_p(H(x) . s), where H(x) is a pseudorandom matrix expanded
from Hash(x). The client encrypts H(x), the server multiplies it by the
plaintext key s and rounds homomorphically, the client decrypts the
output. The server learns nothing about x.
"""

from .params import Params
from .keys import generate_keypair, generate_prf_key
from .client import Client
from .server import Server
from .strategy import ScalarOperand, CiphertextOperand, STRATEGIES
from .prf import encode, evaluate, decrypt

__all__ = [
    "Params",
    "generate_keypair",
    "generate_prf_key",
    "Client",
    "Server",
    "ScalarOperand",
    "CiphertextOperand",
    "STRATEGIES",
    "encode",
    "evaluate",
    "decrypt",
]
