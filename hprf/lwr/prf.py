"""
Function-style entry points for the LWR PRF.

Thin wrappers over Client and Server for callers that hold keys directly:

    client_key, server_key = generate_keypair(params)
    s = generate_prf_key(params)
    y = decrypt(client_key, evaluate(server_key, s, encode(client_key, x, params), params), params)
"""

from typing import Optional, Sequence

from ..protocols import Ciphertext, ClientKey, OperandStrategy, ServerKey
from .client import Client
from .params import Params
from .server import Server


def encode(client_key: ClientKey, x: bytes, params: Params) -> list[list[Ciphertext]]:
    """Encrypted H(x)."""
    return Client(params, client_key).encode(x)


def evaluate(
    server_key: ServerKey,
    prf_key: Sequence[int],
    h: Sequence[Sequence[Ciphertext]],
    params: Params,
    strategy: Optional[OperandStrategy] = None,
) -> list[Ciphertext]:
    """Encrypted round_p(H(x) . s)."""
    return Server(params, server_key, prf_key, strategy=strategy).evaluate(h)


def decrypt(client_key: ClientKey, cts: Sequence[Ciphertext], params: Params) -> bytes:
    """PRF output, out_len bytes."""
    return Client(params, client_key).decrypt(cts)
