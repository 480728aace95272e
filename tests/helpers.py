"""
Test helper functions.
"""

import secrets

from hprf.lwr import Client, Server, generate_keypair


def random_inputs(count: int, max_len: int = 64) -> list[bytes]:
    """Create random inputs of random lengths (possibly empty)."""
    return [secrets.token_bytes(secrets.randbelow(max_len + 1)) for _ in range(count)]


def run_pipeline(params, prf_key, x: bytes, strategy=None, max_workers=None) -> bytes:
    """
    Full PRF evaluation under a fresh keypair.

    Only the PRF key and the input are shared between calls.
    """
    client_key, server_key = generate_keypair(params)
    client = Client(params, client_key, max_workers=max_workers)
    server = Server(params, server_key, prf_key, strategy=strategy, max_workers=max_workers)
    return client.decrypt(server.evaluate(client.encode(x)))
