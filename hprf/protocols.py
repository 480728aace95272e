"""
Protocols for the collaborators of the homomorphic PRF.

This module defines:
1. The homomorphic encryption capability the PRF is composed over
2. The deterministic generator used to expand seeds into ring elements
3. The operand strategy used by the evaluator for the key-vector side

The PRF never looks inside keys or ciphertexts. Any scheme offering the
operations below can be plugged in, the bundled LWE backend being one.

Roles:
- Client key: encrypts and decrypts
- Server key: computes on ciphertexts, cannot decrypt
"""

from typing import Any, Callable, Protocol, Sequence


# =============================================================================
# Opaque key and ciphertext handles
# =============================================================================


class ClientKey(Protocol):
    """
    Secret key held by the client.

    Concrete schemes define the key structure.
    """

    ...


class ServerKey(Protocol):
    """
    Evaluation key handed to the server.

    Concrete schemes define the key structure.
    """

    ...


class Ciphertext(Protocol):
    """
    Encryption of a single ring element.

    Only usable through the operations of a HomomorphicScheme.
    """

    ...


# =============================================================================
# Collaborator Interfaces
# =============================================================================


class HomomorphicScheme(Protocol):
    """
    Protocol for the homomorphic encryption scheme.

    Plaintexts are unsigned integers modulo 2^width, where width is fixed
    by the parameters passed to keygen(). Arithmetic wraps modulo 2^width.
    """

    def keygen(self, params: Any) -> tuple[ClientKey, ServerKey]:
        """
        Generate a fresh keypair.

        Args:
            params: Scheme parameters

        Returns:
            (client_key, server_key)
        """
        ...

    def encrypt(self, client_key: ClientKey, value: int) -> Ciphertext:
        """Encrypt value under the client key."""
        ...

    def decrypt(self, client_key: ClientKey, ct: Ciphertext) -> int:
        """
        Decrypt a ciphertext.

        Raises:
            DecryptionError: ciphertext not decryptable under client_key
        """
        ...

    def trivial_encrypt(self, server_key: ServerKey, value: int) -> Ciphertext:
        """Noiseless encoding of a public value, usable with server_key."""
        ...

    def add(self, server_key: ServerKey, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        """Homomorphic addition."""
        ...

    def sum(self, server_key: ServerKey, cts: Sequence[Ciphertext]) -> Ciphertext:
        """Homomorphic sum of one or more ciphertexts."""
        ...

    def scalar_mul(self, server_key: ServerKey, ct: Ciphertext, scalar: int) -> Ciphertext:
        """Homomorphic multiplication by a plaintext scalar."""
        ...

    def mul(self, server_key: ServerKey, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        """Homomorphic multiplication of two ciphertexts."""
        ...

    def right_shift(self, server_key: ServerKey, ct: Ciphertext, bits: int) -> Ciphertext:
        """
        Homomorphic right shift.

        The result encrypts floor(m / 2^bits) with a plaintext width
        reduced by bits.
        """
        ...

    def plaintext_bits(self, key: Any) -> int:
        """Plaintext width, in bits, of a client or server key."""
        ...


class SeededGenerator(Protocol):
    """
    Deterministic pseudorandom byte stream.

    Two generators built from the same seed yield the same stream.
    """

    def next_uniform_bytes(self, n: int) -> bytes:
        """Return the next n bytes of the stream."""
        ...


# Any hashlib-style constructor: digest(data).digest() -> bytes
Digest = Callable[[bytes], Any]


class OperandStrategy(Protocol):
    """
    How the evaluator holds and applies the PRF key vector.

    prepare() runs once per evaluator; multiply() runs once per matrix entry.
    """

    def prepare(
        self, scheme: HomomorphicScheme, server_key: ServerKey, prf_key: Sequence[int]
    ) -> list:
        """
        Convert the PRF key into per-column operands.

        Args:
            scheme: Homomorphic scheme
            server_key: Evaluation key
            prf_key: Plaintext PRF key vector

        Returns:
            One operand per key coordinate
        """
        ...

    def multiply(
        self, scheme: HomomorphicScheme, server_key: ServerKey, ct: Ciphertext, operand: Any
    ) -> Ciphertext:
        """Multiply one encrypted matrix entry by one prepared operand."""
        ...
