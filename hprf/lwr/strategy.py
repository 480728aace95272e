"""
Operand strategies for the homomorphic inner product.

ScalarOperand keeps the PRF key in the clear and multiplies each encrypted
entry by a plaintext scalar. CiphertextOperand holds the key as trivial
ciphertexts and multiplies ciphertext by ciphertext, for schemes whose key
material has to be handled as ciphertexts.

Both strategies trust the evaluator with s: a trivial encryption is a
public encoding, not a secret one.
"""

from typing import Any, Sequence

from ..protocols import Ciphertext, HomomorphicScheme, ServerKey


class ScalarOperand:
    """Plaintext key, scalar multiplication. The default."""

    name = "scalar"

    def prepare(
        self, scheme: HomomorphicScheme, server_key: ServerKey, prf_key: Sequence[int]
    ) -> list[int]:
        return list(prf_key)

    def multiply(
        self, scheme: HomomorphicScheme, server_key: ServerKey, ct: Ciphertext, operand: int
    ) -> Ciphertext:
        return scheme.scalar_mul(server_key, ct, operand)


class CiphertextOperand:
    """Key held as trivial ciphertexts, ciphertext multiplication."""

    name = "ciphertext"

    def prepare(
        self, scheme: HomomorphicScheme, server_key: ServerKey, prf_key: Sequence[int]
    ) -> list[Ciphertext]:
        return [scheme.trivial_encrypt(server_key, s) for s in prf_key]

    def multiply(
        self, scheme: HomomorphicScheme, server_key: ServerKey, ct: Ciphertext, operand: Any
    ) -> Ciphertext:
        return scheme.mul(server_key, ct, operand)


STRATEGIES = {
    ScalarOperand.name: ScalarOperand,
    CiphertextOperand.name: CiphertextOperand,
}
