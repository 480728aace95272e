"""
Secret-key LWE scheme with the operations the PRF evaluator needs.

Linear operations (add, scalar multiplication, multiplication by a trivial
ciphertext) act directly on (mask, body). The right shift is a modulus
switch: narrowing the plaintext width by d bits reinterprets delta * m as
(delta * 2^d) * (m / 2^d). Adding the public offset
delta_in / 2 - delta_out / 2 first turns the rounding into a floor, so the
result decrypts to m >> d exactly, provided |noise| < delta_in / 2.

Arithmetic on masks uses numpy uint64 arrays, which wrap modulo 2^64.
Bodies are Python ints reduced explicitly.
"""

import logging
from typing import Sequence

import numpy as np

from ..errors import DecryptionError, EvaluationError, ParameterMismatchError
from ..primitives import secure_bytes, secure_seed
from .messages import Ciphertext, ClientKey, ServerKey
from .params import LWEParams, MODULUS_BITS

logger = logging.getLogger(__name__)

_MOD_MASK = (1 << MODULUS_BITS) - 1
_HALF = 1 << (MODULUS_BITS - 1)
KEY_ID_BYTES = 16


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _uniform_mask(n: int) -> np.ndarray:
    """Uniform vector in Z_{2^64}^n from the OS entropy source."""
    raw = secure_bytes(8 * n)
    return _frozen(np.frombuffer(raw, dtype="<u8").astype(np.uint64))


def _inner(mask: np.ndarray, secret: np.ndarray) -> int:
    return int(np.dot(mask, secret)) & _MOD_MASK


def _centered(x: int) -> int:
    """Map x in [0, 2^64) to [-2^63, 2^63)."""
    return x - (1 << MODULUS_BITS) if x >= _HALF else x


class LWEScheme:
    """
    Homomorphic scheme over secret-key LWE.

    Stateless: keys and ciphertexts carry everything an operation needs,
    so one instance can be shared freely across threads.
    """

    # -------------------------------------------------------------------------
    # Client-side operations
    # -------------------------------------------------------------------------

    def keygen(self, params: LWEParams) -> tuple[ClientKey, ServerKey]:
        """
        Generate a keypair.

        The binary secret is drawn from a generator seeded by the OS
        entropy source.
        """
        rng = np.random.default_rng(secure_seed())
        secret = _frozen(rng.integers(0, 2, size=params.lwe_dimension, dtype=np.uint64))
        key_id = secure_bytes(KEY_ID_BYTES)
        logger.debug(
            "Generated LWE keypair: dimension=%d, plaintext_bits=%d",
            params.lwe_dimension,
            params.plaintext_bits,
        )
        return ClientKey(secret=secret, params=params, key_id=key_id), ServerKey(
            params=params, key_id=key_id
        )

    def encrypt(self, client_key: ClientKey, value: int) -> Ciphertext:
        """Encrypt value modulo 2^plaintext_bits."""
        params = client_key.params
        width = params.plaintext_bits
        m = value % (1 << width)

        mask = _uniform_mask(params.lwe_dimension)
        rng = np.random.default_rng(secure_seed())
        noise = int(np.rint(rng.normal(0.0, params.noise_std)))

        body = (_inner(mask, client_key.secret) + params.delta * m + noise) & _MOD_MASK
        return Ciphertext(mask=mask, body=body, width=width, key_id=client_key.key_id)

    def decrypt(self, client_key: ClientKey, ct: Ciphertext) -> int:
        """
        Decrypt a ciphertext.

        Raises:
            DecryptionError: foreign key, malformed ciphertext, or noise
                beyond the decoding margin
        """
        if ct.key_id != client_key.key_id:
            raise DecryptionError("Ciphertext was not produced under this client key")
        if ct.mask.shape != client_key.secret.shape:
            raise DecryptionError(
                f"Malformed ciphertext: mask shape {ct.mask.shape}, "
                f"expected {client_key.secret.shape}"
            )
        if not 0 < ct.width <= client_key.params.plaintext_bits:
            raise DecryptionError(f"Malformed ciphertext: width {ct.width}")

        delta = ct.delta
        phase = (ct.body - _inner(ct.mask, client_key.secret)) & _MOD_MASK
        m = ((phase + delta // 2) >> (MODULUS_BITS - ct.width)) & ((1 << ct.width) - 1)

        # Half of the room not taken by the shift offset is allowed for noise
        residual = _centered((phase - m * delta) & _MOD_MASK)
        limit = ct.slack + (delta // 2 - ct.slack) // 2
        if abs(residual) > limit:
            raise DecryptionError("Ciphertext noise exceeds the decoding margin")
        return m

    def plaintext_bits(self, key) -> int:
        """Plaintext width of a ClientKey or ServerKey."""
        return key.params.plaintext_bits

    # -------------------------------------------------------------------------
    # Server-side operations
    # -------------------------------------------------------------------------

    def trivial_encrypt(self, server_key: ServerKey, value: int) -> Ciphertext:
        """Noiseless encoding of a public value. Hides nothing."""
        params = server_key.params
        width = params.plaintext_bits
        mask = _frozen(np.zeros(params.lwe_dimension, dtype=np.uint64))
        body = (params.delta * (value % (1 << width))) & _MOD_MASK
        return Ciphertext(mask=mask, body=body, width=width, key_id=server_key.key_id)

    def add(self, server_key: ServerKey, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        self._check_linear(server_key, a, b)
        if a.width != b.width:
            raise EvaluationError(f"Width mismatch: {a.width} vs {b.width}")
        return Ciphertext(
            mask=_frozen(a.mask + b.mask),
            body=(a.body + b.body) & _MOD_MASK,
            width=a.width,
            key_id=a.key_id,
        )

    def sum(self, server_key: ServerKey, cts: Sequence[Ciphertext]) -> Ciphertext:
        """Sum one or more ciphertexts of equal width."""
        if not cts:
            raise EvaluationError("Cannot sum an empty sequence of ciphertexts")
        self._check_linear(server_key, *cts)
        width = cts[0].width
        if any(ct.width != width for ct in cts):
            raise EvaluationError("Width mismatch in sum")

        mask = np.sum(np.stack([ct.mask for ct in cts]), axis=0, dtype=np.uint64)
        body = sum(ct.body for ct in cts) & _MOD_MASK
        return Ciphertext(mask=_frozen(mask), body=body, width=width, key_id=cts[0].key_id)

    def scalar_mul(self, server_key: ServerKey, ct: Ciphertext, scalar: int) -> Ciphertext:
        """Multiply by a plaintext scalar, reduced modulo 2^width. Noise grows by scalar."""
        self._check_linear(server_key, ct)
        k = scalar % (1 << ct.width)
        return Ciphertext(
            mask=_frozen(ct.mask * np.uint64(k)),
            body=(ct.body * k) & _MOD_MASK,
            width=ct.width,
            key_id=ct.key_id,
        )

    def mul(self, server_key: ServerKey, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        """
        Multiply two ciphertexts.

        Supported when at least one side is trivial. A product of two
        non-trivial ciphertexts needs bootstrapping, which this backend
        does not implement.
        """
        self._check_linear(server_key, a, b)
        if a.width != b.width:
            raise EvaluationError(f"Width mismatch: {a.width} vs {b.width}")
        if b.is_trivial:
            return self.scalar_mul(server_key, a, b.body >> (MODULUS_BITS - b.width))
        if a.is_trivial:
            return self.scalar_mul(server_key, b, a.body >> (MODULUS_BITS - a.width))
        raise EvaluationError("Product of two non-trivial ciphertexts is not supported")

    def right_shift(self, server_key: ServerKey, ct: Ciphertext, bits: int) -> Ciphertext:
        """
        Homomorphic floor division by 2^bits.

        The result has plaintext width ct.width - bits and can only be
        decrypted; further linear operations on it are rejected.
        """
        self._check_linear(server_key, ct)
        if not 0 <= bits < ct.width:
            raise EvaluationError(f"Shift of {bits} bits out of range for width {ct.width}")
        if bits == 0:
            return ct

        delta_in = ct.delta
        delta_out = delta_in << bits
        offset = delta_out // 2 - delta_in // 2
        return Ciphertext(
            mask=ct.mask,
            body=(ct.body - offset) & _MOD_MASK,
            width=ct.width - bits,
            key_id=ct.key_id,
            slack=offset,
        )

    def _check_linear(self, server_key: ServerKey, *cts: Ciphertext) -> None:
        """Operands must belong to server_key and must not carry shift slack."""
        shape = (server_key.params.lwe_dimension,)
        for ct in cts:
            if ct.key_id != server_key.key_id:
                raise EvaluationError("Ciphertext is incompatible with the server key")
            if ct.mask.shape != shape:
                raise EvaluationError(f"Malformed ciphertext: mask shape {ct.mask.shape}")
            if ct.slack:
                raise EvaluationError("Rounded ciphertexts only support decryption")


def check_plaintext_width(params: LWEParams, log2q: int) -> None:
    """
    Raises:
        ParameterMismatchError: the plaintext space does not match Z_q
    """
    if params.plaintext_bits != log2q:
        raise ParameterMismatchError(
            f"Scheme plaintext width {params.plaintext_bits} does not match log2q={log2q}"
        )
