"""
Parameters for the LWE homomorphic backend.

Ciphertexts live in Z_{2^64}. A plaintext of width w bits is encoded as
delta * m with delta = 2^(64 - w), so plaintext arithmetic wraps modulo
2^w for free and the remaining 64 - w bits absorb noise.

Key parameters:
- lwe_dimension: Length of the binary secret vector
- noise_std: Standard deviation of the rounded Gaussian encryption noise
- bits_per_block: Precision granularity of the plaintext space
- num_blocks: Number of blocks, plaintext width = num_blocks * bits_per_block

Tradeoffs:
- Larger lwe_dimension costs linearly in ciphertext size and time
- Each scalar multiplication by k grows noise by a factor of k, so the
  noise headroom must cover the PRF's inner product
"""

from dataclasses import dataclass
import logging

from ..errors import ParameterMismatchError

logger = logging.getLogger(__name__)

MODULUS_BITS = 64
MIN_NOISE_BITS = 24  # headroom left above the plaintext for noise growth


@dataclass
class LWEParams:
    """Parameters for the LWE backend."""

    lwe_dimension: int = 630
    noise_std: float = 3.2
    bits_per_block: int = 2
    num_blocks: int = 6

    def __post_init__(self):
        if self.lwe_dimension < 1:
            raise ParameterMismatchError("lwe_dimension must be at least 1")
        if self.noise_std < 0:
            raise ParameterMismatchError("noise_std must be non-negative")
        if self.bits_per_block < 1:
            raise ParameterMismatchError("bits_per_block must be at least 1")
        if self.num_blocks < 1:
            raise ParameterMismatchError("num_blocks must be at least 1")
        if MODULUS_BITS - self.plaintext_bits < MIN_NOISE_BITS:
            raise ParameterMismatchError(
                f"Plaintext width {self.plaintext_bits} leaves less than "
                f"{MIN_NOISE_BITS} bits of noise headroom"
            )

        if self.lwe_dimension < 512:
            logger.warning(
                "LWE dimension %d is only suitable for testing", self.lwe_dimension
            )

    @classmethod
    def for_prf(cls, prf_params, bits_per_block: int = 2, **kwargs) -> "LWEParams":
        """
        Build backend parameters whose plaintext width is exactly log2q.

        Args:
            prf_params: PRF parameters (anything with a log2q attribute)
            bits_per_block: Block precision, must divide log2q

        Raises:
            ParameterMismatchError: bits_per_block does not divide log2q
        """
        if bits_per_block < 1 or prf_params.log2q % bits_per_block != 0:
            raise ParameterMismatchError(
                f"bits_per_block={bits_per_block} does not divide log2q={prf_params.log2q}"
            )
        return cls(
            bits_per_block=bits_per_block,
            num_blocks=prf_params.log2q // bits_per_block,
            **kwargs,
        )

    @property
    def plaintext_bits(self) -> int:
        """Width of the plaintext space in bits."""
        return self.bits_per_block * self.num_blocks

    @property
    def delta(self) -> int:
        """Scaling factor of a fresh plaintext."""
        return 1 << (MODULUS_BITS - self.plaintext_bits)
