"""
Parameters for the learning-with-rounding PRF.

F_s(x) = round_p(H(x) . s), with H(x) in Z_q^{rows x n} and s in Z_q^n.

Key parameters:
- lattice_dim: n, length of the secret vector and of each matrix row
- log2q: q = 2^log2q, modulus of ring elements
- log2p: p = 2^log2p, modulus after rounding (p < q)
- out_len: Output length in bytes

Each row yields one rounded element, of which the low p_bytes bytes are
kept, so H(x) has ceil(out_len / p_bytes) rows.

Tradeoffs:
- lattice_dim = 8 is for testing; real security needs hundreds
- A larger gap log2q - log2p makes rounding hide more, at the cost of a
  larger q and so more noise growth in the homomorphic inner product
"""

from dataclasses import dataclass
import math

from ..errors import ParameterMismatchError

WORD_BYTES = 8  # sample draws are whole 64-bit words


@dataclass
class Params:
    """Parameters for the homomorphic LWR PRF."""

    lattice_dim: int = 8  # n
    log2q: int = 12  # q = 2^log2q
    log2p: int = 8  # p = 2^log2p
    out_len: int = 16  # Output bytes

    def __post_init__(self):
        if self.lattice_dim < 1:
            raise ParameterMismatchError("lattice_dim must be at least 1")
        if self.log2p < 1:
            raise ParameterMismatchError("log2p must be at least 1")
        if self.log2p >= self.log2q:
            raise ParameterMismatchError(
                f"log2p={self.log2p} must be smaller than log2q={self.log2q}"
            )
        if self.out_len < 1:
            raise ParameterMismatchError("out_len must be at least 1")

    @property
    def q(self) -> int:
        return 1 << self.log2q

    @property
    def p(self) -> int:
        return 1 << self.log2p

    @property
    def q_bytes(self) -> int:
        """Bytes needed to hold q - 1."""
        return math.ceil(self.log2q / 8)

    @property
    def p_bytes(self) -> int:
        """Bytes kept from each rounded element."""
        return math.ceil(self.log2p / 8)

    @property
    def shift(self) -> int:
        """Right shift realising the switch from modulus q to modulus p."""
        return self.log2q - self.log2p

    @property
    def num_rows(self) -> int:
        """Rows of H(x)."""
        return math.ceil(self.out_len / self.p_bytes)

    @property
    def word_bytes(self) -> int:
        """Bytes consumed per ring element draw."""
        return math.ceil(self.q_bytes / WORD_BYTES) * WORD_BYTES

    def __repr__(self) -> str:
        return (
            f"Params(lattice_dim={self.lattice_dim}, log2q={self.log2q}, "
            f"log2p={self.log2p}, out_len={self.out_len}, num_rows={self.num_rows})"
        )
