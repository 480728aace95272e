"""
Sampling, clear-text reference and helpers for the LWR PRF.
"""

from concurrent.futures import ThreadPoolExecutor
import hashlib
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from ..errors import ParameterMismatchError
from ..primitives import AESCTRGenerator, hash_to_seed
from ..protocols import Digest, HomomorphicScheme, SeededGenerator
from .params import Params

T = TypeVar("T")
R = TypeVar("R")


def sample_ring_element(rng: SeededGenerator, params: Params) -> int:
    """
    Draw one uniform element of Z_q.

    Reads word_bytes bytes little-endian and reduces mod q. q is a power
    of two dividing 2^(8 * word_bytes), so the reduction is unbiased.
    """
    buf = rng.next_uniform_bytes(params.word_bytes)
    return int.from_bytes(buf, "little") % params.q


def expand_input(x: bytes, params: Params, digest: Digest = hashlib.sha256) -> list[list[int]]:
    """
    Compute the plaintext matrix H(x).

    The generator is seeded only from Hash(x), so equal inputs give equal
    matrices. Entries are drawn row by row.

    Args:
        x: Input bytes (may be empty)
        params: PRF parameters
        digest: hashlib-style constructor

    Returns:
        num_rows rows of lattice_dim elements of Z_q
    """
    rng = AESCTRGenerator(hash_to_seed(x, digest))
    return [
        [sample_ring_element(rng, params) for _ in range(params.lattice_dim)]
        for _ in range(params.num_rows)
    ]


def evaluate_clear(matrix: Sequence[Sequence[int]], prf_key: Sequence[int], params: Params) -> list[int]:
    """
    Evaluate the PRF without encryption.

    Returns:
        ((row . s) mod q) >> (log2q - log2p) for every row
    """
    return [
        (sum(a * s for a, s in zip(row, prf_key)) % params.q) >> params.shift
        for row in matrix
    ]


def bytes_from_rounded(values: Sequence[int], params: Params) -> bytes:
    """
    Assemble the output from rounded elements.

    Each value contributes its low p_bytes bytes, little-endian, in row
    order. The result is exactly out_len bytes.
    """
    out = bytearray()
    for v in values:
        if not 0 <= v < params.p:
            raise ValueError(f"Rounded value {v} outside [0, {params.p})")
        out += v.to_bytes(params.word_bytes, "little")[: params.p_bytes]

    if len(out) < params.out_len:
        raise ValueError(f"Expected at least {params.out_len} bytes, got {len(out)}")
    return bytes(out[: params.out_len])


def parallel_map(fn: Callable[[T], R], items: Iterable[T], max_workers: Optional[int] = None) -> list[R]:
    """
    Apply fn to every item on a thread pool.

    Results are returned in input order regardless of completion order.
    The first exception raised by any call propagates.
    """
    items = list(items)
    if max_workers == 1 or len(items) <= 1:
        return [fn(item) for item in items]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(fn, items))


def check_key_width(scheme: HomomorphicScheme, key, params: Params) -> None:
    """
    Raises:
        ParameterMismatchError: the key's plaintext space is not Z_q
    """
    width = scheme.plaintext_bits(key)
    if width != params.log2q:
        raise ParameterMismatchError(
            f"Key plaintext width {width} does not match log2q={params.log2q}"
        )


def check_max_workers(max_workers: Optional[int]) -> None:
    """
    Raises:
        ParameterMismatchError: max_workers is neither None nor positive
    """
    if max_workers is not None and max_workers < 1:
        raise ParameterMismatchError("max_workers must be at least 1")
