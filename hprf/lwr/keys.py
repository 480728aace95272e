"""
Key material for the LWR PRF.

- The encryption keypair comes from the homomorphic scheme.
- The PRF key s is n uniform elements of Z_q, drawn from a generator
  seeded by the OS entropy source, never from a PRF input.
"""

import logging
from typing import Optional

from ..lwe import LWEParams, LWEScheme, check_plaintext_width
from ..primitives import fresh_generator
from ..protocols import HomomorphicScheme, SeededGenerator
from .params import Params
from .utils import sample_ring_element

logger = logging.getLogger(__name__)


def generate_keypair(
    params: Params,
    lwe_params: Optional[LWEParams] = None,
    scheme: Optional[HomomorphicScheme] = None,
):
    """
    Generate the encryption keypair.

    Args:
        params: PRF parameters
        lwe_params: Backend parameters, derived from params if None
        scheme: Homomorphic scheme, the LWE backend if None

    Returns:
        (client_key, server_key)

    Raises:
        ParameterMismatchError: plaintext width does not cover Z_q exactly
    """
    if lwe_params is None:
        lwe_params = LWEParams.for_prf(params)
    check_plaintext_width(lwe_params, params.log2q)
    scheme = scheme or LWEScheme()
    return scheme.keygen(lwe_params)


def generate_prf_key(params: Params, rng: Optional[SeededGenerator] = None) -> list[int]:
    """
    Generate the PRF secret key s.

    Args:
        params: PRF parameters
        rng: Generator to draw from. If None, a fresh OS-seeded generator.

    Returns:
        lattice_dim elements of Z_q
    """
    if rng is None:
        rng = fresh_generator()
    key = [sample_ring_element(rng, params) for _ in range(params.lattice_dim)]
    logger.debug("Generated PRF key of dimension %d", params.lattice_dim)
    return key
