"""
Server implementation for the homomorphic LWR PRF.

The server's role is simple:
1. Hold the server key and the PRF key s
2. Compute the encrypted product H(x) . s
3. Round every entry from Z_q to Z_p by a homomorphic right shift

The server never holds the client key, so it learns nothing about x or
about the output.
"""

import logging
from typing import Optional, Sequence

from ..errors import ParameterMismatchError
from ..lwe import LWEScheme
from ..protocols import Ciphertext, HomomorphicScheme, OperandStrategy, ServerKey
from .params import Params
from .strategy import ScalarOperand
from .utils import check_key_width, check_max_workers, parallel_map

logger = logging.getLogger(__name__)


class Server:
    """
    PRF evaluator.

    Rows are independent and run on a thread pool. Shared state (keys,
    prepared operands) is read-only.
    """

    def __init__(
        self,
        params: Params,
        server_key: ServerKey,
        prf_key: Sequence[int],
        scheme: Optional[HomomorphicScheme] = None,
        strategy: Optional[OperandStrategy] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize server with its keys.

        Args:
            params: PRF parameters
            server_key: Evaluation key of the homomorphic scheme
            prf_key: PRF key s, lattice_dim elements of Z_q
            scheme: Homomorphic scheme, the LWE backend if None
            strategy: Operand strategy, ScalarOperand if None
            max_workers: Thread pool size, None for the executor default
        """
        if len(prf_key) != params.lattice_dim:
            raise ParameterMismatchError(
                f"PRF key has {len(prf_key)} elements, expected {params.lattice_dim}"
            )
        if any(not 0 <= s < params.q for s in prf_key):
            raise ParameterMismatchError(f"PRF key elements must lie in [0, {params.q})")

        self.params = params
        self._server_key = server_key
        self.scheme = scheme or LWEScheme()
        check_key_width(self.scheme, server_key, params)
        check_max_workers(max_workers)
        self.strategy = strategy or ScalarOperand()
        self.max_workers = max_workers
        self._operands = self.strategy.prepare(self.scheme, server_key, prf_key)

    def evaluate(self, h: Sequence[Sequence[Ciphertext]]) -> list[Ciphertext]:
        """
        Evaluate the PRF on an encrypted matrix.

        Args:
            h: Encrypted H(x), num_rows rows of lattice_dim ciphertexts

        Returns:
            One ciphertext per row, encrypting an element of [0, p)

        Raises:
            ParameterMismatchError: matrix shape does not match params
            EvaluationError: a homomorphic operation failed
        """
        if len(h) != self.params.num_rows:
            raise ParameterMismatchError(
                f"Expected {self.params.num_rows} rows, got {len(h)}"
            )
        for i, row in enumerate(h):
            if len(row) != self.params.lattice_dim:
                raise ParameterMismatchError(
                    f"Row {i} has {len(row)} entries, expected {self.params.lattice_dim}"
                )

        logger.debug(
            "Evaluating %d rows with %s operands", len(h), getattr(self.strategy, "name", "custom")
        )
        return parallel_map(self._evaluate_row, h, self.max_workers)

    def _evaluate_row(self, row: Sequence[Ciphertext]) -> Ciphertext:
        """Inner product with s, then round from q to p."""
        products = [
            self.strategy.multiply(self.scheme, self._server_key, ct, operand)
            for ct, operand in zip(row, self._operands)
        ]
        inner = self.scheme.sum(self._server_key, products)
        return self.scheme.right_shift(self._server_key, inner, self.params.shift)
