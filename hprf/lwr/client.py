"""
Client implementation for the homomorphic LWR PRF.

The client's role:
1. Encode an input x as an encrypted matrix H(x)
2. Send it to the server for evaluation
3. Decrypt the rounded vector returned by the server into out_len bytes

The client holds the client key only. It never sees the PRF key.
"""

import hashlib
import logging
from typing import Optional, Sequence

from ..errors import DecryptionError, ParameterMismatchError
from ..lwe import LWEScheme
from ..protocols import Ciphertext, ClientKey, Digest, HomomorphicScheme
from .params import Params
from .utils import (
    bytes_from_rounded,
    check_key_width,
    check_max_workers,
    expand_input,
    parallel_map,
)

logger = logging.getLogger(__name__)


class Client:
    """
    PRF client.

    Encoding and decryption parallelise across rows; outputs are always
    reassembled in row order.
    """

    def __init__(
        self,
        params: Params,
        client_key: ClientKey,
        scheme: Optional[HomomorphicScheme] = None,
        digest: Digest = hashlib.sha256,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize client.

        Args:
            params: PRF parameters
            client_key: Client key of the homomorphic scheme
            scheme: Homomorphic scheme, the LWE backend if None
            digest: hashlib-style constructor for deriving the matrix seed
            max_workers: Thread pool size, None for the executor default
        """
        self.params = params
        self._client_key = client_key
        self.scheme = scheme or LWEScheme()
        check_key_width(self.scheme, client_key, params)
        check_max_workers(max_workers)
        self.digest = digest
        self.max_workers = max_workers

    def encode(self, x: bytes) -> list[list[Ciphertext]]:
        """
        Encode an input as the encrypted matrix H(x).

        Args:
            x: Input bytes of any length, including empty

        Returns:
            num_rows rows of lattice_dim ciphertexts
        """
        matrix = expand_input(x, self.params, self.digest)
        logger.debug(
            "Encoding input of %d bytes as %dx%d matrix",
            len(x), self.params.num_rows, self.params.lattice_dim,
        )
        return parallel_map(self._encrypt_row, matrix, self.max_workers)

    def _encrypt_row(self, row: list[int]) -> list[Ciphertext]:
        return [self.scheme.encrypt(self._client_key, a) for a in row]

    def decrypt_values(self, cts: Sequence[Ciphertext]) -> list[int]:
        """
        Decrypt the server's response into rounded elements.

        Returns:
            One element of [0, p) per row

        Raises:
            ParameterMismatchError: wrong number of ciphertexts
            DecryptionError: a ciphertext does not decrypt, or decrypts
                outside [0, p)
        """
        if len(cts) != self.params.num_rows:
            raise ParameterMismatchError(
                f"Expected {self.params.num_rows} ciphertexts, got {len(cts)}"
            )

        values = parallel_map(
            lambda ct: self.scheme.decrypt(self._client_key, ct), cts, self.max_workers
        )
        for row, v in enumerate(values):
            if not 0 <= v < self.params.p:
                raise DecryptionError(f"Row {row} decrypted outside [0, {self.params.p})")
        return values

    def decrypt(self, cts: Sequence[Ciphertext]) -> bytes:
        """
        Decrypt the server's response into the PRF output.

        Returns:
            out_len bytes
        """
        return bytes_from_rounded(self.decrypt_values(cts), self.params)
