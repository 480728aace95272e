"""
Error taxonomy for the homomorphic PRF.

Every failure surfaces synchronously from the call that triggered it.
Nothing is retried internally and no partial results are returned.
"""


class HPRFError(Exception):
    """Base class for all errors raised by this package."""


class ParameterMismatchError(HPRFError, ValueError):
    """Ring width, modulus or block configuration is inconsistent."""


class EntropyError(HPRFError, RuntimeError):
    """The operating system entropy source is unavailable."""


class EvaluationError(HPRFError, RuntimeError):
    """A homomorphic operation cannot be carried out on its operands."""


class DecryptionError(HPRFError, RuntimeError):
    """A ciphertext cannot be decrypted under the supplied client key."""
