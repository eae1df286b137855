"""Error types raised by the Paillier core."""

from __future__ import annotations


class PaillierError(Exception):
    """Base class for every error raised by hecore."""


class InvalidParameter(PaillierError, ValueError):
    """Malformed parameter, e.g. an odd or too small key size."""


class KeyGenerationError(PaillierError, RuntimeError):
    """mu = L(g^lambda mod n^2)^-1 mod n does not exist; not retried."""


class OutOfRangeError(PaillierError, ValueError):
    """Plaintext, ciphertext or scalar outside its canonical range."""


class TypeConversionError(PaillierError, TypeError):
    """Value cannot be coerced to an integer."""


__all__ = [
    "PaillierError",
    "InvalidParameter",
    "KeyGenerationError",
    "OutOfRangeError",
    "TypeConversionError",
]
