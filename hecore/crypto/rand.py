"""Random integer sources used for prime search and blinding factors."""

from __future__ import annotations

import operator
import secrets
from typing import Protocol

import gmpy2
from gmpy2 import mpz

from hecore.errors import InvalidParameter


class RandomSource(Protocol):
    def random(self, bit_length: int) -> mpz:
        """Uniform non-negative integer with at most ``bit_length`` bits."""
        ...


def _check_bits(bit_length: int) -> int:
    try:
        bits = operator.index(bit_length)
    except TypeError:
        raise InvalidParameter(f"bit length must be an integer, got {bit_length!r}") from None
    if bits < 0:
        raise InvalidParameter(f"bit length must be non-negative, got {bits}")
    return bits


class SystemRandom:
    """Draws from the operating system CSPRNG via :mod:`secrets`."""

    def random(self, bit_length: int) -> mpz:
        return mpz(secrets.randbits(_check_bits(bit_length)))

    def __repr__(self) -> str:
        return "SystemRandom()"


class SeededRandom:
    """Reproducible gmpy2 generator. Not cryptographically secure."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._state = gmpy2.random_state(seed)

    def random(self, bit_length: int) -> mpz:
        bits = _check_bits(bit_length)
        if bits == 0:
            return mpz(0)
        return gmpy2.mpz_urandomb(self._state, bits)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed})"


_DEFAULT = SystemRandom()


def default_source() -> RandomSource:
    return _DEFAULT


__all__ = ["RandomSource", "SystemRandom", "SeededRandom", "default_source"]
