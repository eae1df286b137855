"""Paillier cryptosystem: key generation, encryption and homomorphic operations.

Arithmetic runs on gmpy2 ``mpz`` integers. The generator is fixed to
``g = n + 1`` so ``g^m mod n^2`` collapses to ``n*m + 1``. Blinding factors
``r^n mod n^2`` can be precomputed into a per-key cache to move the modular
exponentiation off the encryption path.

A public key owns its cache without locking; callers sharing one key between
threads must serialize ``encrypt``/``randomize``/``precompute`` themselves.
"""

from __future__ import annotations

import logging
import operator
import re
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Union

import gmpy2
from gmpy2 import mpz

from hecore.config import PaillierConfig
from hecore.crypto.rand import RandomSource, default_source
from hecore.errors import InvalidParameter, KeyGenerationError, OutOfRangeError, TypeConversionError

logger = logging.getLogger(__name__)

IntLike = Union[int, mpz, str]

_DECIMAL = re.compile(r"[+-]?[0-9]+", re.ASCII)


def to_mpz(value: IntLike) -> mpz:
    """Coerce an integer, mpz or decimal string to ``mpz``."""
    if isinstance(value, bool):
        raise TypeConversionError("booleans are not integers here")
    if isinstance(value, mpz):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL.fullmatch(text):
            raise TypeConversionError(f"not a decimal integer: {value!r}")
        # mpz() has no digit cap, unlike int()
        return mpz(text[1:] if text.startswith("+") else text, 10)
    try:
        return mpz(operator.index(value))
    except TypeError:
        raise TypeConversionError(f"cannot convert {type(value).__name__} to an integer") from None


def _check_key_size(key_size: int, minimum: int) -> int:
    try:
        bits = operator.index(key_size)
    except TypeError:
        raise InvalidParameter(f"key size must be an integer, got {key_size!r}") from None
    if bits % 2 != 0:
        raise InvalidParameter(f"key size should be even, got {bits}")
    if bits < minimum:
        raise InvalidParameter(f"key size must be at least {minimum} bits, got {bits}")
    return bits


def _check_rounds(rounds: int) -> int:
    try:
        rounds = operator.index(rounds)
    except TypeError:
        raise InvalidParameter(f"rounds must be an integer, got {rounds!r}") from None
    if rounds < 1:
        raise InvalidParameter(f"rounds must be positive, got {rounds}")
    return rounds


def _probable_prime(bits: int, source: RandomSource, rounds: int) -> mpz:
    while True:
        candidate = source.random(bits)
        if gmpy2.is_prime(candidate, rounds):
            return candidate


def _lcm(a: mpz, b: mpz) -> mpz:
    # product over gcd
    return (a * b) // gmpy2.gcd(a, b)


@dataclass(eq=False)
class PublicKey:
    """Public key (n, g = n + 1) with its blinding-factor cache."""

    key_size: int
    n: mpz
    random_source: RandomSource = field(default_factory=default_source, repr=False)
    n2: mpz = field(init=False, repr=False)
    np1: mpz = field(init=False, repr=False)
    rn_cache: Deque[mpz] = field(init=False, default_factory=deque, repr=False)

    def __post_init__(self) -> None:
        self.key_size = _check_key_size(self.key_size, 2)
        self.n = to_mpz(self.n)
        if self.n.bit_length() != self.key_size:
            raise InvalidParameter(
                f"modulus has {self.n.bit_length()} bits, expected exactly {self.key_size}"
            )
        self.n2 = self.n * self.n
        self.np1 = self.n + 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.key_size == other.key_size and self.n == other.n

    def __hash__(self) -> int:
        return hash((self.key_size, int(self.n)))

    @property
    def cache_size(self) -> int:
        return len(self.rn_cache)

    def encrypt(self, m: IntLike) -> mpz:
        """Encrypt plaintext m, 0 <= m < n."""
        m = to_mpz(m)
        if not 0 <= m < self.n:
            raise OutOfRangeError("plaintext out of range [0, n)")
        return self.randomize((self.n * m + 1) % self.n2)

    def add(self, a: IntLike, b: IntLike) -> mpz:
        """Ciphertext whose plaintext is the sum of the plaintexts of a and b, mod n."""
        return (to_mpz(a) * to_mpz(b)) % self.n2

    def mult(self, c: IntLike, k: IntLike) -> mpz:
        """Ciphertext whose plaintext is k times the plaintext of c, mod n."""
        k = to_mpz(k)
        if k < 0:
            raise OutOfRangeError("scalar must be non-negative")
        return gmpy2.powmod(to_mpz(c), k, self.n2)

    def L(self, x: IntLike) -> mpz:
        """L(x) = (x - 1) / n; exact only when x = 1 mod n."""
        return (to_mpz(x) - 1) // self.n

    def randomize(self, a: IntLike) -> mpz:
        if self.rn_cache:
            rn = self.rn_cache.pop()
        else:
            rn = self.generate_rn()
        return (to_mpz(a) * rn) % self.n2

    def generate_rn(self) -> mpz:
        """Draw r uniformly from [0, n) and return r^n mod n^2."""
        while True:
            r = self.random_source.random(self.key_size)
            if r < self.n:
                break
        return gmpy2.powmod(r, self.n, self.n2)

    def precompute(self, count: int) -> None:
        """Append ``count`` fresh blinding factors to the cache."""
        try:
            count = operator.index(count)
        except TypeError:
            raise InvalidParameter(f"count must be an integer, got {count!r}") from None
        if count < 0:
            raise InvalidParameter(f"count must be non-negative, got {count}")
        for _ in range(count):
            self.rn_cache.append(self.generate_rn())
        logger.debug("precomputed %d blinding factors (cache=%d)", count, len(self.rn_cache))


@dataclass(eq=False)
class PrivateKey:
    """Private key (lambda, mu) bound to its public key."""

    lam: mpz = field(repr=False)
    public_key: PublicKey
    mu: mpz = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.lam = to_mpz(self.lam)
        pub = self.public_key
        u = gmpy2.powmod(pub.np1, self.lam, pub.n2)
        try:
            mu = gmpy2.invert(pub.L(u), pub.n)
        except ZeroDivisionError:
            mu = mpz(0)
        if mu == 0:
            raise KeyGenerationError("n does not divide the order of g: L(u) has no inverse mod n")
        self.mu = mu

    def decrypt(self, c: IntLike) -> int:
        """m = L(c^lambda mod n^2) * mu mod n."""
        pub = self.public_key
        c = to_mpz(c)
        if not 0 <= c < pub.n2:
            raise OutOfRangeError("ciphertext out of range [0, n^2)")
        x = pub.L(gmpy2.powmod(c, self.lam, pub.n2))
        return int((x * self.mu) % pub.n)


@dataclass
class Keypair:
    public_key: PublicKey
    private_key: Optional[PrivateKey] = None


def generate_keys(
    key_size: Optional[int] = None,
    random_source: Optional[RandomSource] = None,
    rounds: Optional[int] = None,
    config: Optional[PaillierConfig] = None,
) -> Keypair:
    """Generate a Paillier keypair whose modulus has exactly ``key_size`` bits."""
    if key_size is not None:
        key_size = _check_key_size(key_size, 2)
    if rounds is not None:
        rounds = _check_rounds(rounds)
    if config is None:
        # explicit arguments shadow their environment variables
        overrides = {}
        if key_size is not None:
            overrides["key_size"] = key_size
        if rounds is not None:
            overrides["prime_rounds"] = rounds
        config = PaillierConfig.from_env(**overrides)
    key_size = _check_key_size(config.key_size if key_size is None else key_size, config.min_key_size)
    rounds = config.prime_rounds if rounds is None else rounds
    source = random_source or default_source()

    t0 = time.perf_counter()
    half = key_size >> 1
    attempts = 0
    while True:
        attempts += 1
        p = _probable_prime(half, source, rounds)
        q = _probable_prime(half, source, rounds)
        n = p * q
        # retry the whole pair until n fills key_size bits with distinct factors
        if n.bit_length() == key_size and p != q:
            break

    lam = _lcm(p - 1, q - 1)
    pub = PublicKey(key_size, n, source)
    sec = PrivateKey(lam, pub)
    logger.debug(
        "generated %d-bit keypair after %d attempt(s) in %.1f ms",
        key_size,
        attempts,
        (time.perf_counter() - t0) * 1000.0,
    )
    return Keypair(pub, sec)


__all__ = [
    "IntLike",
    "Keypair",
    "PrivateKey",
    "PublicKey",
    "generate_keys",
    "to_mpz",
]
