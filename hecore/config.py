"""Configuration for key generation.

Defaults can be overridden through environment variables:

- ``HECORE_KEY_SIZE``: modulus bit length used when none is given (2048)
- ``HECORE_MIN_KEY_SIZE``: smallest accepted modulus bit length (128)
- ``HECORE_PRIME_ROUNDS``: Miller-Rabin rounds of the primality test (10)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from hecore.errors import InvalidParameter

ENV_PREFIX = "HECORE_"


@dataclass(frozen=True)
class PaillierConfig:
    """Key generation parameters."""
    # Modulus bit length used by generate_keys() when no size is passed
    key_size: int = 2048
    # Smallest modulus bit length accepted
    min_key_size: int = 128
    # Confidence parameter of the probable-prime test
    prime_rounds: int = 10

    def __post_init__(self) -> None:
        if self.min_key_size < 4 or self.min_key_size % 2 != 0:
            raise InvalidParameter(f"min_key_size must be an even integer >= 4, got {self.min_key_size}")
        if self.key_size < self.min_key_size or self.key_size % 2 != 0:
            raise InvalidParameter(
                f"key_size must be even and >= {self.min_key_size}, got {self.key_size}"
            )
        if self.prime_rounds < 1:
            raise InvalidParameter(f"prime_rounds must be positive, got {self.prime_rounds}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: int) -> "PaillierConfig":
        """Build a config from ``HECORE_*`` variables.

        Fields passed in ``overrides`` are taken as given and their variables
        are not read. An unset key size follows a raised minimum.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def pick(name: str, default: int) -> int:
            if name in overrides:
                return overrides[name]
            return _env_int(env, name.upper(), default)

        min_key_size = pick("min_key_size", defaults.min_key_size)
        return cls(
            key_size=pick("key_size", max(defaults.key_size, min_key_size)),
            min_key_size=min_key_size,
            prime_rounds=pick("prime_rounds", defaults.prime_rounds),
        )


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name, "").strip()
    if raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidParameter(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


DEFAULT_CONFIG = PaillierConfig()


def get_config() -> PaillierConfig:
    """Return the configuration derived from the current environment."""
    return PaillierConfig.from_env()


__all__ = ["PaillierConfig", "DEFAULT_CONFIG", "ENV_PREFIX", "get_config"]
