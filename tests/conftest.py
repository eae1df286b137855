"""Shared pytest fixtures for the hecore test suite."""

import pytest

from hecore.crypto.paillier import generate_keys
from hecore.crypto.rand import SeededRandom

KEY_SIZE = 256


class CountingRandom:
    """Wraps a random source and counts draws."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = 0

    def random(self, bit_length):
        self.calls += 1
        return self.inner.random(bit_length)


@pytest.fixture(scope="session")
def keys():
    """A small, reproducible keypair shared by read-only tests."""
    return generate_keys(KEY_SIZE, random_source=SeededRandom(2024))


@pytest.fixture()
def counting_keys():
    """A fresh keypair whose random source counts draws."""
    source = CountingRandom(SeededRandom(99))
    kp = generate_keys(KEY_SIZE, random_source=source)
    source.calls = 0
    return kp, source
