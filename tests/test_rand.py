import pytest

from hecore.crypto.rand import SeededRandom, SystemRandom, default_source
from hecore.errors import InvalidParameter


@pytest.mark.parametrize("source", [SystemRandom(), SeededRandom(3)])
def test_values_stay_within_bit_length(source):
    for bits in [1, 7, 64, 512]:
        for _ in range(50):
            v = source.random(bits)
            assert 0 <= v < (1 << bits)


@pytest.mark.parametrize("source", [SystemRandom(), SeededRandom(3)])
def test_zero_bits_gives_zero(source):
    assert source.random(0) == 0


@pytest.mark.parametrize("source", [SystemRandom(), SeededRandom(3)])
@pytest.mark.parametrize("bad", [-1, 2.5, "8"])
def test_bad_bit_length(source, bad):
    with pytest.raises(InvalidParameter):
        source.random(bad)


def test_seeded_source_is_reproducible():
    a = [SeededRandom(11).random(128) for _ in range(2)]
    assert a[0] == a[1]
    s = SeededRandom(11)
    assert s.random(128) != s.random(128)


def test_system_source_is_not_constant():
    src = SystemRandom()
    assert len({int(src.random(128)) for _ in range(8)}) > 1


def test_default_source_is_shared_system_random():
    assert isinstance(default_source(), SystemRandom)
    assert default_source() is default_source()
