import pytest

from hecore.config import DEFAULT_CONFIG, PaillierConfig, get_config
from hecore.crypto.paillier import generate_keys
from hecore.crypto.rand import SeededRandom
from hecore.errors import InvalidParameter


def test_defaults():
    assert DEFAULT_CONFIG.key_size == 2048
    assert DEFAULT_CONFIG.min_key_size == 128
    assert DEFAULT_CONFIG.prime_rounds == 10


def test_from_env_overrides():
    cfg = PaillierConfig.from_env({"HECORE_KEY_SIZE": "512", "HECORE_PRIME_ROUNDS": " 20 "})
    assert cfg.key_size == 512
    assert cfg.prime_rounds == 20
    assert cfg.min_key_size == 128


def test_from_env_ignores_empty_values():
    assert PaillierConfig.from_env({"HECORE_KEY_SIZE": ""}) == PaillierConfig()


@pytest.mark.parametrize(
    "env",
    [
        {"HECORE_KEY_SIZE": "big"},
        {"HECORE_KEY_SIZE": "513"},
        {"HECORE_KEY_SIZE": "64"},
        {"HECORE_MIN_KEY_SIZE": "3"},
        {"HECORE_PRIME_ROUNDS": "0"},
    ],
)
def test_from_env_rejects_malformed(env):
    with pytest.raises(InvalidParameter):
        PaillierConfig.from_env(env)


def test_get_config_reads_environment(monkeypatch):
    monkeypatch.setenv("HECORE_KEY_SIZE", "256")
    assert get_config().key_size == 256


def test_generate_keys_uses_configured_size(monkeypatch):
    monkeypatch.setenv("HECORE_KEY_SIZE", "192")
    keys = generate_keys(random_source=SeededRandom(8))
    assert keys.public_key.key_size == 192
    assert keys.public_key.n.bit_length() == 192


def test_generate_keys_respects_minimum():
    cfg = PaillierConfig(key_size=512, min_key_size=512)
    with pytest.raises(InvalidParameter):
        generate_keys(256, random_source=SeededRandom(8), config=cfg)


def test_raised_minimum_lifts_default_key_size():
    cfg = PaillierConfig.from_env({"HECORE_MIN_KEY_SIZE": "4096"})
    assert cfg.min_key_size == 4096
    assert cfg.key_size == 4096


def test_explicit_size_only_checked_against_minimum(monkeypatch):
    monkeypatch.setenv("HECORE_MIN_KEY_SIZE", "384")
    keys = generate_keys(384, random_source=SeededRandom(21))
    assert keys.public_key.n.bit_length() == 384
    with pytest.raises(InvalidParameter):
        generate_keys(256, random_source=SeededRandom(21))


def test_explicit_size_ignores_malformed_env_size(monkeypatch):
    monkeypatch.setenv("HECORE_KEY_SIZE", "not-a-number")
    keys = generate_keys(256, random_source=SeededRandom(22))
    assert keys.public_key.key_size == 256
    with pytest.raises(InvalidParameter):
        generate_keys(random_source=SeededRandom(22))


def test_explicit_rounds_ignore_malformed_env_rounds(monkeypatch):
    monkeypatch.setenv("HECORE_PRIME_ROUNDS", "many")
    keys = generate_keys(256, random_source=SeededRandom(23), rounds=5)
    assert keys.public_key.key_size == 256


def test_from_env_overrides_skip_environment():
    cfg = PaillierConfig.from_env({"HECORE_KEY_SIZE": "bad"}, key_size=512)
    assert cfg.key_size == 512
