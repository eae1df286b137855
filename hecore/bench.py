"""Off-line timing benchmark of the Paillier core operations.

Each run generates a fresh keypair and times, per operation, the average cost
of ``ops`` calls: precomputed vs. on-the-fly blinding for encryption,
homomorphic add / scalar mult, and decryption. The homomorphic pipeline
``((a + b) * k)`` is checked against the plaintext result on every run.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, List, Optional

import numpy as np

from hecore.crypto.paillier import generate_keys
from hecore.crypto.rand import RandomSource, default_source

OPERATIONS = (
    "keygen",
    "precompute",
    "encrypt_cached",
    "encrypt_fresh",
    "add",
    "mult",
    "decrypt",
)


def _ms(sec: float) -> float:
    return sec * 1000.0


def _timed(fn: Callable[[], object]) -> float:
    t0 = time.perf_counter()
    fn()
    return time.perf_counter() - t0


def _single_run(key_size: int, ops: int, source: RandomSource, scalar_bits: int) -> Dict[str, float]:
    t: Dict[str, float] = {}

    t0 = time.perf_counter()
    keys = generate_keys(key_size, random_source=source)
    t["keygen"] = time.perf_counter() - t0
    pub, sec = keys.public_key, keys.private_key

    plains = [int(source.random(32)) for _ in range(ops)]
    scalars = [int(source.random(scalar_bits)) for _ in range(ops)]

    t["precompute"] = _timed(lambda: pub.precompute(ops)) / ops

    t0 = time.perf_counter()
    cts = [pub.encrypt(m) for m in plains]
    t["encrypt_cached"] = (time.perf_counter() - t0) / ops

    t0 = time.perf_counter()
    fresh = [pub.encrypt(m) for m in plains]
    t["encrypt_fresh"] = (time.perf_counter() - t0) / ops

    t0 = time.perf_counter()
    sums = [pub.add(a, b) for a, b in zip(cts, fresh)]
    t["add"] = (time.perf_counter() - t0) / ops

    t0 = time.perf_counter()
    prods = [pub.mult(c, k) for c, k in zip(sums, scalars)]
    t["mult"] = (time.perf_counter() - t0) / ops

    t0 = time.perf_counter()
    outs = [sec.decrypt(c) for c in prods]
    t["decrypt"] = (time.perf_counter() - t0) / ops

    expected = [(2 * m * k) % int(pub.n) for m, k in zip(plains, scalars)]
    t["ok"] = float(outs == expected)
    return t


def run_benchmark(
    key_size: int = 1024,
    ops: int = 20,
    runs: int = 3,
    random_source: Optional[RandomSource] = None,
    scalar_bits: int = 16,
) -> Dict:
    """Benchmark ``runs`` keypairs of ``key_size`` bits; returns a JSON-friendly dict."""
    if ops < 1 or runs < 1:
        raise ValueError("ops and runs must be positive")
    source = random_source or default_source()

    results: List[Dict[str, float]] = [_single_run(key_size, ops, source, scalar_bits) for _ in range(runs)]

    timings = {}
    for name in OPERATIONS:
        samples = np.array([r[name] for r in results], dtype=np.float64)
        timings[name] = {
            "mean_ms": _ms(float(np.mean(samples))),
            "std_ms": _ms(float(np.std(samples))),
        }

    return {
        "key_size": key_size,
        "ops": ops,
        "runs": runs,
        "success": all(r["ok"] == 1.0 for r in results),
        "timings": timings,
    }


__all__ = ["OPERATIONS", "run_benchmark"]
