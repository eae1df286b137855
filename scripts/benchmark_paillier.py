#!/usr/bin/env python3
"""Single-key-size timing benchmark of the Paillier core.

Prints a human readable summary followed by a JSON block (after a
``--- JSON`` marker) that benchmark_report.py collects.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hecore.bench import OPERATIONS, run_benchmark
from hecore.crypto.rand import SeededRandom


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--key-size", type=int, default=1024, help="modulus bit length (default 1024)")
    parser.add_argument("--ops", type=int, default=20, help="calls per operation and run (default 20)")
    parser.add_argument("--runs", type=int, default=3, help="independent keypairs (default 3)")
    parser.add_argument("--seed", type=int, default=None, help="use a reproducible, NON-secure random source")
    parser.add_argument("-v", "--verbose", action="store_true", help="log key generation details")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    source = SeededRandom(args.seed) if args.seed is not None else None
    if source is not None:
        print(f"[warn] seeded random source ({args.seed}) is not cryptographically secure")

    result = run_benchmark(key_size=args.key_size, ops=args.ops, runs=args.runs, random_source=source)

    print(f"Paillier {result['key_size']} bit | {result['runs']} run(s) x {result['ops']} op(s)")
    for op in OPERATIONS:
        t = result["timings"][op]
        print(f"  {op:<15} {t['mean_ms']:10.3f} ms  (std {t['std_ms']:.3f})")
    print(f"  homomorphic check: {'ok' if result['success'] else 'FAILED'}")

    print("\n--- JSON ---")
    print(json.dumps(result, indent=2))
    if not result["success"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
