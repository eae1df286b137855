#!/usr/bin/env python3
"""Benchmark several key sizes and write a table + figure.

Each key size runs benchmark_paillier.py in its own interpreter so timings do
not share caches or allocator state.

Outputs:
- artifacts/benchmark_paillier.xlsx
- artifacts/timings.png
"""

from __future__ import annotations

import argparse
import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
ART = ROOT / "artifacts"

# Avoid matplotlib writing cache under a non-writable home directory.
os.environ.setdefault("MPLCONFIGDIR", str(ART / ".mplconfig"))

from hecore.report import plot_timings, write_workbook

KEY_SIZES = [512, 1024, 1536, 2048]


def _parse_last_json(stdout: str) -> Dict:
    # The benchmark prints a JSON object at the end; keep the last {...} block.
    marker = "--- JSON"
    start = stdout.rfind(marker)
    if start != -1:
        stdout = stdout[start:]
    first = stdout.find("{")
    last = stdout.rfind("}")
    if first == -1 or last == -1 or last <= first:
        raise ValueError("No JSON block found in benchmark output")
    return json.loads(stdout[first : last + 1])


def _run_one(python: str, key_size: int, ops: int, runs: int) -> Dict:
    cmd = [
        python,
        str(ROOT / "scripts" / "benchmark_paillier.py"),
        "--key-size",
        str(key_size),
        "--ops",
        str(ops),
        "--runs",
        str(runs),
    ]
    proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, cwd=str(ROOT))
    out = proc.stdout.decode(errors="replace")
    if proc.returncode != 0:
        raise RuntimeError(f"benchmark run failed for {key_size} bits:\n{out}")
    return _parse_last_json(out)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark Paillier over several key sizes")
    parser.add_argument("--sizes", type=int, nargs="+", default=KEY_SIZES)
    parser.add_argument("--ops", type=int, default=20)
    parser.add_argument("--runs", type=int, default=3)
    parser.add_argument("--out", type=Path, default=ART)
    args = parser.parse_args(argv)

    results = []
    for i, size in enumerate(args.sizes, start=1):
        print(f"[{i}/{len(args.sizes)}] benchmarking {size}-bit keys…")
        results.append(_run_one(sys.executable, size, args.ops, args.runs))

    xlsx_path = write_workbook(results, args.out / "benchmark_paillier.xlsx")
    fig_path = plot_timings(results, args.out / "timings.png")
    print(f"Saved: {xlsx_path}")
    print(f"Saved: {fig_path}")


if __name__ == "__main__":
    main()
