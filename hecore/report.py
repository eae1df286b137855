"""Tables and figures for benchmark results (xlsx via openpyxl, png via matplotlib)."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from hecore.bench import OPERATIONS


def _write_table(ws, headers: List[str], rows: List[List], start_row: int = 1, start_col: int = 1) -> None:
    for j, h in enumerate(headers, start=start_col):
        ws.cell(row=start_row, column=j, value=h)
    for i, row in enumerate(rows, start=start_row + 1):
        for j, val in enumerate(row, start=start_col):
            ws.cell(row=i, column=j, value=val)
    for j in range(start_col, start_col + len(headers)):
        ws.column_dimensions[get_column_letter(j)].width = 16


def _sorted(results: Sequence[Dict]) -> List[Dict]:
    return sorted(results, key=lambda r: r["key_size"])


def write_workbook(results: Sequence[Dict], path: str | Path) -> Path:
    """One sheet of mean timings, one of standard deviations; rows are key sizes."""
    path = Path(path)
    rows = _sorted(results)
    headers = ["Key_Size"] + [f"{op}_ms" for op in OPERATIONS]

    wb = Workbook()
    ws_mean = wb.active
    ws_mean.title = "Mean"
    _write_table(
        ws_mean,
        headers,
        [[r["key_size"]] + [round(r["timings"][op]["mean_ms"], 4) for op in OPERATIONS] for r in rows],
    )

    ws_std = wb.create_sheet("Std")
    _write_table(
        ws_std,
        headers,
        [[r["key_size"]] + [round(r["timings"][op]["std_ms"], 4) for op in OPERATIONS] for r in rows],
    )

    ws_meta = wb.create_sheet("Runs")
    _write_table(
        ws_meta,
        ["Key_Size", "Ops", "Runs", "Success"],
        [[r["key_size"], r["ops"], r["runs"], bool(r["success"])] for r in rows],
    )

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def plot_timings(results: Sequence[Dict], path: str | Path) -> Path:
    """Key generation cost next to per-call operation costs, log scale."""
    path = Path(path)
    rows = _sorted(results)
    sizes = [r["key_size"] for r in rows]

    fig, axs = plt.subplots(1, 2, figsize=(12, 4))
    keygen = [r["timings"]["keygen"]["mean_ms"] for r in rows]
    keygen_err = [r["timings"]["keygen"]["std_ms"] for r in rows]
    axs[0].errorbar(sizes, keygen, yerr=keygen_err, marker="o", capsize=3)
    axs[0].set_title("Key generation")
    axs[0].set_xlabel("Key size (bits)")
    axs[0].set_ylabel("Time (ms)")

    for op in OPERATIONS[1:]:
        axs[1].plot(sizes, [r["timings"][op]["mean_ms"] for r in rows], marker="o", label=op)
    axs[1].set_title("Per-call cost")
    axs[1].set_xlabel("Key size (bits)")
    axs[1].set_yscale("log")
    axs[1].legend(fontsize=8)

    for ax in axs:
        ax.grid(True, linestyle="--", linewidth=0.5)
    fig.tight_layout()
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


__all__ = ["plot_timings", "write_workbook"]
