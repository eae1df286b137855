from openpyxl import load_workbook

from hecore.bench import OPERATIONS, run_benchmark
from hecore.crypto.rand import SeededRandom
from hecore.report import plot_timings, write_workbook


def _small_run(key_size, seed):
    return run_benchmark(key_size=key_size, ops=2, runs=2, random_source=SeededRandom(seed))


def test_run_benchmark_reports_every_operation():
    result = _small_run(256, 4)
    assert result["success"] is True
    assert result["key_size"] == 256
    assert set(result["timings"]) == set(OPERATIONS)
    for t in result["timings"].values():
        assert t["mean_ms"] >= 0.0
        assert t["std_ms"] >= 0.0


def test_report_writes_workbook_and_figure(tmp_path):
    results = [_small_run(256, 1), _small_run(128, 2)]

    xlsx = write_workbook(results, tmp_path / "out" / "bench.xlsx")
    wb = load_workbook(xlsx)
    assert wb.sheetnames == ["Mean", "Std", "Runs"]
    ws = wb["Mean"]
    assert ws.cell(row=1, column=1).value == "Key_Size"
    # rows are sorted by key size
    assert ws.cell(row=2, column=1).value == 128
    assert ws.cell(row=3, column=1).value == 256
    assert wb["Runs"].cell(row=2, column=4).value is True

    png = plot_timings(results, tmp_path / "timings.png")
    assert png.exists()
    assert png.stat().st_size > 0
