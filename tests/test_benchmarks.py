import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

from benchmarks import BENCHMARKS, OthelloBenchmarkRunner, default_benchmarks
from mcts.tree import MCTSConfig


def test_default_benchmarks_pass():
    runner = OthelloBenchmarkRunner(MCTSConfig(time_budget_ms=60_000, max_iterations=20, seed=0))
    results = runner.run(default_benchmarks())

    assert [r["name"] for r in results] == ["Start Position", "Forced Capture"]
    assert all(r["passed"] for r in results)
    assert results[1]["move"] == 2
    assert results[1]["root_visits"] == 0


def test_run_all_summary_counts_every_case():
    runner = OthelloBenchmarkRunner(MCTSConfig(time_budget_ms=60_000, max_iterations=10, seed=0))
    report = runner.run_all()

    total_cases = sum(len(category["tests"]) for category in BENCHMARKS.values())
    summary = report["summary"]
    assert summary["passed"] + summary["failed"] == total_cases
    assert set(report["categories"]) == set(BENCHMARKS)
