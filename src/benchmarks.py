"""Structural benchmarks for the MCTS engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from mcts.tree import MCTS, MCTSConfig
from othello.board import BLACK, Board
from othello.moves import legal_moves


@dataclass
class BenchmarkCase:
    name: str
    diagram: Optional[str]
    player: int = BLACK
    preferred_moves: Optional[Tuple[int, ...]] = None
    avoided_moves: Optional[Tuple[int, ...]] = None
    min_root_visits: int = 0


class OthelloBenchmarkRunner:
    def __init__(self, config: MCTSConfig | None = None) -> None:
        self.config = config or MCTSConfig(time_budget_ms=200, seed=0)

    def run_single_test(self, test_case: BenchmarkCase) -> Dict[str, object]:
        board = Board.from_string(test_case.diagram) if test_case.diagram else Board.initial()
        legal = legal_moves(board, test_case.player)

        mcts = MCTS(config=self.config)
        result = mcts.search(board, test_case.player)

        checks: List[Dict[str, object]] = [
            {"detail": "chosen move is legal", "passed": result.move in legal},
            {
                "detail": f"root_visits >= {test_case.min_root_visits}",
                "passed": result.root_visits >= test_case.min_root_visits,
            },
        ]

        if test_case.preferred_moves:
            checks.append(
                {
                    "detail": f"chosen move in {list(test_case.preferred_moves)}",
                    "passed": result.move in test_case.preferred_moves,
                }
            )

        if test_case.avoided_moves:
            checks.append(
                {
                    "detail": f"chosen move not in {list(test_case.avoided_moves)}",
                    "passed": result.move not in test_case.avoided_moves,
                }
            )

        passed = all(check["passed"] for check in checks)

        return {
            "name": test_case.name,
            "passed": passed,
            "move": result.move,
            "root_visits": result.root_visits,
            "checks": checks,
        }

    def run(self, cases: List[BenchmarkCase]) -> List[Dict[str, object]]:
        return [self.run_single_test(case) for case in cases]

    def run_all(self) -> Dict[str, object]:
        categories: Dict[str, Dict[str, object]] = {}
        passed_total = 0
        failed_total = 0

        for key, category in BENCHMARKS.items():
            results = self.run(category["tests"])
            categories[key] = {
                "name": category["name"],
                "tests": results,
            }
            for test in results:
                if test["passed"]:
                    passed_total += 1
                else:
                    failed_total += 1

        return {
            "summary": {"passed": passed_total, "failed": failed_total},
            "categories": categories,
        }


BENCHMARKS = {
    "basic_legality": {
        "name": "Basic Legality",
        "tests": [
            BenchmarkCase(
                name="Start Position",
                diagram=None,
                preferred_moves=(19, 26, 37, 44),
                min_root_visits=1,
            ),
            BenchmarkCase(
                name="Forced Capture",
                diagram="""
                    X O . . . . . .
                    . . . . . . . .
                    . . . . . . . .
                    . . . . . . . .
                    . . . . . . . .
                    . . . . . . . .
                    . . . . . . . .
                    . . . . . . . .
                """,
                preferred_moves=(2,),
            ),
        ],
    },
    "tactics": {
        "name": "Tactics",
        "tests": [
            BenchmarkCase(
                name="Wipeout",
                diagram="""
                    . . . . . . . .
                    . . . . . . . .
                    . . . . . . . .
                    . . X O O . . .
                    . . . X . . . .
                    . . . . . . . .
                    . . . . . . . .
                    . . . . . . . .
                """,
                preferred_moves=(29,),
                avoided_moves=(19, 21),
                min_root_visits=1,
            ),
        ],
    },
}


def default_benchmarks() -> List[BenchmarkCase]:
    return BENCHMARKS["basic_legality"]["tests"]
