"""Root-parallel search: independent trees in worker processes, merged root stats."""

from __future__ import annotations

import concurrent.futures
import multiprocessing as mp
import time
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

import numpy as np

from mcts.tree import MCTS, MCTSConfig, MoveStats, SearchResult, best_move, check_root_stats
from othello.board import Board

WorkerOutput = Tuple[int, int, Dict[int, Tuple[int, int]]]


def _search_worker(cells: List[int], player: int, config: MCTSConfig, seed: int) -> WorkerOutput:
    board = Board.from_cells(cells)
    mcts = MCTS(config=replace(config, workers=1, seed=seed))
    result = mcts.search(board, player)
    stats = {move: (child.visits, child.wins) for move, child in result.children.items()}
    return result.iterations, result.root_visits, stats


def _worker_seeds(seed: Optional[int], workers: int, rng: np.random.Generator | None = None) -> List[int]:
    if rng is not None:
        return [int(value) for value in rng.integers(0, 2**63 - 1, size=workers)]
    sequence = np.random.SeedSequence(seed)
    return [int(child.generate_state(1)[0]) for child in sequence.spawn(workers)]


def _run_serial(cells: List[int], player: int, config: MCTSConfig, seeds: List[int]) -> List[WorkerOutput]:
    return [_search_worker(cells, player, config, seed) for seed in seeds]


def _run_pool(cells: List[int], player: int, config: MCTSConfig, seeds: List[int]) -> List[WorkerOutput]:
    ctx = mp.get_context("spawn")
    try:
        ctx.Semaphore(1)
    except (PermissionError, OSError):
        return _run_serial(cells, player, config, seeds)

    with concurrent.futures.ProcessPoolExecutor(max_workers=len(seeds), mp_context=ctx) as executor:
        futures = [executor.submit(_search_worker, cells, player, config, seed) for seed in seeds]
        return [future.result() for future in futures]


def merge_outputs(outputs: List[WorkerOutput]) -> Tuple[int, int, Dict[int, MoveStats]]:
    iterations = 0
    root_visits = 0
    visits: Dict[int, int] = {}
    wins: Dict[int, int] = {}
    for worker_iterations, worker_root_visits, stats in outputs:
        iterations += worker_iterations
        root_visits += worker_root_visits
        for move, (move_visits, move_wins) in stats.items():
            visits[move] = visits.get(move, 0) + move_visits
            wins[move] = wins.get(move, 0) + move_wins
    children = {move: MoveStats(visits=visits[move], wins=wins[move]) for move in visits}
    return iterations, root_visits, children


def root_parallel_search(
    board: Board,
    player: int,
    config: MCTSConfig,
    workers: Optional[int] = None,
    use_processes: bool = True,
    rng: np.random.Generator | None = None,
) -> SearchResult:
    """Run ``workers`` independent searches on copies of ``board`` and sum their root stats.

    Each worker gets the full time budget. A fresh spawn pool is started per call, so
    process start-up is added on top of that budget. Worker seeds come from ``rng``
    when given, otherwise from ``config.seed``.
    """
    workers = workers or config.workers
    seeds = _worker_seeds(config.seed, workers, rng)
    cells = board.to_list()

    start = time.perf_counter()
    if use_processes and workers > 1:
        outputs = _run_pool(cells, player, config, seeds)
    else:
        outputs = _run_serial(cells, player, config, seeds)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    iterations, root_visits, children = merge_outputs(outputs)
    check_root_stats(root_visits, children)

    return SearchResult(
        move=best_move(children),
        player=player,
        board=board,
        iterations=iterations,
        root_visits=root_visits,
        elapsed_ms=elapsed_ms,
        children=children,
    )
