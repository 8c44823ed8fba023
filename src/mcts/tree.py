"""Time-budgeted Monte Carlo Tree Search with random playouts."""

from __future__ import annotations

import json
import math
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from mcts.node import MCTSNode, NodeArena
from mcts.playout import random_playout
from othello.board import Board, opponent
from othello.errors import InternalSearchError, InvalidState
from othello.moves import legal_moves, next_player

MIN_TIME_BUDGET_MS = 10
DEFAULT_TIME_BUDGET_MS = 1000


@dataclass
class MCTSConfig:
    time_budget_ms: int = DEFAULT_TIME_BUDGET_MS
    exploration: float = math.sqrt(2.0)
    max_iterations: Optional[int] = None
    seed: Optional[int] = None
    workers: int = 1


def clamp_time_budget(milliseconds: int) -> int:
    return max(MIN_TIME_BUDGET_MS, int(milliseconds))


@dataclass(frozen=True)
class MoveStats:
    """Visit and win counts for one root move.

    ``wins`` counts playouts won by the side that made the move.
    """

    visits: int = 0
    wins: int = 0

    @property
    def win_rate(self) -> float:
        if self.visits == 0:
            return 0.0
        return self.wins / self.visits

    def to_dict(self) -> Dict[str, int]:
        return {"visits": self.visits, "wins": self.wins}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass
class SearchResult:
    move: int
    player: int
    board: Optional[Board] = None
    iterations: int = 0
    root_visits: int = 0
    elapsed_ms: float = 0.0
    children: Dict[int, MoveStats] = field(default_factory=dict)

    def stats_for(self, index: int) -> MoveStats:
        return self.children.get(index, MoveStats())

    def visit_counts(self) -> Dict[int, int]:
        return {move: stats.visits for move, stats in self.children.items()}


def best_move(children: Dict[int, MoveStats]) -> int:
    """Most visited move; ties go to the higher win rate, then the lower index."""
    if not children:
        raise ValueError("No root children to choose from")
    return max(children, key=lambda move: (children[move].visits, children[move].win_rate, -move))


def check_root_stats(root_visits: int, children: Dict[int, MoveStats]) -> None:
    total = 0
    for move, stats in children.items():
        if stats.visits < 0:
            raise InternalSearchError(f"Negative visit count for move {move}: {stats.visits}")
        if not 0 <= stats.wins <= stats.visits:
            raise InternalSearchError(
                f"Win count {stats.wins} outside [0, {stats.visits}] for move {move}"
            )
        total += stats.visits
    if total != root_visits:
        raise InternalSearchError(f"Root visits {root_visits} != child visit sum {total}")


class MCTS:
    def __init__(self, config: MCTSConfig | None = None, rng: np.random.Generator | None = None) -> None:
        self.config = config or MCTSConfig()
        self.rng = rng
        self.arena = NodeArena()

    def search(self, board: Board, player: int) -> SearchResult:
        moves = legal_moves(board, player)
        if not moves:
            raise InvalidState(f"Player {player} has no legal move to search")

        if len(moves) == 1:
            self.arena.clear()
            return SearchResult(move=moves[0], player=player, board=board)

        if self.config.workers > 1:
            from mcts.parallel import root_parallel_search

            return root_parallel_search(board, player, self.config, rng=self.rng)

        rng = self.rng if self.rng is not None else np.random.default_rng(self.config.seed)
        return self._run(board, player, moves, rng)

    def select_move(self, board: Board, player: int) -> int:
        return self.search(board, player).move

    def _run(self, board: Board, player: int, moves: List[int], rng: np.random.Generator) -> SearchResult:
        self.arena.clear()
        root = self.arena.add(
            MCTSNode(board=board, player=player, mover=opponent(player), untried_moves=list(moves))
        )

        budget = clamp_time_budget(self.config.time_budget_ms) / 1000.0
        max_iterations = self.config.max_iterations
        start = time.perf_counter()
        deadline = start + budget
        iterations = 0

        while True:
            self._iterate(root, rng)
            iterations += 1
            if max_iterations is not None and iterations >= max_iterations:
                break
            if time.perf_counter() >= deadline:
                break

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        children = {
            move: MoveStats(visits=child.visit_count, wins=child.win_count)
            for move, child in self.arena.children_of(root)
        }
        root_visits = self.arena[root].visit_count
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

    def _iterate(self, root: int, rng: np.random.Generator) -> None:
        handle = root
        path = [handle]

        node = self.arena[handle]
        while not node.untried_moves and node.children:
            handle = self._select_child(handle, rng)
            path.append(handle)
            node = self.arena[handle]

        if not node.is_terminal and node.untried_moves:
            handle = self._expand(handle, rng)
            path.append(handle)
            node = self.arena[handle]

        winner = random_playout(node.board, node.player, rng)
        self._backpropagate(path, winner)

    def _select_child(self, handle: int, rng: np.random.Generator) -> int:
        parent_visits = max(1, self.arena[handle].visit_count)
        exploration = self.config.exploration

        scored = []
        best_score = -math.inf
        for child_handle in self.arena[handle].children.values():
            score = self.arena[child_handle].ucb_score(parent_visits, exploration)
            scored.append((score, child_handle))
            if score > best_score:
                best_score = score

        best_children = [child for score, child in scored if score >= best_score - 1e-12]
        if len(best_children) == 1:
            return best_children[0]
        return best_children[int(rng.integers(len(best_children)))]

    def _expand(self, handle: int, rng: np.random.Generator) -> int:
        node = self.arena[handle]
        untried = node.untried_moves
        pick = int(rng.integers(len(untried)))
        untried[pick], untried[-1] = untried[-1], untried[pick]
        move = untried.pop()

        mover = node.player
        child_board = node.board.apply(move, mover)
        child_player = next_player(child_board, mover)
        child = MCTSNode(
            board=child_board,
            player=child_player,
            mover=mover,
            move_index=move,
            parent=handle,
            untried_moves=legal_moves(child_board, child_player) if child_player is not None else [],
        )
        child_handle = self.arena.add(child)
        node.children[move] = child_handle
        return child_handle

    def _backpropagate(self, path: List[int], winner: int) -> None:
        for handle in reversed(path):
            node = self.arena[handle]
            node.visit_count += 1
            if winner == node.mover:
                node.win_count += 1
