"""MCTS node data structure and the arena that owns it."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from othello.board import Board


@dataclass
class MCTSNode:
    board: Board
    player: Optional[int]
    mover: int
    move_index: Optional[int] = None
    parent: Optional[int] = None
    visit_count: int = 0
    win_count: int = 0
    untried_moves: List[int] = field(default_factory=list)
    children: Dict[int, int] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.player is None

    @property
    def win_rate(self) -> float:
        if self.visit_count == 0:
            return 0.0
        return self.win_count / self.visit_count

    def ucb_score(self, parent_visits: int, exploration: float) -> float:
        if self.visit_count == 0:
            return math.inf
        exploration_term = exploration * math.sqrt(math.log(parent_visits) / self.visit_count)
        return self.win_rate + exploration_term


class NodeArena:
    """Flat node storage. Nodes refer to each other by integer handle."""

    def __init__(self) -> None:
        self._nodes: List[MCTSNode] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, handle: int) -> MCTSNode:
        return self._nodes[handle]

    def add(self, node: MCTSNode) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def clear(self) -> None:
        self._nodes.clear()

    def children_of(self, handle: int) -> Iterator[Tuple[int, MCTSNode]]:
        for move, child_handle in self._nodes[handle].children.items():
            yield move, self._nodes[child_handle]
