from mcts.node import MCTSNode, NodeArena
from mcts.playout import random_playout
from mcts.tree import MCTS, MCTSConfig, MoveStats, SearchResult, best_move

__all__ = [
    "MCTSNode",
    "NodeArena",
    "random_playout",
    "MCTS",
    "MCTSConfig",
    "MoveStats",
    "SearchResult",
    "best_move",
]
