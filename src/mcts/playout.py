"""Uniformly random playout policy."""

from __future__ import annotations

from typing import Optional

import numpy as np

from othello.board import Board, opponent
from othello.moves import legal_moves


def random_playout(board: Board, player: Optional[int], rng: np.random.Generator) -> int:
    """Play uniformly random legal moves from ``board`` until neither side can move.

    ``player`` is the side to move, or None for a finished position. Returns the
    winner tag of the final position.
    """
    if player is None:
        return board.winner()

    current = player
    passed = False
    while True:
        moves = legal_moves(board, current)
        if not moves:
            if passed:
                return board.winner()
            passed = True
            current = opponent(current)
            continue

        passed = False
        move = moves[int(rng.integers(len(moves)))]
        board = board.apply(move, current)
        current = opponent(current)
