"""Legal move generation."""

from __future__ import annotations

from typing import Dict, List, Optional

from othello.board import NUM_CELLS, Board, flips_on, is_legal_on, opponent


def legal_moves(board: Board, player: int) -> List[int]:
    """Return the sorted cell indices ``player`` may play on ``board``."""
    cells = board.to_list()
    return [index for index in range(NUM_CELLS) if is_legal_on(cells, index, player)]


def legal_move_flips(board: Board, player: int) -> Dict[int, List[int]]:
    """Map every legal move to the discs it flips."""
    cells = board.to_list()
    result: Dict[int, List[int]] = {}
    for index in range(NUM_CELLS):
        flipped = flips_on(cells, index, player)
        if flipped:
            result[index] = flipped
    return result


def has_legal_move(board: Board, player: int) -> bool:
    return board.has_move(player)


def next_player(board: Board, mover: int) -> Optional[int]:
    """Side to move after ``mover`` has played, accounting for forced passes.

    Returns None when neither side can move.
    """
    other = opponent(mover)
    if board.has_move(other):
        return other
    if board.has_move(mover):
        return mover
    return None
