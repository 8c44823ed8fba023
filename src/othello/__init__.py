from othello.board import BLACK, DRAW, EMPTY, NO_WINNER, NUM_CELLS, WHITE, Board, opponent
from othello.errors import (
    InternalSearchError,
    InvalidConfiguration,
    InvalidMove,
    InvalidState,
    OthelloError,
)
from othello.moves import has_legal_move, legal_move_flips, legal_moves, next_player

__all__ = [
    "BLACK",
    "DRAW",
    "EMPTY",
    "NO_WINNER",
    "NUM_CELLS",
    "WHITE",
    "Board",
    "opponent",
    "InternalSearchError",
    "InvalidConfiguration",
    "InvalidMove",
    "InvalidState",
    "OthelloError",
    "has_legal_move",
    "legal_move_flips",
    "legal_moves",
    "next_player",
]
