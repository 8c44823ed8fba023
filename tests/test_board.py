import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

from othello.board import BLACK, DRAW, EMPTY, NUM_CELLS, WHITE, Board
from othello.errors import InvalidMove


def test_starting_position():
    board = Board.initial()
    assert board[27] == WHITE
    assert board[28] == BLACK
    assert board[35] == BLACK
    assert board[36] == WHITE
    assert board.counts() == (2, 2)
    assert board.empty_count() == 60


def test_black_plays_19_flips_only_27():
    board = Board.initial()
    after = board.apply(19, BLACK)

    changed = [i for i in range(NUM_CELLS) if board[i] != after[i]]
    assert changed == [19, 27]
    assert after[27] == BLACK
    assert after.counts() == (4, 1)


def test_apply_leaves_original_untouched():
    board = Board.initial()
    board.apply(19, BLACK)
    assert board == Board.initial()


def test_flips_in_several_directions():
    board = Board.from_string(
        """
        X . X . X . . .
        . O O O . . . .
        X O . O X . . .
        . O O O . . . .
        X . X . X . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        """
    )
    assert sorted(board.flips(18, BLACK)) == [9, 10, 11, 17, 19, 25, 26, 27]

    after = board.apply(18, BLACK)
    assert after.counts() == (17, 0)


def test_run_without_anchor_flips_nothing():
    board = Board.from_string(
        """
        . O O X . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . O
        """
    )
    assert sorted(board.flips(0, BLACK)) == [1, 2]
    # Run reaching the edge has no anchor
    assert board.flips(55, BLACK) == []
    assert board.flips(62, BLACK) == []


@pytest.mark.parametrize("index", [-1, 64, 27, 0])
def test_apply_rejects_illegal_cells(index):
    with pytest.raises(InvalidMove):
        Board.initial().apply(index, BLACK)


def test_winner_by_count():
    full_black_majority = Board.from_cells([BLACK] * 40 + [WHITE] * 24)
    assert full_black_majority.is_full()
    assert full_black_majority.is_terminal()
    assert full_black_majority.winner() == BLACK

    draw = Board.from_cells([BLACK, WHITE] * 32)
    assert draw.winner() == DRAW


def test_double_pass_is_terminal_before_full():
    board = Board.from_cells([BLACK] + [EMPTY] * 62 + [WHITE])
    assert not board.is_full()
    assert board.is_terminal()
    assert board.winner() == DRAW


def test_diagram_round_trip_and_validation():
    board = Board.initial()
    assert Board.from_string(str(board)) == board

    with pytest.raises(ValueError):
        Board.from_string("X" * 63)
    with pytest.raises(ValueError):
        Board.from_string("Z" * 64)


def test_cells_view_is_read_only():
    board = Board.initial()
    cells = board.cells
    assert cells.dtype == np.int8
    with pytest.raises(ValueError):
        cells[0] = BLACK
