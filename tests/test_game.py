import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

from mcts.tree import MIN_TIME_BUDGET_MS, MCTSConfig
from othello.board import BLACK, DRAW, EMPTY, NO_WINNER, NUM_CELLS, WHITE, Board
from othello.game import OthelloGame

BLOCKED_WHITE = """
    X O . . . . . .
    . . . . . . . .
    . . . . . . . .
    . . . . . . . .
    X O . . . . . .
    . . . . . . . .
    . . . . . . . .
    . . . . . . . .
"""


def fast_config(**overrides) -> MCTSConfig:
    values = {"time_budget_ms": 60_000, "max_iterations": 30, "seed": 0}
    values.update(overrides)
    return MCTSConfig(**values)


def test_new_game_state():
    game = OthelloGame(BLACK)
    state = game.get_game_state()

    assert state.current_player == BLACK
    assert state.possible_moves == (19, 26, 37, 44)
    assert state.winner == NO_WINNER
    assert (state.black_count, state.white_count) == (2, 2)
    assert game.get_possible_moves() == [19, 26, 37, 44]


def test_black_plays_19_then_white_to_move():
    game = OthelloGame(BLACK)
    assert game.make_move(19)

    state = game.get_game_state()
    assert state.board[19] == BLACK
    assert state.board[27] == BLACK
    assert (state.black_count, state.white_count) == (4, 1)
    assert game.get_current_player() == WHITE


def test_illegal_moves_are_rejected_without_change():
    game = OthelloGame(BLACK)
    before = game.get_game_state()

    for index in (-1, 64, 27, 0, 20):
        assert not game.make_move(index)

    assert game.get_game_state() == before


def test_game_state_is_stable_between_moves():
    game = OthelloGame(BLACK)
    game.make_move(37)
    assert game.get_game_state() == game.get_game_state()
    assert game.get_game_state().to_json() == game.get_game_state().to_json()


def test_wire_format_field_names():
    game = OthelloGame(WHITE)
    payload = json.loads(game.get_game_state().to_json())

    assert set(payload) == {"board", "currentPlayer", "possibleMoves", "winner", "blackCount", "whiteCount"}
    assert len(payload["board"]) == NUM_CELLS
    assert payload["board"][0] is None
    assert payload["board"][27] == WHITE
    assert payload["board"][28] == BLACK
    assert payload["currentPlayer"] == BLACK
    assert payload["winner"] == -1


def test_forced_pass_keeps_mover():
    game = OthelloGame.from_board(Board.from_string(BLOCKED_WHITE), current_player=BLACK)
    assert game.get_possible_moves() == [2, 34]

    assert game.make_move(2)
    assert game.get_current_player() == BLACK
    assert game.get_possible_moves() == [34]

    assert game.make_move(34)
    state = game.get_game_state()
    assert game.is_terminal
    assert state.winner == BLACK
    assert (state.black_count, state.white_count) == (6, 0)
    assert state.possible_moves == ()


def test_terminal_game_rejects_moves():
    board = Board.from_cells([BLACK] + [EMPTY] * 62 + [WHITE])
    game = OthelloGame.from_board(board)

    assert game.is_terminal
    assert game.winner == DRAW
    assert not game.make_move(1)
    assert not game.make_ai_move()


def test_full_board_winner_matches_counts():
    board = Board.from_cells([WHITE] * 33 + [BLACK] * 31)
    game = OthelloGame.from_board(board)
    state = game.get_game_state()
    assert state.winner == WHITE
    assert state.white_count > state.black_count


def test_from_board_passes_blocked_side():
    board = Board.from_string(BLOCKED_WHITE)
    game = OthelloGame.from_board(board, current_player=WHITE)
    assert game.get_current_player() == BLACK


def test_ai_move_applies_and_records_stats():
    game = OthelloGame(BLACK, config=fast_config())
    assert game.make_ai_move()

    state = game.get_game_state()
    assert state.black_count + state.white_count == 5
    assert game.get_current_player() == WHITE

    search = game.last_search
    assert search is not None
    assert search.root_visits == 30
    assert sum(game.get_mcts_stats(move).visits for move in (19, 26, 37, 44)) == 30
    for move in (19, 26, 37, 44):
        stats = game.get_mcts_stats(move)
        assert 0 <= stats.wins <= stats.visits



def test_analyze_searches_without_moving():
    game = OthelloGame(BLACK, config=fast_config())
    before = game.get_game_state()

    result = game.analyze()
    assert result is not None
    assert result.board == game.board
    assert result.player == BLACK
    assert game.last_search is result
    assert game.get_game_state() == before

    assert game.get_mcts_stats(result.move).visits > 0

    game.play(19)
    assert game.last_search.board != game.board


def test_stats_default_to_zero():
    game = OthelloGame(BLACK, config=fast_config())
    assert game.get_mcts_stats(19).to_dict() == {"visits": 0, "wins": 0}

    game.make_ai_move()
    for index in (0, 63, 27, -5, 100):
        assert game.get_mcts_stats(index).to_dict() == {"visits": 0, "wins": 0}
    assert json.loads(game.get_mcts_stats(0).to_json()) == {"visits": 0, "wins": 0}


def test_single_legal_move_short_circuits():
    game = OthelloGame.from_board(Board.from_string(BLOCKED_WHITE), current_player=BLACK, config=fast_config())
    game.make_move(2)

    assert game.make_ai_move()
    assert game.last_search.move == 34
    assert game.last_search.root_visits == 0
    assert game.is_terminal


def test_simulation_time_is_clamped():
    game = OthelloGame(BLACK)
    game.set_ai_simulation_time(250)
    assert game.get_ai_simulation_time() == 250

    for value in (0, -100, 1):
        game.set_ai_simulation_time(value)
        assert game.get_ai_simulation_time() == MIN_TIME_BUDGET_MS


def test_ai_plays_full_game_consistently():
    game = OthelloGame(BLACK, config=fast_config(max_iterations=5))
    while not game.is_terminal:
        mover = game.get_current_player()
        assert game.make_ai_move()
        if not game.is_terminal:
            following = game.get_current_player()
            if following == mover:
                assert not game.board.has_move(1 - mover)

    state = game.get_game_state()
    if state.black_count > state.white_count:
        assert state.winner == BLACK
    elif state.white_count > state.black_count:
        assert state.winner == WHITE
    else:
        assert state.winner == DRAW


def test_new_game_resets_position_and_stats():
    game = OthelloGame(BLACK, config=fast_config())
    game.make_ai_move()
    game.new_game(WHITE)

    assert game.player_color == WHITE
    assert game.board == Board.initial()
    assert game.last_search is None
    assert game.get_current_player() == BLACK
