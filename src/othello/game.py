"""Game controller: turn order, passes, terminal detection and the AI entry point."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

import numpy as np

from mcts.tree import MCTS, MCTSConfig, MoveStats, SearchResult, clamp_time_budget
from othello.board import BLACK, EMPTY, NO_WINNER, NUM_CELLS, WHITE, Board
from othello.errors import InvalidMove, InvalidState
from othello.moves import legal_moves, next_player


@dataclass(frozen=True)
class GameState:
    board: Tuple[int, ...]
    current_player: int
    possible_moves: Tuple[int, ...]
    winner: int
    black_count: int
    white_count: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "board": [None if cell == EMPTY else cell for cell in self.board],
            "currentPlayer": self.current_player,
            "possibleMoves": list(self.possible_moves),
            "winner": self.winner,
            "blackCount": self.black_count,
            "whiteCount": self.white_count,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class OthelloGame:
    """One game and the engine that plays for the AI side.

    ``player_color`` only records which side the caller controls; Black always
    moves first. Callers must serialise calls on a single instance.
    """

    def __init__(
        self,
        player_color: int = BLACK,
        config: MCTSConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.engine = MCTS(config=replace(config) if config else MCTSConfig(), rng=rng)
        self.new_game(player_color)

    @classmethod
    def from_board(
        cls,
        board: Board,
        current_player: int = BLACK,
        player_color: int = BLACK,
        config: MCTSConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> "OthelloGame":
        """Start from an arbitrary position. A side with no move passes immediately."""
        game = cls(player_color=player_color, config=config, rng=rng)
        game._board = board
        if board.has_move(current_player):
            game._current_player = current_player
            game._terminal = False
        else:
            fallback = next_player(board, current_player)
            game._current_player = current_player if fallback is None else fallback
            game._terminal = fallback is None
        return game

    def new_game(self, player_color: int) -> None:
        if player_color not in (BLACK, WHITE):
            raise ValueError(f"player_color must be BLACK or WHITE, got {player_color}")
        self.player_color = player_color
        self._board = Board.initial()
        self._current_player = BLACK
        self._terminal = False
        self._last_search: Optional[SearchResult] = None

    @property
    def board(self) -> Board:
        return self._board

    @property
    def is_terminal(self) -> bool:
        return self._terminal

    @property
    def winner(self) -> int:
        if not self._terminal:
            return NO_WINNER
        return self._board.winner()

    @property
    def last_search(self) -> Optional[SearchResult]:
        return self._last_search

    def play(self, index: int) -> None:
        """Apply ``index`` for the side to move, raising on illegal input."""
        if self._terminal:
            raise InvalidState("Game is over")
        if not 0 <= index < NUM_CELLS:
            raise InvalidMove(f"Cell index out of range: {index}")

        mover = self._current_player
        self._board = self._board.apply(index, mover)

        following = next_player(self._board, mover)
        if following is None:
            self._terminal = True
        else:
            self._current_player = following

    def make_move(self, index: int) -> bool:
        try:
            self.play(index)
        except (InvalidMove, InvalidState):
            return False
        return True

    def make_ai_move(self) -> bool:
        if self._terminal:
            return False
        if not self._board.has_move(self._current_player):
            return False

        result = self.engine.search(self._board, self._current_player)
        self._last_search = result
        self.play(result.move)
        return True

    def analyze(self) -> Optional[SearchResult]:
        """Search the current position for the side to move without playing the result."""
        if self._terminal or not self._board.has_move(self._current_player):
            return None
        self._last_search = self.engine.search(self._board, self._current_player)
        return self._last_search

    def set_ai_simulation_time(self, milliseconds: int) -> None:
        self.engine.config.time_budget_ms = clamp_time_budget(milliseconds)

    def get_ai_simulation_time(self) -> int:
        return self.engine.config.time_budget_ms

    def get_possible_moves(self) -> List[int]:
        if self._terminal:
            return []
        return legal_moves(self._board, self._current_player)

    def get_current_player(self) -> int:
        return self._current_player

    def get_game_state(self) -> GameState:
        black, white = self._board.counts()
        return GameState(
            board=tuple(self._board.to_list()),
            current_player=self._current_player,
            possible_moves=tuple(self.get_possible_moves()),
            winner=self.winner,
            black_count=black,
            white_count=white,
        )

    def get_mcts_stats(self, index: int) -> MoveStats:
        if self._last_search is None:
            return MoveStats()
        return self._last_search.stats_for(index)
