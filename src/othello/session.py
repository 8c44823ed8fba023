"""Boundary-layer session: owns one game for a human player against the AI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from mcts.tree import MCTSConfig, MoveStats, SearchResult
from othello.board import WHITE
from othello.errors import InvalidState
from othello.game import GameState, OthelloGame


@dataclass(frozen=True)
class Hint:
    move: int
    stats: MoveStats


def player_view(stats: MoveStats, searched_player: int, viewer: int) -> MoveStats:
    """Express root stats, which count wins for ``searched_player``, as wins for ``viewer``."""
    if searched_player == viewer:
        return stats
    return MoveStats(visits=stats.visits, wins=stats.visits - stats.wins)


class GameSession:
    """Holds the current game explicitly instead of caching it in module state."""

    def __init__(
        self,
        config: MCTSConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config
        self.rng = rng
        self.game: Optional[OthelloGame] = None

    def _require_game(self) -> OthelloGame:
        if self.game is None:
            raise InvalidState("No game has been started")
        return self.game

    def start(self, player_color: int) -> GameState:
        self.game = OthelloGame(player_color, config=self.config, rng=self.rng)
        if player_color == WHITE:
            self.game.make_ai_move()
        return self.game.get_game_state()

    @property
    def is_player_turn(self) -> bool:
        game = self.game
        if game is None or game.is_terminal:
            return False
        return game.get_current_player() == game.player_color

    def play_turn(self, index: int) -> bool:
        """Apply the human move, then let the AI move until the human is to move again."""
        game = self._require_game()
        if not self.is_player_turn:
            return False
        if not game.make_move(index):
            return False
        self.run_ai()
        return True

    def run_ai(self) -> int:
        """Play AI moves while it is the AI's turn. Returns how many were made."""
        game = self._require_game()
        played = 0
        while not game.is_terminal and game.get_current_player() != game.player_color:
            if not game.make_ai_move():
                break
            played += 1
        return played

    def analyze(self) -> Optional[SearchResult]:
        """Search the position in front of the player so hover and hint have stats for it."""
        if not self.is_player_turn:
            return None
        return self.game.analyze()

    def _current_search(self) -> Optional[SearchResult]:
        """Last search, if it was run on exactly the position now on the board."""
        game = self.game
        result = game.last_search if game is not None else None
        if result is None or result.board is None:
            return None
        if result.board != game.board or result.player != game.get_current_player():
            return None
        return result

    def hover_stats(self, index: int) -> Optional[MoveStats]:
        """Stats for one of the player's moves, or None before the position is analyzed."""
        game = self.game
        if not self.is_player_turn or index not in game.get_possible_moves():
            return None
        result = self._current_search()
        if result is None:
            return None
        stats = result.stats_for(index)
        if stats.visits == 0:
            return None
        return player_view(stats, result.player, game.player_color)

    def hint(self) -> Optional[Hint]:
        """Possible move with the best win chance for the player. Analyzes the position if needed."""
        if not self.is_player_turn:
            return None
        result = self._current_search() or self.game.analyze()
        if result is None:
            return None
        if not result.children:
            return Hint(move=result.move, stats=MoveStats())

        viewer = self.game.player_color
        best: Optional[Hint] = None
        best_rate = -1.0
        for move in self._possible_moves():
            stats = result.stats_for(move)
            if stats.visits == 0:
                continue
            view = player_view(stats, result.player, viewer)
            if view.win_rate > best_rate:
                best_rate = view.win_rate
                best = Hint(move=move, stats=view)
        return best

    def _possible_moves(self) -> List[int]:
        return self._require_game().get_possible_moves()
