"""Engine-vs-engine matches for measuring strength against time budget."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional, Protocol, Tuple

import numpy as np

from mcts.tree import MCTS, MCTSConfig
from othello.board import BLACK, DRAW, WHITE, Board
from othello.moves import legal_moves, next_player


@dataclass
class ArenaConfig:
    num_games: int = 10
    opening_random_moves: int = 4
    seed: Optional[int] = None
    max_moves: int = 128


class Player(Protocol):
    def select_move(self, board: Board, player: int) -> int:
        ...


class RandomPlayer:
    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng or np.random.default_rng()

    def select_move(self, board: Board, player: int) -> int:
        moves = legal_moves(board, player)
        if not moves:
            raise ValueError("No legal moves available")
        return moves[int(self.rng.integers(len(moves)))]


class MCTSPlayer:
    def __init__(self, config: MCTSConfig | None = None, rng: np.random.Generator | None = None) -> None:
        self.mcts = MCTS(config=config, rng=rng)

    @classmethod
    def with_budget(cls, time_budget_ms: int, seed: Optional[int] = None) -> "MCTSPlayer":
        return cls(MCTSConfig(time_budget_ms=time_budget_ms, seed=seed))

    def select_move(self, board: Board, player: int) -> int:
        return self.mcts.select_move(board, player)


class Arena:
    def __init__(self, config: ArenaConfig | None = None) -> None:
        self.config = config or ArenaConfig()
        self.rng = np.random.default_rng(self.config.seed)

    def play_game(self, black: Player, white: Player) -> int:
        """Play one game and return the winner tag (BLACK, WHITE or DRAW)."""
        board = Board.initial()
        current: Optional[int] = BLACK
        move_count = 0

        while current is not None and move_count < self.config.max_moves:
            if move_count < self.config.opening_random_moves:
                moves = legal_moves(board, current)
                move = moves[int(self.rng.integers(len(moves)))]
            elif current == BLACK:
                move = black.select_move(board, current)
            else:
                move = white.select_move(board, current)

            board = board.apply(move, current)
            current = next_player(board, current)
            move_count += 1

        return board.winner()

    def play_match(
        self,
        player_a: Player,
        player_b: Player,
        num_games: Optional[int] = None,
        progress: bool = False,
    ) -> Tuple[int, int, int]:
        """Alternate colours each game. Returns (wins, draws, losses) for ``player_a``."""
        num_games = self.config.num_games if num_games is None else num_games
        wins = draws = losses = 0

        for game_idx in range(num_games):
            if game_idx % 2 == 0:
                result = self.play_game(player_a, player_b)
                a_color = BLACK
            else:
                result = self.play_game(player_b, player_a)
                a_color = WHITE

            if result == DRAW:
                draws += 1
            elif result == a_color:
                wins += 1
            else:
                losses += 1

            if progress:
                print(
                    f"Game {game_idx + 1}/{num_games}: W {wins} D {draws} L {losses}",
                    flush=True,
                )

        return wins, draws, losses

    def compare(
        self,
        challenger: Player,
        champion: Player,
        num_games: Optional[int] = None,
        win_rate_threshold: float = 0.55,
    ) -> Dict[str, object]:
        wins, draws, losses = self.play_match(challenger, champion, num_games)
        total = max(1, wins + draws + losses)
        win_rate = (wins + 0.5 * draws) / total
        return {
            "wins": wins,
            "draws": draws,
            "losses": losses,
            "win_rate": win_rate,
            "stronger": win_rate > win_rate_threshold,
        }


def budget_variants(base: MCTSConfig, budgets_ms: Tuple[int, ...]) -> Dict[int, MCTSConfig]:
    return {budget: replace(base, time_budget_ms=budget) for budget in budgets_ms}
