"""Pit MCTS engines with different time budgets against each other or a random player."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

import numpy as np  # noqa: E402

from evaluation.arena import Arena, ArenaConfig, MCTSPlayer, RandomPlayer, budget_variants  # noqa: E402
from othello.config import DEFAULT_CONFIG_PATH, load_config, mcts_config_from_dict  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default=str(DEFAULT_CONFIG_PATH))
    parser.add_argument("--challenger-ms", type=int, default=None)
    parser.add_argument("--champion-ms", type=int, default=None, help="omit to play a random opponent")
    parser.add_argument("--games", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--progress", action="store_true")
    args = parser.parse_args()

    config = load_config(Path(args.config))
    base = mcts_config_from_dict(config.get("mcts"))
    arena_cfg = config.get("arena", {})

    challenger_ms = args.challenger_ms or arena_cfg.get("time_budget_ms", base.time_budget_ms)
    budgets = (challenger_ms,) if args.champion_ms is None else (challenger_ms, args.champion_ms)
    variants = budget_variants(base, budgets)

    arena = Arena(
        ArenaConfig(
            num_games=args.games or arena_cfg.get("num_games", 10),
            opening_random_moves=arena_cfg.get("opening_random_moves", 4),
            seed=args.seed,
        )
    )

    challenger = MCTSPlayer(variants[challenger_ms])
    if args.champion_ms is None:
        champion = RandomPlayer(np.random.default_rng(args.seed))
        label = "random"
    else:
        champion = MCTSPlayer(variants[args.champion_ms])
        label = f"{args.champion_ms} ms"

    print(f"MCTS {challenger_ms} ms vs {label}, {arena.config.num_games} games")
    wins, draws, losses = arena.play_match(challenger, champion, progress=args.progress)
    total = max(1, wins + draws + losses)
    print(f"Wins {wins}, draws {draws}, losses {losses} (score {(wins + 0.5 * draws) / total:.2%})")


if __name__ == "__main__":
    main()
