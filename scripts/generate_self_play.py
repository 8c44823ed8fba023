"""Play one AI-vs-AI game and dump every position with its MCTS statistics."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

from othello.config import DEFAULT_CONFIG_PATH, load_config, mcts_config_from_dict  # noqa: E402
from othello.game import OthelloGame  # noqa: E402
from othello.board import BLACK  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default=str(DEFAULT_CONFIG_PATH))
    parser.add_argument("--output", type=str, default=None)
    parser.add_argument("--time-ms", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--progress", action="store_true")
    args = parser.parse_args()

    config = load_config(Path(args.config))
    mcts_config = mcts_config_from_dict(config.get("mcts"))
    self_play_cfg = config.get("self_play", {})

    time_ms = args.time_ms if args.time_ms is not None else self_play_cfg.get("time_budget_ms")
    if time_ms is not None:
        mcts_config.time_budget_ms = time_ms
    if args.seed is not None:
        mcts_config.seed = args.seed

    game = OthelloGame(BLACK, config=mcts_config)
    game.set_ai_simulation_time(mcts_config.time_budget_ms)
    print(f"Running self-play with {game.get_ai_simulation_time()} ms per move")

    samples = []
    move_number = 0
    while not game.is_terminal:
        state = game.get_game_state()
        player = game.get_current_player()
        game.make_ai_move()
        search = game.last_search

        samples.append(
            {
                "state": state.to_dict(),
                "player": player,
                "move": search.move,
                "iterations": search.iterations,
                "stats": {str(move): stats.to_dict() for move, stats in sorted(search.children.items())},
            }
        )
        move_number += 1
        if args.progress and move_number % 5 == 0:
            print(f"Self-play move {move_number}...", flush=True)

    final_state = game.get_game_state()
    payload = {
        "metadata": {
            "version": "1.0",
            "generated": datetime.now(timezone.utc).isoformat(),
            "num_positions": len(samples),
            "time_budget_ms": game.get_ai_simulation_time(),
        },
        "samples": samples,
        "final": final_state.to_dict(),
    }

    output_path = Path(args.output or self_play_cfg.get("output", "data/self_play_game.json"))
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload))

    print(
        f"Wrote self-play game with {len(samples)} positions to {output_path} "
        f"(black {final_state.black_count}, white {final_state.white_count})"
    )


if __name__ == "__main__":
    main()
