from evaluation.arena import Arena, ArenaConfig, MCTSPlayer, RandomPlayer

__all__ = ["Arena", "ArenaConfig", "MCTSPlayer", "RandomPlayer"]
