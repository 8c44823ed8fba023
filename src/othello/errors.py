"""Exception types raised by the Othello engine."""

from __future__ import annotations


class OthelloError(Exception):
    """Base class for engine errors."""


class InvalidMove(OthelloError):
    """Index out of range, occupied, or flips nothing for the side to move."""


class InvalidState(OthelloError):
    """Operation needs a game awaiting a move but the game is over."""


class InvalidConfiguration(OthelloError, ValueError):
    """Malformed engine configuration."""


class InternalSearchError(OthelloError, RuntimeError):
    """Search statistics violate an invariant. Indicates a bug, not bad input."""
