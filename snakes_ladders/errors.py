"""Exception hierarchy for the Snakes & Ladders engine.

Registration and start errors are recoverable: the caller fixes its input
and retries. Die errors are fatal to the running game loop.
"""

from __future__ import annotations


class SnakesLaddersError(Exception):
    """Base exception for all game-related errors."""


class EmptyPlayerNameError(SnakesLaddersError):
    """Player name is empty or whitespace only."""


class NoPlayersRegisteredError(SnakesLaddersError):
    """Game cannot start without at least one player."""


class InvalidDieValueError(SnakesLaddersError):
    """Die source produced something other than a face value."""


class DieExhaustedError(InvalidDieValueError):
    """Scripted die ran out of rolls."""


class GameStateError(SnakesLaddersError):
    """Operation is not allowed in the engine's current phase."""


class InvalidBoardError(SnakesLaddersError):
    """Jump table does not fit on the board."""
