"""Per-player token state."""

from __future__ import annotations

from typing import Callable

from snakes_ladders.board import BOARD_LENGTH


class Player:
    """A named token on the track.

    Position and completion are read-only from outside; the engine moves
    the token through :meth:`play`.
    """

    def __init__(self, name: str):
        self._name = name
        self._position = 0
        self._completed = False

    def __repr__(self) -> str:
        return f"Player({self._name!r}, position={self._position}, completed={self._completed})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def position(self) -> int:
        return self._position

    @property
    def completed(self) -> bool:
        return self._completed

    def apply_move(self, new_position: int) -> None:
        if not 0 <= new_position <= BOARD_LENGTH:
            raise ValueError(f"Position {new_position} is not on the board.")
        self._position = new_position

    def check_completion(self, end_position: int = BOARD_LENGTH) -> bool:
        # Once finished, always finished
        if self._position == end_position:
            self._completed = True
        return self._completed

    def play(self, resolve_move: Callable[[int], int], end_position: int = BOARD_LENGTH) -> bool:
        """Take one turn: resolve, apply, then check completion.

        If *resolve_move* raises, nothing about the player changes.
        """
        new_position = resolve_move(self._position)
        self.apply_move(new_position)
        return self.check_completion(end_position)
