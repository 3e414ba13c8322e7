"""Board layout and movement rules for Snakes & Ladders."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Mapping

from snakes_ladders.errors import InvalidBoardError

BOARD_LENGTH = 100

# fmt: off
SNAKES_LADDERS: dict[int, int] = {
    # Ladders (go UP)
     4: 23,  86: 90,  41: 62,  28: 53,  62: 98,
    # Snakes (go DOWN)
    97: 49,  82: 65,  43: 21,  59:  8,  91: 37,
}
# fmt: on


@dataclass(frozen=True)
class Move:
    """What happened when a die value was applied to a square."""

    start: int
    die: int
    end: int
    landing: int | None = None  # None = overshoot
    jumped: str | None = None  # "ladder" | "snake"

    @property
    def bounced(self) -> bool:
        return self.landing is None


@dataclass(frozen=True)
class Board:
    """Fixed track plus a read-only jump table.

    Holds no player state; every method is a pure function of the table.
    """

    jumps: Mapping[int, int] = field(default_factory=lambda: dict(SNAKES_LADDERS), hash=False)
    length: ClassVar[int] = BOARD_LENGTH

    def __post_init__(self) -> None:
        table = dict(self.jumps)
        for square, dest in table.items():
            if not 1 <= square < self.length:
                raise InvalidBoardError(f"Jump square {square} is off the playable track.")
            if not 1 <= dest < self.length:
                raise InvalidBoardError(f"Jump {square} -> {dest} leaves the playable track.")
            if square == dest:
                raise InvalidBoardError(f"Jump {square} -> {dest} goes nowhere.")
        object.__setattr__(self, "jumps", MappingProxyType(table))

    # ── Lookups ──────────────────────────────────────────────────────

    def jump_dest(self, square: int) -> int | None:
        return self.jumps.get(square)

    def is_ladder(self, square: int) -> bool:
        dest = self.jumps.get(square)
        return dest is not None and dest > square

    def is_snake(self, square: int) -> bool:
        dest = self.jumps.get(square)
        return dest is not None and dest < square

    @property
    def ladders(self) -> dict[int, int]:
        return {sq: dest for sq, dest in self.jumps.items() if dest > sq}

    @property
    def snakes(self) -> dict[int, int]:
        return {sq: dest for sq, dest in self.jumps.items() if dest < sq}

    # ── Movement ─────────────────────────────────────────────────────

    def trace(self, current: int, die: int) -> Move:
        """Compute where *die* takes a token sitting on *current*.

        Exact landing on the last square wins, overshoot wastes the roll,
        and a jump square redirects once (the destination is not looked
        up again).
        """
        if not 0 <= current <= self.length:
            raise ValueError(f"Position {current} is not on the board.")
        if die < 1:
            raise ValueError(f"Die value {die} is not positive.")

        target = current + die

        if target == self.length:
            return Move(start=current, die=die, end=target, landing=target)

        # Overshoot → stay put
        if target > self.length:
            return Move(start=current, die=die, end=current)

        dest = self.jumps.get(target)
        if dest is not None:
            kind = "ladder" if dest > target else "snake"
            return Move(start=current, die=die, end=dest, landing=target, jumped=kind)

        return Move(start=current, die=die, end=target, landing=target)

    def resolve(self, current: int, die: int) -> int:
        return self.trace(current, die).end
