"""Die sources — the engine's only external input."""

from __future__ import annotations

import random
from typing import Callable, Iterable, Protocol, Union, runtime_checkable

from snakes_ladders.errors import DieExhaustedError, InvalidDieValueError

DIE_SIDES = 6


@runtime_checkable
class DieSource(Protocol):
    """Anything that can hand the engine a face value."""

    def roll(self) -> int: ...


DieLike = Union[DieSource, Callable[[], int]]


def check_roll(value: object, sides: int = DIE_SIDES) -> int:
    """Return *value* if it is a legal face, else raise.

    Out-of-range values are never clamped.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDieValueError(f"Die returned {value!r}, expected an integer.")
    if not 1 <= value <= sides:
        raise InvalidDieValueError(f"Die returned {value}, expected 1–{sides}.")
    return value


def roll_from(die: DieLike) -> int:
    if isinstance(die, DieSource):
        return die.roll()
    return die()


class RandomDie:
    """Uniform die over 1..sides with its own seedable generator."""

    def __init__(self, seed: int | None = None, sides: int = DIE_SIDES):
        self.sides = sides
        self._rng = random.Random(seed)

    def roll(self) -> int:
        # randint is inclusive on both ends
        return self._rng.randint(1, self.sides)


class ScriptedDie:
    """Replays a fixed sequence of rolls — for tests and replays."""

    def __init__(self, rolls: Iterable[int]):
        self._rolls = list(rolls)
        self._idx = 0

    @property
    def remaining(self) -> int:
        return len(self._rolls) - self._idx

    def roll(self) -> int:
        if self._idx >= len(self._rolls):
            raise DieExhaustedError(f"Scripted die exhausted after {len(self._rolls)} rolls.")
        value = self._rolls[self._idx]
        self._idx += 1
        return value
