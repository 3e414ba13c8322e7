"""Batch simulation — play many seeded games and tally the outcomes."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from snakes_ladders.board import Board
from snakes_ladders.dice import RandomDie
from snakes_ladders.game import GameEngine, NullObserver

logger = logging.getLogger(__name__)


@dataclass
class SimulationSummary:
    """Aggregate of a batch of games."""

    seats: list[str] = field(default_factory=list)
    games: int = 0
    wins: dict[str, int] = field(default_factory=dict)
    turn_counts: list[int] = field(default_factory=list)
    unfinished: int = 0

    @property
    def mean_turns(self) -> float:
        if not self.turn_counts:
            return 0.0
        return sum(self.turn_counts) / len(self.turn_counts)

    def win_rate(self, seat: str) -> float:
        if self.games == 0:
            return 0.0
        return self.wins.get(seat, 0) / self.games


def seat_labels(names: list[str]) -> list[str]:
    """Make names unique per seat: ["A", "A"] → ["A", "A#2"]."""
    seen: dict[str, int] = {}
    labels = []
    for name in names:
        seen[name] = seen.get(name, 0) + 1
        labels.append(name if seen[name] == 1 else f"{name}#{seen[name]}")
    return labels


def simulate_games(
    player_names: list[str],
    games: int,
    seed: int | None = None,
    board: Board | None = None,
    max_turns: int | None = None,
) -> SimulationSummary:
    """Play *games* independent games with the same seating.

    Each game draws its die seed from one master generator, so the whole
    batch replays exactly for a given *seed*.
    """
    board = board if board is not None else Board()
    master = random.Random(seed)
    seats = seat_labels(player_names)
    summary = SimulationSummary(seats=seats, wins={s: 0 for s in seats})

    for i in range(games):
        engine = GameEngine(
            board=board,
            die=RandomDie(seed=master.randrange(2**32)),
            observer=NullObserver(),
            max_turns=max_turns,
        )
        for name in player_names:
            engine.add_player(name)
        result = engine.play()
        summary.games += 1

        if result.winner is None:
            summary.unfinished += 1
        else:
            winner_seat = seats[engine.players.index(engine.winner)]
            summary.wins[winner_seat] += 1
            summary.turn_counts.append(result.turns)

        logger.debug("Game %d/%d: %s after %d turns", i + 1, games, result.winner, result.turns)
        engine.end_game()

    return summary
