"""Game engine — registers players and drives the round-robin turn loop."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from snakes_ladders.board import Board, Move
from snakes_ladders.dice import DieLike, RandomDie, check_roll, roll_from
from snakes_ladders.errors import (
    EmptyPlayerNameError,
    GameStateError,
    NoPlayersRegisteredError,
)
from snakes_ladders.player import Player

logger = logging.getLogger(__name__)


class GamePhase(str, Enum):
    SETUP = "setup"
    RUNNING = "running"
    ENDED = "ended"


# ── Structured types ────────────────────────────────────────────────

@dataclass
class TurnRecord:
    """Record of a single turn."""

    turn_number: int
    pass_number: int
    player: str
    move: Move
    completed: bool = False


@dataclass
class GameResult:
    winner: str | None  # None when the turn cap was hit
    reason: str  # "win" | "max_turns" | "in_progress"
    turns: int = 0
    passes: int = 0
    positions: list[tuple[str, int]] = field(default_factory=list)  # registration order


# ── Observer ────────────────────────────────────────────────────────

class GameObserver(Protocol):
    """Receives notifications as a game is played. Never a control input."""

    def on_player_added(self, player: Player) -> None: ...

    def on_move(self, record: TurnRecord) -> None: ...

    def on_complete(self, player: Player) -> None: ...


@dataclass
class ListObserver:
    """Default observer — collects turn records into a list."""

    records: list[TurnRecord] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    finishers: list[str] = field(default_factory=list)

    def on_player_added(self, player: Player) -> None:
        self.added.append(player.name)

    def on_move(self, record: TurnRecord) -> None:
        self.records.append(record)

    def on_complete(self, player: Player) -> None:
        self.finishers.append(player.name)


class NullObserver:
    def on_player_added(self, player: Player) -> None:
        pass

    def on_move(self, record: TurnRecord) -> None:
        pass

    def on_complete(self, player: Player) -> None:
        pass


# ── Engine ──────────────────────────────────────────────────────────

class GameEngine:
    """Play one game of Snakes & Ladders.

    Lifecycle is SETUP → RUNNING → ENDED. Turns go round in registration
    order, skipping players who have already finished. The game stops
    right after the first player reaches the last square, in the middle
    of a pass if need be: players seated after the winner do not get
    their turn in that pass. This is the intended rule, not an early exit
    bug.

    Turns are strictly serialized. The only call that may block is the
    die roll, and no state changes until it returns a valid value.
    """

    def __init__(
        self,
        board: Board | None = None,
        die: DieLike | None = None,
        observer: GameObserver | None = None,
        max_turns: int | None = None,
    ):
        self.board = board if board is not None else Board()
        self.die = die if die is not None else RandomDie()
        self.observer = observer if observer is not None else ListObserver()
        self.max_turns = max_turns

        self._players: list[Player] = []
        self._phase = GamePhase.SETUP
        self._winner: Player | None = None
        self._reason: str | None = None
        self._turn_number = 0
        self._pass_number = 0
        self._cursor = 0
        self._active: Player | None = None
        self._turn_lock = threading.Lock()

    # ── Read-only views ─────────────────────────────────────────────

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players)

    @property
    def winner(self) -> Player | None:
        return self._winner

    @property
    def active_player(self) -> Player | None:
        """Player whose turn is in progress, if any."""
        return self._active

    @property
    def turn_number(self) -> int:
        return self._turn_number

    @property
    def pass_number(self) -> int:
        return self._pass_number

    # ── Setup ───────────────────────────────────────────────────────

    def add_player(self, name: str) -> Player:
        if self._phase is not GamePhase.SETUP:
            raise GameStateError(f"Cannot add players while the game is {self._phase.value}.")
        name = (name or "").strip()
        if not name:
            raise EmptyPlayerNameError("Can't take empty player name.")

        player = Player(name)
        self._players.append(player)
        logger.info("New player added: %s", name)
        self.observer.on_player_added(player)
        return player

    def start_game(self) -> None:
        if self._phase is not GamePhase.SETUP:
            raise GameStateError(f"Cannot start a game that is {self._phase.value}.")
        if not self._players:
            raise NoPlayersRegisteredError("Add at least one player before starting.")
        self._phase = GamePhase.RUNNING
        logger.info(
            "Starting the game with %d player(s): %s",
            len(self._players), ", ".join(p.name for p in self._players),
        )

    # ── Turn loop ───────────────────────────────────────────────────

    def play(self) -> GameResult:
        """Run turns until someone finishes (or the turn cap is hit)."""
        if self._phase is GamePhase.SETUP:
            self.start_game()
        elif self._phase is not GamePhase.RUNNING:
            raise GameStateError("Game is already over.")

        while self._phase is GamePhase.RUNNING:
            if self.max_turns is not None and self._turn_number >= self.max_turns:
                self._phase = GamePhase.ENDED
                self._reason = "max_turns"
                logger.info("Turn cap of %d reached with no winner.", self.max_turns)
                break
            self.step()

        return self.result()

    def step(self) -> TurnRecord:
        """Play exactly one turn for the next eligible player."""
        if not self._turn_lock.acquire(blocking=False):
            raise GameStateError("Another turn is already in progress.")
        try:
            if self._phase is not GamePhase.RUNNING:
                raise GameStateError(f"Cannot take a turn while the game is {self._phase.value}.")
            cursor, passes = self._cursor, self._pass_number
            player = self._next_player()
            self._active = player
            try:
                value = self._roll()
            except BaseException:
                # Cancelled or broken roll: rewind so the same player is asked again
                self._cursor, self._pass_number = cursor, passes
                raise
            return self._play_turn(player, value)
        finally:
            self._active = None
            self._turn_lock.release()

    def _next_player(self) -> Player:
        count = len(self._players)
        for _ in range(count):
            if self._cursor == 0:
                self._pass_number += 1
            player = self._players[self._cursor]
            self._cursor = (self._cursor + 1) % count
            if not player.completed:
                return player
        raise GameStateError("No player is left to take a turn.")

    def _roll(self) -> int:
        # Only suspension point
        return check_roll(roll_from(self.die))

    def _play_turn(self, player: Player, value: int) -> TurnRecord:
        move: Move | None = None

        def resolve(position: int) -> int:
            nonlocal move
            move = self.board.trace(position, value)
            return move.end

        completed = player.play(resolve, self.board.length)
        assert move is not None
        self._turn_number += 1

        record = TurnRecord(
            turn_number=self._turn_number,
            pass_number=self._pass_number,
            player=player.name,
            move=move,
            completed=completed,
        )
        logger.debug(
            "Turn %d: %s rolled %d, %d → %d%s",
            record.turn_number, player.name, move.die, move.start, move.end,
            f" ({move.jumped} at {move.landing})" if move.jumped else "",
        )
        if completed:
            self._winner = player
            self._reason = "win"
            self._phase = GamePhase.ENDED
            logger.info("%s has reached the end.", player.name)

        self.observer.on_move(record)
        if completed:
            self.observer.on_complete(player)

        return record

    # ── Termination ─────────────────────────────────────────────────

    def result(self) -> GameResult:
        return GameResult(
            winner=self._winner.name if self._winner is not None else None,
            reason=self._reason or "in_progress",
            turns=self._turn_number,
            passes=self._pass_number,
            positions=[(p.name, p.position) for p in self._players],
        )

    def end_game(self) -> str | None:
        """Report the winner's name, then clear per-game state."""
        if self._phase is not GamePhase.ENDED:
            raise GameStateError("Game has not finished yet.")
        name = self._winner.name if self._winner is not None else None
        logger.info("Game completed! Winner: %s", name or "nobody")
        self.cleanup()
        return name

    def cleanup(self) -> None:
        """Drop player state. The engine cannot host another game afterwards."""
        self._players = []
        self._cursor = 0
        self._turn_number = 0
        self._pass_number = 0
        self._winner = None
        self._reason = None
        self._phase = GamePhase.ENDED
