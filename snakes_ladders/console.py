"""Interactive console shell around the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from snakes_ladders.dice import DieLike, RandomDie, roll_from
from snakes_ladders.errors import EmptyPlayerNameError
from snakes_ladders.game import GameEngine, TurnRecord
from snakes_ladders.player import Player


@dataclass
class ConsoleObserver:
    """Prints status lines as the game goes."""

    output_fn: Callable[[str], None] = print

    def on_player_added(self, player: Player) -> None:
        self.output_fn(f"New player added: {player.name}")

    def on_move(self, record: TurnRecord) -> None:
        move = record.move
        self.output_fn(f"Dice value: {move.die}")
        if move.bounced:
            self.output_fn(f"{record.player} needs an exact roll and stays on {move.start}")
            return
        if move.jumped == "ladder":
            self.output_fn(f"{record.player} climbs a ladder at {move.landing}!")
        elif move.jumped == "snake":
            self.output_fn(f"{record.player} is bitten by a snake at {move.landing}!")
        self.output_fn(f"{record.player}'s position changed from {move.start} to {move.end}")

    def on_complete(self, player: Player) -> None:
        self.output_fn(f"Hurray! {player.name} has reached the end.")


class PromptedDie:
    """Waits for Enter before each roll, announcing whose turn it is."""

    def __init__(
        self,
        engine_ref: Callable[[], GameEngine],
        inner: DieLike,
        input_fn: Callable[[str], str] = input,
    ):
        self._engine_ref = engine_ref
        self._inner = inner
        self._input_fn = input_fn

    def roll(self) -> int:
        player = self._engine_ref().active_player
        self._input_fn(f"{player.name}'s turn: (press enter to roll the dice) ")
        return roll_from(self._inner)


def register_players(
    engine: GameEngine,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> None:
    while True:
        answer = input_fn("Want to add a player? (y/n) ").strip().lower()
        if answer.startswith("n"):
            break
        if not answer.startswith("y"):
            continue
        name = input_fn("Enter players name: ")
        try:
            engine.add_player(name)
        except EmptyPlayerNameError:
            output_fn("Can't take empty player name")


def run_console(
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
    die: DieLike | None = None,
    max_turns: int | None = None,
) -> str | None:
    """Register players, play one game, and return the winner's name."""
    engine: GameEngine | None = None
    inner = die if die is not None else RandomDie()
    prompted = PromptedDie(lambda: engine, inner, input_fn)
    engine = GameEngine(die=prompted, observer=ConsoleObserver(output_fn), max_turns=max_turns)

    register_players(engine, input_fn, output_fn)
    if not engine.players:
        output_fn("No players registered. Bye!")
        return None

    input_fn("Press enter to start the game ")
    output_fn("Starting the game")
    engine.play()

    winner = engine.end_game()
    output_fn("Game completed!!")
    if winner is None:
        output_fn("Nobody reached the end.")
    return winner
