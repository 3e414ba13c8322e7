"""CLI entry point: python -m snakes_ladders {play,simulate,chart}."""

from __future__ import annotations

import argparse
import logging
import sys

from snakes_ladders.chart import make_turns_histogram, make_win_chart
from snakes_ladders.console import run_console
from snakes_ladders.dice import RandomDie
from snakes_ladders.errors import SnakesLaddersError
from snakes_ladders.simulate import SimulationSummary, simulate_games


DEFAULT_PLAYERS = ["Alice", "Bob"]
DEFAULT_GAMES = 1000
DEFAULT_MAX_TURNS = 10_000


def _simulate(args: argparse.Namespace) -> SimulationSummary:
    players = args.players or DEFAULT_PLAYERS
    return simulate_games(
        players, games=args.games, seed=args.seed, max_turns=args.max_turns,
    )


# ── play ─────────────────────────────────────────────────────────────

def cmd_play(args: argparse.Namespace) -> None:
    """Play one interactive game at the terminal."""
    run_console(die=RandomDie(seed=args.seed), max_turns=args.max_turns)


# ── simulate ─────────────────────────────────────────────────────────

def cmd_simulate(args: argparse.Namespace) -> None:
    """Play many games automatically and print win rates."""
    summary = _simulate(args)

    print(f"\n{summary.games} games, mean length {summary.mean_turns:.1f} turns")
    if summary.unfinished:
        print(f"{summary.unfinished} game(s) hit the {args.max_turns}-turn cap")
    print("=" * 40)
    for seat, wins in sorted(summary.wins.items(), key=lambda kv: kv[1], reverse=True):
        print(f"  {seat:24s} {wins:6d}  {summary.win_rate(seat):6.1%}")


# ── chart ────────────────────────────────────────────────────────────

def cmd_chart(args: argparse.Namespace) -> None:
    """Simulate, then save win-share and game-length charts."""
    summary = _simulate(args)
    prefix = args.output or "snakes_ladders"
    wins = make_win_chart(summary, output_path=f"{prefix}_wins.png")
    turns = make_turns_histogram(summary, output_path=f"{prefix}_turns.png")
    print(f"Charts saved to {wins} and {turns}")


# ── main ─────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="snakes_ladders",
        description="Snakes & Ladders game engine and simulator",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every turn")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the die (replayable games)")
    parser.add_argument("--max-turns", type=int, default=DEFAULT_MAX_TURNS, help="Turn cap per game")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("play", help="Play interactively at the terminal")

    for name, help_text in (("simulate", "Simulate many games"), ("chart", "Simulate and chart results")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--games", type=int, default=DEFAULT_GAMES, help=f"Games to play (default {DEFAULT_GAMES})")
        p.add_argument("--players", nargs="*", help="Player names in turn order")
        if name == "chart":
            p.add_argument("--output", "-o", help="Output PNG path prefix")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
    )

    commands = {"play": cmd_play, "simulate": cmd_simulate, "chart": cmd_chart}
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return

    try:
        command(args)
    except SnakesLaddersError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except (KeyboardInterrupt, EOFError):
        print("\nGame abandoned.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
