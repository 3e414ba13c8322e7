"""Tests for snakes_ladders.game (engine and turn loop)."""

import pytest

from snakes_ladders.board import Board
from snakes_ladders.dice import ScriptedDie
from snakes_ladders.errors import (
    EmptyPlayerNameError,
    GameStateError,
    InvalidDieValueError,
    NoPlayersRegisteredError,
)
from snakes_ladders.game import GameEngine, GamePhase, GameResult, ListObserver

# 1 → 99 makes short games easy to script
SHORTCUT = Board(jumps={1: 99})
PLAIN = Board(jumps={})


def _engine(rolls, *names, board=None, max_turns=None):
    observer = ListObserver()
    engine = GameEngine(
        board=board, die=ScriptedDie(rolls), observer=observer, max_turns=max_turns,
    )
    for name in names:
        engine.add_player(name)
    return engine, observer


# ── registration ────────────────────────────────────────────────────

def test_add_player_keeps_order():
    engine, observer = _engine([], "A", "B", "C")
    assert [p.name for p in engine.players] == ["A", "B", "C"]
    assert observer.added == ["A", "B", "C"]
    assert engine.phase is GamePhase.SETUP


def test_add_player_strips_name():
    engine, _ = _engine([])
    assert engine.add_player("  Alice ").name == "Alice"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_empty_name_rejected(name):
    engine, _ = _engine([], "A")
    with pytest.raises(EmptyPlayerNameError):
        engine.add_player(name)
    assert [p.name for p in engine.players] == ["A"]


def test_start_without_players_rejected():
    engine, _ = _engine([])
    with pytest.raises(NoPlayersRegisteredError):
        engine.start_game()
    assert engine.phase is GamePhase.SETUP

    # Recoverable: add someone and try again
    engine.add_player("A")
    engine.start_game()
    assert engine.phase is GamePhase.RUNNING


def test_cannot_add_player_after_start():
    engine, _ = _engine([], "A")
    engine.start_game()
    with pytest.raises(GameStateError):
        engine.add_player("B")


def test_step_before_start_rejected():
    engine, _ = _engine([3], "A")
    with pytest.raises(GameStateError):
        engine.step()


# ── single-player scenario ──────────────────────────────────────────

def test_single_player_runs_to_exactly_100():
    rolls = [4, 6, 6, 5, 6, 6, 6, 6, 6, 6, 5, 6, 6, 6, 1]
    engine, observer = _engine(rolls + [3, 3], "Solo")

    result = engine.play()

    positions = [r.move.end for r in observer.records]
    assert positions[:2] == [23, 29]  # 4 is a ladder to 23, then 23 + 6
    assert positions[-2:] == [99, 100]
    assert result == GameResult(
        winner="Solo", reason="win", turns=15, passes=15, positions=[("Solo", 100)],
    )
    assert engine.die.remaining == 2  # no turns after the win
    assert engine.phase is GamePhase.ENDED
    assert observer.finishers == ["Solo"]


def test_overshoot_wastes_the_roll():
    engine, observer = _engine([1, 6, 1], "Solo", board=SHORTCUT)
    result = engine.play()

    assert [r.move.end for r in observer.records] == [99, 99, 100]
    assert observer.records[1].move.bounced
    assert result.winner == "Solo"


# ── multi-player ordering ───────────────────────────────────────────

def test_turn_order_is_stable_across_passes():
    engine, observer = _engine([2] * 6, "A", "B", "C", board=PLAIN, max_turns=6)
    result = engine.play()

    assert [r.player for r in observer.records] == ["A", "B", "C", "A", "B", "C"]
    assert [r.pass_number for r in observer.records] == [1, 1, 1, 2, 2, 2]
    assert result.reason == "max_turns"
    assert result.winner is None
    assert result.positions == [("A", 4), ("B", 4), ("C", 4)]


def test_game_halts_mid_pass_on_first_completion():
    """B wins in pass 2; C, seated after B, gets no turn in that pass."""
    #        pass 1      pass 2
    rolls = [2, 1, 2,    3, 1,    5]
    engine, observer = _engine(rolls, "A", "B", "C", board=SHORTCUT)

    result = engine.play()

    assert [r.player for r in observer.records] == ["A", "B", "C", "A", "B"]
    assert result.winner == "B"
    assert result.passes == 2
    assert engine.die.remaining == 1
    assert dict(result.positions) == {"A": 5, "B": 100, "C": 2}


def test_completed_players_are_skipped():
    engine, observer = _engine([2, 2, 2, 2], "A", "B", "C", board=PLAIN, max_turns=4)
    done = engine.players[0]
    done.apply_move(100)
    done.check_completion(100)

    engine.play()

    assert [r.player for r in observer.records] == ["B", "C", "B", "C"]


def test_step_plays_one_turn_at_a_time():
    engine, observer = _engine([3, 4], "A", "B")
    engine.start_game()

    first = engine.step()
    assert first.player == "A"
    assert first.move.end == 3
    assert engine.players[1].position == 0

    second = engine.step()
    assert second.player == "B"
    assert second.turn_number == 2
    assert engine.active_player is None


# ── die failures ────────────────────────────────────────────────────

def test_invalid_die_value_aborts_and_leaves_state():
    engine, _ = _engine([3, 7], "A", "B")

    with pytest.raises(InvalidDieValueError):
        engine.play()

    assert engine.players[0].position == 3
    assert engine.players[1].position == 0
    assert engine.turn_number == 1


def test_cancelled_roll_asks_same_player_again():
    class Cancelled(Exception):
        pass

    class FlakyDie:
        def __init__(self):
            self.calls = 0

        def roll(self) -> int:
            self.calls += 1
            if self.calls == 2:
                raise Cancelled()
            return 2

    engine = GameEngine(die=FlakyDie())
    engine.add_player("A")
    engine.add_player("B")
    engine.start_game()

    assert engine.step().player == "A"
    with pytest.raises(Cancelled):
        engine.step()
    assert engine.players[1].position == 0

    record = engine.step()
    assert record.player == "B"
    assert record.pass_number == 1


def test_plain_callable_die():
    engine = GameEngine(board=SHORTCUT, die=lambda: 1)
    engine.add_player("A")
    result = engine.play()
    assert result.winner == "A"
    assert result.turns == 2


# ── serialization ───────────────────────────────────────────────────

def test_reentrant_turn_is_refused():
    errors = []

    class MeddlingObserver(ListObserver):
        def on_move(self, record):
            super().on_move(record)
            try:
                engine.step()
            except GameStateError as exc:
                errors.append(exc)

    engine = GameEngine(die=ScriptedDie([2, 2]), observer=MeddlingObserver(), max_turns=2)
    engine.add_player("A")
    engine.play()

    assert len(errors) == 2
    assert engine.turn_number == 2


# ── termination ─────────────────────────────────────────────────────

def test_end_game_reports_winner_and_cleans_up():
    engine, _ = _engine([1, 1], "A", board=SHORTCUT)
    engine.play()

    assert engine.end_game() == "A"
    assert engine.players == ()
    assert engine.winner is None
    with pytest.raises(GameStateError):
        engine.add_player("B")
    with pytest.raises(GameStateError):
        engine.play()


def test_end_game_before_finish_rejected():
    engine, _ = _engine([], "A")
    with pytest.raises(GameStateError):
        engine.end_game()


def test_board_can_be_reused_by_a_new_engine():
    board = Board()
    first = GameEngine(board=board, die=ScriptedDie([3]), max_turns=1)
    first.add_player("A")
    first.play()
    first.end_game()

    second = GameEngine(board=board, die=ScriptedDie([1, 3]), max_turns=1)
    second.add_player("B")
    record_positions = second.play().positions
    assert record_positions == [("B", 1)]


def test_cleanup_resets_counters():
    engine, _ = _engine([1, 1], "A", board=SHORTCUT)
    engine.play()
    engine.end_game()

    assert engine.turn_number == 0
    assert engine.pass_number == 0
    assert engine.result() == GameResult(
        winner=None, reason="in_progress", turns=0, passes=0, positions=[],
    )
