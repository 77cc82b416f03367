from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))

from commit_reveal import FixedRandom  # type: ignore[import-not-found]  # noqa: E402
from protocol import Hand, Outcome  # type: ignore[import-not-found]  # noqa: E402
from session import InvalidSelection, Session  # type: ignore[import-not-found]  # noqa: E402

_HAND_BYTE = {Hand.ROCK: 0, Hand.PAPER: 1, Hand.SCISSORS: 2}


def _scripted(*opponent_hands: Hand) -> FixedRandom:
    # One hand byte plus a 32-byte nonce per round.
    data = b"".join(bytes([_HAND_BYTE[h]]) + bytes([i]) * 32 for i, h in enumerate(opponent_hands))
    return FixedRandom(data)


def test_new_session() -> None:
    s = Session.new(_scripted(Hand.ROCK))
    assert s.current_round.index == 0
    assert s.history == ()
    assert (s.win_count, s.draw_count, s.loss_count) == (0, 0, 0)
    assert s.latest_round() is None
    assert s.inspected_round() is None
    assert s.last_human_vs_opponent() is None


def test_rock_beats_mocked_scissors() -> None:
    s = Session.new(_scripted(Hand.SCISSORS, Hand.ROCK))
    resolved = s.submit_throw(Hand.ROCK)

    assert resolved.outcome is Outcome.WIN
    assert s.win_count == 1
    assert s.num_rounds == 1
    assert s.history[0].human_hand is Hand.ROCK
    assert s.latest_round() is s.history[0]
    assert s.last_human_vs_opponent() == (Hand.ROCK, Hand.SCISSORS)
    assert s.current_round.index == 1


def test_counters_track_history() -> None:
    opponents = [Hand.ROCK, Hand.PAPER, Hand.SCISSORS, Hand.ROCK, Hand.SCISSORS, Hand.PAPER]
    s = Session.new(_scripted(*opponents, Hand.ROCK))
    for n, _ in enumerate(opponents, start=1):
        before = (s.win_count, s.draw_count, s.loss_count)
        s.submit_throw(Hand.ROCK)
        after = (s.win_count, s.draw_count, s.loss_count)
        assert sum(after) - sum(before) == 1
        assert s.win_count + s.draw_count + s.loss_count == s.num_rounds == n
        assert s.current_round.index == n

    assert (s.win_count, s.draw_count, s.loss_count) == (2, 2, 2)
    assert [r.index for r in s.history] == list(range(len(opponents)))
    assert s.scoreboard.format_line() == "Win = 2, Draw = 2, Loss = 2"


def test_history_keeps_commitments() -> None:
    s = Session.new(_scripted(Hand.PAPER, Hand.PAPER))
    committed = s.current_round.commitment
    s.submit_throw(Hand.SCISSORS)
    assert s.history[0].commitment == committed
    assert s.history[0].commitment_record.verify()
    assert s.current_round.commitment != committed


def test_select_and_submit_clears_selection() -> None:
    s = Session.new(_scripted(Hand.ROCK, Hand.PAPER, Hand.SCISSORS, Hand.ROCK))
    s.submit_throw(Hand.PAPER)
    s.submit_throw(Hand.PAPER)

    s.select(0)
    inspected = s.inspected_round()
    assert inspected is not None and inspected.index == 0
    assert s.displayed_round() == (inspected, False)

    s.submit_throw(Hand.ROCK)
    assert s.inspected_round() is None
    assert s.displayed_round() == (s.latest_round(), True)


def test_select_out_of_range_is_rejected() -> None:
    s = Session.new(_scripted(Hand.ROCK, Hand.ROCK))
    with pytest.raises(InvalidSelection):
        s.select(0)
    s.submit_throw(Hand.ROCK)
    s.select(0)
    with pytest.raises(InvalidSelection):
        s.select(1)
    with pytest.raises(InvalidSelection):
        s.select(-1)
    assert s.selected_index == 0


def test_clear_selection() -> None:
    s = Session.new(_scripted(Hand.ROCK, Hand.ROCK))
    s.submit_throw(Hand.PAPER)
    s.select(0)
    s.clear_selection()
    assert s.inspected_round() is None


def test_history_is_read_only_snapshot() -> None:
    s = Session.new(_scripted(Hand.ROCK, Hand.ROCK))
    snapshot = s.history
    s.submit_throw(Hand.PAPER)
    assert snapshot == ()
    assert len(s.history) == 1


def test_restart_builds_independent_session() -> None:
    old = Session.new(_scripted(Hand.ROCK, Hand.ROCK))
    old.submit_throw(Hand.PAPER)
    fresh = Session.new(_scripted(Hand.SCISSORS))
    assert fresh.history == ()
    assert fresh.current_round.index == 0
    assert old.num_rounds == 1


def test_constructor_only_takes_random_source() -> None:
    s = Session(_scripted(Hand.ROCK))
    assert s.history == ()
    assert s.current_round.index == 0
    with pytest.raises(TypeError):
        Session(_scripted(Hand.ROCK), _history=[])  # type: ignore[call-arg]


def test_state_is_read_only() -> None:
    s = Session.new(_scripted(Hand.ROCK, Hand.ROCK))
    s.submit_throw(Hand.PAPER)
    with pytest.raises(AttributeError):
        s.selected_index = 7  # type: ignore[misc]
    with pytest.raises(AttributeError):
        s.current_round = None  # type: ignore[misc, assignment]
    with pytest.raises(AttributeError):
        s.scoreboard = None  # type: ignore[misc, assignment]
    assert s.selected_index is None
