from __future__ import annotations

import itertools

import pytest

from postrainer.core.models import (
    IpAnswer,
    IpToSeatQuestion,
    LabelAnswer,
    Mode,
    PosToSeatQuestion,
    Question,
    Round,
    SeatAnswer,
    SeatIpQuestion,
    SeatToPosQuestion,
)
from postrainer.core.settings import DrillConfig
from postrainer.engine_play import parse_answer, run_drill


def _solution(question: Question) -> str:
    if isinstance(question, PosToSeatQuestion):
        return str(question.target_seat)
    if isinstance(question, SeatToPosQuestion):
        return question.correct_label.lower()
    if isinstance(question, SeatIpQuestion):
        return "ip" if question.is_ip else "oop"
    if isinstance(question, IpToSeatQuestion):
        return str(question.correct_seat)
    raise AssertionError(question)


class ScriptedPresenter:
    """Answers from a script; ``"!"`` means the correct answer for the shown round."""

    def __init__(self, script: list[str | None]):
        self.script = list(script)
        self.rounds: list[Round] = []
        self.feedback: list[tuple[bool, bool]] = []
        self.timeouts: list[Question] = []
        self.results: list[str] | None = None
        self.total: int | None = -1

    def start_session(self, total_rounds: int | None) -> None:
        self.total = total_rounds

    def show_round(self, round_: Round, time_left: float) -> None:
        self.rounds.append(round_)

    def prompt_answer(self, question: Question) -> str | None:
        raw = self.script.pop(0)
        if raw == "!":
            return _solution(question)
        return raw

    def answer_feedback(self, correct: bool, *, accepted: bool = True) -> None:
        self.feedback.append((correct, accepted))

    def timed_out(self, question: Question) -> None:
        self.timeouts.append(question)

    def summary(self, results: list[str]) -> None:
        self.results = list(results)


def _frozen_clock() -> float:
    return 0.0


@pytest.mark.parametrize("mode", list(Mode))
def test_correct_answers_finish_the_session(mode: Mode) -> None:
    presenter = ScriptedPresenter(["!", "!", "!"])

    results = run_drill(DrillConfig(mode=mode), presenter, seed=4, rounds=3, clock=_frozen_clock)

    assert results == ["correct", "correct", "correct"]
    assert presenter.results == results
    assert presenter.total == 3
    assert [r.number for r in presenter.rounds] == [1, 2, 3]
    assert presenter.feedback == [(True, True)] * 3


def test_unused_channel_is_not_counted() -> None:
    presenter = ScriptedPresenter(["ip", "!"])

    results = run_drill(DrillConfig(mode=Mode.SEAT_TO_POS), presenter, seed=1, rounds=1, clock=_frozen_clock)

    # "ip" is not an answer channel in this mode, so it is neither graded nor counted.
    assert results == ["correct"]
    assert presenter.feedback == [(False, False), (True, True)]
    assert [r.number for r in presenter.rounds] == [1, 1]


def test_seat_answer_in_ip_mode_counts_as_wrong() -> None:
    presenter = ScriptedPresenter(["0", "!"])

    results = run_drill(DrillConfig(mode=Mode.SEAT_IP), presenter, seed=1, rounds=1, clock=_frozen_clock)

    assert results == ["wrong", "correct"]


def test_slow_answer_times_out() -> None:
    ticks = itertools.count(0.0, 30.0)
    presenter = ScriptedPresenter(["!", "!"])

    results = run_drill(DrillConfig(timer_seconds=10), presenter, seed=2, rounds=2, clock=lambda: next(ticks))

    assert results == ["timeout", "timeout"]
    assert presenter.timeouts == [r.question for r in presenter.rounds]
    assert [r.number for r in presenter.rounds] == [1, 2]
    assert presenter.feedback == []


def test_quit_stops_immediately() -> None:
    presenter = ScriptedPresenter([None])

    results = run_drill(DrillConfig(), presenter, seed=3, clock=_frozen_clock)

    assert results == []
    assert presenter.results == []
    assert presenter.total is None


def test_same_seed_same_tables() -> None:
    first = ScriptedPresenter(["!", "!"])
    second = ScriptedPresenter(["!", "!"])
    run_drill(DrillConfig(), first, seed=77, rounds=2, clock=_frozen_clock)
    run_drill(DrillConfig(), second, seed=77, rounds=2, clock=_frozen_clock)
    assert first.rounds == second.rounds


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("3", SeatAnswer(3)),
        (" 9 ", SeatAnswer(9)),
        ("IP", IpAnswer(True)),
        ("oop", IpAnswer(False)),
        ("utg+1", LabelAnswer("UTG+1")),
        ("hj", LabelAnswer("HJ")),
        ("", None),
        ("   ", None),
    ],
)
def test_parse_answer(raw: str, expected: object) -> None:
    assert parse_answer(raw) == expected
