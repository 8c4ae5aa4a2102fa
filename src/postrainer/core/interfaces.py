from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any, Protocol

from .models import Question, Round


class RandomSource(Protocol):
    """Every random draw in the drill goes through this interface.

    ``random.Random`` satisfies it; tests plug in scripted sources.
    """

    def randint(self, a: int, b: int) -> int: ...  # inclusive on both ends

    def shuffle(self, x: MutableSequence[Any]) -> None: ...

    def random(self) -> float: ...


class Presenter(Protocol):
    def start_session(self, total_rounds: int | None) -> None: ...

    def show_round(self, round_: Round, time_left: float) -> None: ...

    def prompt_answer(self, question: Question) -> str | None: ...

    def answer_feedback(self, correct: bool, *, accepted: bool = True) -> None: ...

    def timed_out(self, question: Question) -> None: ...

    def summary(self, results: list[str]) -> None: ...
