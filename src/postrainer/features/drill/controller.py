"""Round controller: the only stateful piece of the drill.

The controller owns the current :class:`~postrainer.core.models.Round`, the
countdown and the transition guard.  Every advance replaces the round
wholesale.  Time only moves through :meth:`RoundController.on_tick`, which the
caller drives once per frame with the elapsed seconds.

When the countdown runs out the question is cut, the table flashes for
:data:`ERROR_FLASH_SECONDS`, and only then is the next round dealt.  While that
transition is pending the guard is held: answers and further expiries are
dropped, not queued.  Dealing a round for any reason, including ``configure``,
clears the guard and the pending transition with it.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ...core.grading import accepts, validate
from ...core.interfaces import RandomSource
from ...core.models import (
    Answer,
    IpAnswer,
    LabelAnswer,
    Mode,
    NamingConvention,
    PosToSeatQuestion,
    Question,
    Round,
    SeatAnswer,
    SeatToPosQuestion,
)
from ...core.settings import DrillConfig, default_config
from ...dynamic.positions import canonical_order, labels_in_use
from .engine import RoundEngine

__all__ = [
    "ERROR_FLASH_SECONDS",
    "AdvanceReason",
    "AnswerOutcome",
    "LabelChoice",
    "Phase",
    "RoundController",
    "RoundSnapshot",
]

logger = logging.getLogger(__name__)

ERROR_FLASH_SECONDS: Final = 0.6


class Phase(str, Enum):
    IDLE = "idle"
    TRANSITIONING = "transitioning"


class AdvanceReason(str, Enum):
    INITIAL = "initial"
    CORRECT = "correct"
    TIMEOUT = "timeout"
    CONFIGURED = "configured"


@dataclass(frozen=True)
class LabelChoice:
    label: str
    enabled: bool
    asking: bool = False


@dataclass(frozen=True)
class AnswerOutcome:
    accepted: bool
    correct: bool
    advanced: bool


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view of the controller for renderers."""

    round_number: int
    config: DrillConfig
    active_seats: tuple[int, ...]
    seat_flags: tuple[bool, ...]
    button_seat: int
    labels: tuple[str, ...]
    actions: tuple[str, ...]
    question: Question | None
    time_left: float
    time_remaining_fraction: float
    phase: Phase
    last_advance_reason: AdvanceReason
    error_flash: bool
    label_choices: tuple[LabelChoice, ...]


def _label_choices(round_: Round, naming: NamingConvention, live: bool) -> tuple[LabelChoice, ...]:
    in_use = set(labels_in_use(round_.labels))
    question = round_.question if live else None
    heads_up = len(round_.active_seats) == 2
    choices: list[LabelChoice] = []
    for label in canonical_order(naming):
        available = label in in_use
        asking = False
        enabled = False
        if isinstance(question, PosToSeatQuestion):
            asking = label == question.label
            # Heads-up keeps both blinds pressable; otherwise only the asked label is.
            enabled = available if heads_up else asking
        elif isinstance(question, SeatToPosQuestion):
            enabled = available
        choices.append(LabelChoice(label=label, enabled=enabled, asking=asking))
    return tuple(choices)


class RoundController:
    """Generates rounds, grades answers and runs the countdown."""

    def __init__(
        self,
        config: DrillConfig | None = None,
        *,
        rng: RandomSource | None = None,
        engine: RoundEngine | None = None,
    ) -> None:
        if engine is None:
            engine = RoundEngine(rng=rng if rng is not None else random.Random())
        self._engine = engine
        self._config = config if config is not None else default_config()
        self._generation = 0
        self._pending: float | None = None
        self._error_left = 0.0
        self._new_round(AdvanceReason.INITIAL)

    # ------------------------------------------------------------------ state
    @property
    def config(self) -> DrillConfig:
        return self._config

    @property
    def round(self) -> Round:
        return self._round

    @property
    def phase(self) -> Phase:
        return Phase.IDLE if self._pending is None else Phase.TRANSITIONING

    @property
    def question(self) -> Question | None:
        return self._round.question if self._live else None

    def snapshot(self) -> RoundSnapshot:
        round_ = self._round
        time_left = max(0.0, self._time_left)
        return RoundSnapshot(
            round_number=round_.number,
            config=self._config,
            active_seats=round_.active_seats,
            seat_flags=round_.seat_flags,
            button_seat=round_.button_seat,
            labels=round_.labels,
            actions=round_.actions,
            question=self.question,
            time_left=time_left,
            time_remaining_fraction=min(1.0, time_left / self._config.timer_seconds),
            phase=self.phase,
            last_advance_reason=self._last_reason,
            error_flash=self._error_left > 0.0 or self._pending is not None,
            label_choices=_label_choices(round_, self._config.naming, self._live),
        )

    # ------------------------------------------------------------------ config
    def configure(
        self,
        *,
        players: int | None = None,
        timer_seconds: float | None = None,
        naming: NamingConvention | str | None = None,
        mode: Mode | str | None = None,
    ) -> RoundSnapshot:
        """Apply config changes; a new seating, naming or mode deals a new round at once."""

        previous = self._config
        updated = previous.updated(players=players, timer_seconds=timer_seconds, naming=naming, mode=mode)
        self._config = updated
        if previous.regenerates(updated):
            self._new_round(AdvanceReason.CONFIGURED)
        elif updated.timer_seconds != previous.timer_seconds:
            self._time_left = updated.timer_seconds
        return self.snapshot()

    # ------------------------------------------------------------------ answers
    def submit(self, answer: Answer) -> AnswerOutcome:
        if self._pending is not None or not self._live:
            logger.debug("answer dropped during transition", extra={"round": self._round.number})
            return AnswerOutcome(accepted=False, correct=False, advanced=False)
        question = self._round.question
        if not accepts(question, answer):
            return AnswerOutcome(accepted=False, correct=False, advanced=False)
        if validate(question, answer, self._round.seat_flags):
            self._new_round(AdvanceReason.CORRECT)
            return AnswerOutcome(accepted=True, correct=True, advanced=True)
        self._error_left = ERROR_FLASH_SECONDS
        return AnswerOutcome(accepted=True, correct=False, advanced=False)

    def submit_seat_answer(self, seat: int) -> bool:
        return self.submit(SeatAnswer(seat=seat)).advanced

    def submit_label_answer(self, label: str) -> bool:
        return self.submit(LabelAnswer(label=label)).advanced

    def submit_ip_answer(self, is_ip: bool) -> bool:
        return self.submit(IpAnswer(is_ip=is_ip)).advanced

    # ------------------------------------------------------------------ time
    def on_tick(self, elapsed_seconds: float) -> bool:
        """Advance the clock by ``elapsed_seconds``; return True if a new round was dealt."""

        dt = max(0.0, float(elapsed_seconds))
        if self._error_left > 0.0:
            self._error_left = max(0.0, self._error_left - dt)
        if self._pending is not None:
            self._pending -= dt
            if self._pending > 0.0:
                return False
            self._new_round(AdvanceReason.TIMEOUT)
            return True
        if self._live:
            self._time_left -= dt
            if self._time_left <= 0.0:
                self._begin_timeout()
        return False

    # ------------------------------------------------------------------ internals
    def _new_round(self, reason: AdvanceReason) -> None:
        self._generation += 1
        self._pending = None
        self._error_left = 0.0
        self._round = self._engine.build_round(self._config, self._generation)
        self._live = True
        self._time_left = self._config.timer_seconds
        self._last_reason = reason
        logger.debug("round advanced", extra={"round": self._generation, "reason": reason.value})

    def _begin_timeout(self) -> None:
        self._live = False
        self._pending = ERROR_FLASH_SECONDS
        logger.debug("time expired", extra={"round": self._generation})
