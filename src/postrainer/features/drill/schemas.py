from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ...core.models import IpToSeatQuestion, PosToSeatQuestion, Question, SeatIpQuestion, SeatToPosQuestion
from .controller import AnswerOutcome, RoundSnapshot

__all__ = [
    "AnswerResult",
    "ConfigPayload",
    "LabelChoicePayload",
    "QuestionPayload",
    "RoundPayload",
    "answer_result",
    "round_payload",
]


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ConfigPayload(_APIModel):
    players: int
    timer_seconds: float = Field(..., alias="timer")
    naming: str
    mode: str


class QuestionPayload(_APIModel):
    type: str
    prompt: str
    label: str | None = None
    target_seat: int | None = None
    or_seat: int | None = None
    other_seat: int | None = None
    other_action: str | None = None
    ask_who: str | None = None


class LabelChoicePayload(_APIModel):
    label: str
    enabled: bool
    asking: bool


class RoundPayload(_APIModel):
    round_no: int
    config: ConfigPayload
    active_seats: list[int]
    seat_flags: list[bool]
    button_seat: int
    labels: list[str]
    actions: list[str]
    question: QuestionPayload | None = None
    time_left: float
    time_remaining_fraction: float
    phase: str
    last_advance_reason: str
    error_flash: bool
    label_choices: list[LabelChoicePayload]


class AnswerResult(_APIModel):
    accepted: bool
    correct: bool
    advanced: bool
    round_payload: RoundPayload = Field(..., alias="round")


def _question_payload(question: Question | None) -> QuestionPayload | None:
    """Expose what a renderer may show; the graded answer itself stays server side."""

    match question:
        case None:
            return None
        case PosToSeatQuestion(label=label):
            return QuestionPayload(type=question.mode.value, prompt=f"Seat {label}?", label=label)
        case SeatToPosQuestion(target_seat=seat):
            return QuestionPayload(type=question.mode.value, prompt="Position?", target_seat=seat)
        case SeatIpQuestion():
            return QuestionPayload(
                type=question.mode.value,
                prompt="IP / OOP?",
                target_seat=question.target_seat,
                or_seat=question.or_seat,
                other_seat=question.other_seat,
                other_action=question.other_action,
            )
        case IpToSeatQuestion():
            return QuestionPayload(
                type=question.mode.value,
                prompt=f"{question.ask_who}?",
                or_seat=question.or_seat,
                other_seat=question.other_seat,
                other_action=question.other_action,
                ask_who=question.ask_who,
            )
    raise TypeError(f"unsupported question type {type(question).__name__}")


def round_payload(snapshot: RoundSnapshot) -> RoundPayload:
    config = snapshot.config
    return RoundPayload(
        round_no=snapshot.round_number,
        config=ConfigPayload(
            players=config.players,
            timer_seconds=config.timer_seconds,
            naming=config.naming.value,
            mode=config.mode.value,
        ),
        active_seats=list(snapshot.active_seats),
        seat_flags=list(snapshot.seat_flags),
        button_seat=snapshot.button_seat,
        labels=list(snapshot.labels),
        actions=list(snapshot.actions),
        question=_question_payload(snapshot.question),
        time_left=snapshot.time_left,
        time_remaining_fraction=snapshot.time_remaining_fraction,
        phase=snapshot.phase.value,
        last_advance_reason=snapshot.last_advance_reason.value,
        error_flash=snapshot.error_flash,
        label_choices=[
            LabelChoicePayload(label=choice.label, enabled=choice.enabled, asking=choice.asking)
            for choice in snapshot.label_choices
        ],
    )


def answer_result(outcome: AnswerOutcome, snapshot: RoundSnapshot) -> AnswerResult:
    return AnswerResult(
        accepted=outcome.accepted,
        correct=outcome.correct,
        advanced=outcome.advanced,
        round_payload=round_payload(snapshot),
    )
