from __future__ import annotations

from collections.abc import Sequence

from .models import (
    Answer,
    IpAnswer,
    IpToSeatQuestion,
    LabelAnswer,
    PosToSeatQuestion,
    Question,
    SeatAnswer,
    SeatIpQuestion,
    SeatToPosQuestion,
)

__all__ = ["accepts", "validate"]


def _seat_is_active(seat: int, seat_flags: Sequence[bool]) -> bool:
    return 0 <= seat < len(seat_flags) and bool(seat_flags[seat])


def validate(question: Question, answer: Answer, seat_flags: Sequence[bool]) -> bool:
    """Grade ``answer`` against ``question``.

    An answer on the wrong input channel for the mode is simply incorrect.
    In ``posToSeat`` the highlighted position button also answers the question.
    """

    match question:
        case PosToSeatQuestion(label=label, target_seat=target):
            if isinstance(answer, LabelAnswer):
                return answer.label == label
            return isinstance(answer, SeatAnswer) and answer.seat == target and _seat_is_active(answer.seat, seat_flags)
        case SeatToPosQuestion(correct_label=correct):
            return isinstance(answer, LabelAnswer) and answer.label == correct
        case SeatIpQuestion(is_ip=is_ip):
            return isinstance(answer, IpAnswer) and bool(answer.is_ip) == is_ip
        case IpToSeatQuestion(correct_seat=correct):
            return isinstance(answer, SeatAnswer) and answer.seat == correct and _seat_is_active(answer.seat, seat_flags)
    raise TypeError(f"unsupported question type {type(question).__name__}")


def accepts(question: Question, answer: Answer) -> bool:
    """Whether the input channel of ``answer`` is live for ``question``.

    Seat clicks always count (wrong ones flash an error).  Position buttons are
    only enabled in the two label modes and the IP/OOP buttons only in
    ``seatIp``; presses on disabled controls are ignored.
    """

    match answer:
        case SeatAnswer():
            return True
        case LabelAnswer():
            return isinstance(question, (PosToSeatQuestion, SeatToPosQuestion))
        case IpAnswer():
            return isinstance(question, SeatIpQuestion)
    raise TypeError(f"unsupported answer type {type(answer).__name__}")
