"""Question generation for the four drill modes.

``posToSeat`` and ``seatToPos`` quiz the labels directly.  The two IP/OOP
modes pick an opener and a responder, rebuild the action scenario around that
pair so the table shows the same story the question asks about, and derive
the answer from the postflop acting order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from ..core.interfaces import RandomSource
from ..core.models import (
    CALL,
    THREE_BET,
    IpToSeatQuestion,
    Mode,
    PosToSeatQuestion,
    Question,
    ResponseAction,
    Role,
    SeatIpQuestion,
    SeatToPosQuestion,
)
from .actions import generate_actions_for_or_ip
from .positions import labels_in_use
from .postflop import in_position, postflop_order

__all__ = ["Confrontation", "draw_confrontation", "generate_question"]

_COIN: Final = 0.5


@dataclass(frozen=True)
class Confrontation:
    """Opener vs. responder pair plus who ends up in position postflop."""

    or_seat: int
    other_seat: int
    other_action: ResponseAction
    other_is_ip: bool
    actions: tuple[str, ...]

    def seat_for(self, role: Role) -> int:
        ip_seat, oop_seat = (
            (self.other_seat, self.or_seat) if self.other_is_ip else (self.or_seat, self.other_seat)
        )
        return ip_seat if role == "IP" else oop_seat


def draw_confrontation(
    active_seats: Sequence[int],
    button_seat: int,
    rng: RandomSource,
) -> Confrontation:
    if len(active_seats) < 2:
        raise ValueError("an IP/OOP question needs at least two active seats")
    seats = list(active_seats)
    or_seat = seats[rng.randint(0, len(seats) - 1)]
    others = [seat for seat in seats if seat != or_seat]
    other_seat = others[rng.randint(0, len(others) - 1)]
    other_action: ResponseAction = CALL if rng.random() < _COIN else THREE_BET
    actions = generate_actions_for_or_ip(seats, or_seat, other_seat, other_action, rng)
    order = postflop_order(seats, button_seat)
    return Confrontation(
        or_seat=or_seat,
        other_seat=other_seat,
        other_action=other_action,
        other_is_ip=in_position(order, other_seat, or_seat),
        actions=actions,
    )


def generate_question(
    mode: Mode,
    active_seats: Sequence[int],
    button_seat: int,
    labels: Sequence[str],
    rng: RandomSource,
) -> tuple[Question, tuple[str, ...] | None]:
    """Return the question and, for the IP modes, the matching action scenario."""

    match mode:
        case Mode.POS_TO_SEAT:
            in_use = labels_in_use(labels)
            label = in_use[rng.randint(0, len(in_use) - 1)]
            return PosToSeatQuestion(label=label, target_seat=list(labels).index(label)), None
        case Mode.SEAT_TO_POS:
            target = active_seats[rng.randint(0, len(active_seats) - 1)]
            return SeatToPosQuestion(target_seat=target, correct_label=labels[target]), None
        case Mode.SEAT_IP:
            duel = draw_confrontation(active_seats, button_seat, rng)
            target = duel.or_seat if rng.random() < _COIN else duel.other_seat
            is_ip = not duel.other_is_ip if target == duel.or_seat else duel.other_is_ip
            question = SeatIpQuestion(
                or_seat=duel.or_seat,
                other_seat=duel.other_seat,
                other_action=duel.other_action,
                target_seat=target,
                is_ip=is_ip,
            )
            return question, duel.actions
        case Mode.IP_TO_SEAT:
            duel = draw_confrontation(active_seats, button_seat, rng)
            ask_who: Role = "IP" if rng.random() < _COIN else "OOP"
            question = IpToSeatQuestion(
                or_seat=duel.or_seat,
                other_seat=duel.other_seat,
                other_action=duel.other_action,
                ask_who=ask_who,
                correct_seat=duel.seat_for(ask_who),
            )
            return question, duel.actions
    raise ValueError(f"unsupported mode {mode!r}")
