from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

SEAT_COUNT = 10
MIN_PLAYERS = 2
MAX_PLAYERS = SEAT_COUNT

OR = "OR"
CALL = "call"
THREE_BET = "3bet"
FOLD = "fold"

ActionTag = Literal["", "OR", "call", "3bet", "fold"]
ResponseAction = Literal["call", "3bet"]
Role = Literal["IP", "OOP"]


class NamingConvention(str, Enum):
    """Label scheme for the seats between the big blind and the button."""

    A = "A"  # MP / MP+1
    B = "B"  # LJ / HJ


class Mode(str, Enum):
    POS_TO_SEAT = "posToSeat"
    SEAT_TO_POS = "seatToPos"
    SEAT_IP = "seatIp"
    IP_TO_SEAT = "ipToSeat"


@dataclass(frozen=True)
class PosToSeatQuestion:
    label: str
    target_seat: int

    @property
    def mode(self) -> Mode:
        return Mode.POS_TO_SEAT


@dataclass(frozen=True)
class SeatToPosQuestion:
    target_seat: int
    correct_label: str

    @property
    def mode(self) -> Mode:
        return Mode.SEAT_TO_POS


@dataclass(frozen=True)
class SeatIpQuestion:
    or_seat: int
    other_seat: int
    other_action: ResponseAction
    target_seat: int
    is_ip: bool

    @property
    def mode(self) -> Mode:
        return Mode.SEAT_IP


@dataclass(frozen=True)
class IpToSeatQuestion:
    or_seat: int
    other_seat: int
    other_action: ResponseAction
    ask_who: Role
    correct_seat: int

    @property
    def mode(self) -> Mode:
        return Mode.IP_TO_SEAT


Question = PosToSeatQuestion | SeatToPosQuestion | SeatIpQuestion | IpToSeatQuestion


@dataclass(frozen=True)
class SeatAnswer:
    seat: int


@dataclass(frozen=True)
class LabelAnswer:
    label: str


@dataclass(frozen=True)
class IpAnswer:
    is_ip: bool


Answer = SeatAnswer | LabelAnswer | IpAnswer


@dataclass(frozen=True)
class Round:
    """Everything generated for one drill round.

    ``labels`` and ``actions`` always have one slot per physical seat; inactive
    seats carry empty strings.
    """

    number: int
    active_seats: tuple[int, ...]
    button_seat: int
    labels: tuple[str, ...]
    actions: tuple[str, ...]
    question: Question

    @property
    def seat_flags(self) -> tuple[bool, ...]:
        active = set(self.active_seats)
        return tuple(seat in active for seat in range(SEAT_COUNT))

    def is_active(self, seat: int) -> bool:
        return seat in self.active_seats
