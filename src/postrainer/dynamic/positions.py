"""Position labels for the occupied seats.

The blinds and the button are fixed relative to the dealer button; the seats
between the big blind and the button ("middle" seats) are labelled from a
per-player-count table that depends on the naming convention.  Convention A
uses MP/MP+1 for the late-middle seats, convention B uses LJ/HJ.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final

from ..core.models import SEAT_COUNT, NamingConvention

__all__ = [
    "BB",
    "BTN",
    "SB",
    "canonical_order",
    "compute_labels",
    "labels_in_use",
    "middle_labels",
    "sort_labels",
]

BTN: Final = "BTN"
SB: Final = "SB"
BB: Final = "BB"

_CANONICAL: Final[dict[NamingConvention, tuple[str, ...]]] = {
    NamingConvention.A: ("UTG", "UTG+1", "UTG+2", "UTG+3", "MP", "MP+1", "CO", BTN, SB, BB),
    NamingConvention.B: ("UTG", "UTG+1", "UTG+2", "UTG+3", "LJ", "HJ", "CO", BTN, SB, BB),
}

_MIDDLE: Final[dict[NamingConvention, dict[int, tuple[str, ...]]]] = {
    NamingConvention.A: {
        2: (),
        3: (),
        4: ("UTG",),
        5: ("UTG", "CO"),
        6: ("UTG", "MP", "CO"),
        7: ("UTG", "MP", "MP+1", "CO"),
        8: ("UTG", "UTG+1", "MP", "MP+1", "CO"),
        9: ("UTG", "UTG+1", "UTG+2", "MP", "MP+1", "CO"),
        10: ("UTG", "UTG+1", "UTG+2", "UTG+3", "MP", "MP+1", "CO"),
    },
    NamingConvention.B: {
        2: (),
        3: (),
        4: ("UTG",),
        5: ("UTG", "CO"),
        6: ("UTG", "HJ", "CO"),
        7: ("UTG", "LJ", "HJ", "CO"),
        8: ("UTG", "UTG+1", "LJ", "HJ", "CO"),
        9: ("UTG", "UTG+1", "UTG+2", "LJ", "HJ", "CO"),
        10: ("UTG", "UTG+1", "UTG+2", "UTG+3", "LJ", "HJ", "CO"),
    },
}


def canonical_order(naming: NamingConvention) -> tuple[str, ...]:
    """All ten labels of ``naming`` from first to act preflop to the big blind."""

    return _CANONICAL[naming]


def middle_labels(naming: NamingConvention, players: int) -> tuple[str, ...]:
    return _MIDDLE[naming].get(players, ())


def sort_labels(labels: Iterable[str], naming: NamingConvention) -> list[str]:
    order = _CANONICAL[naming]
    rank = {label: idx for idx, label in enumerate(order)}
    return sorted(labels, key=lambda label: rank.get(label, len(order)))


def labels_in_use(labels: Sequence[str]) -> list[str]:
    """Non-empty labels in seat order."""

    return [label for label in labels if label]


def compute_labels(
    active_seats: Sequence[int],
    button_seat: int,
    naming: NamingConvention,
) -> tuple[str, ...]:
    """Label every active seat; inactive slots stay empty.

    ``active_seats`` is read as a circle in the order given.  The result only
    depends on the arguments.
    """

    labels = [""] * SEAT_COUNT
    seats = list(active_seats)
    n = len(seats)
    if n < 2:
        return tuple(labels)
    try:
        i_btn = seats.index(button_seat)
    except ValueError as exc:
        raise ValueError(f"button seat {button_seat} is not active") from exc

    if n == 2:
        # Heads-up: the button posts the small blind.
        labels[button_seat] = SB
        labels[seats[(i_btn + 1) % n]] = BB
        return tuple(labels)

    sb = seats[(i_btn + 1) % n]
    bb = seats[(i_btn + 2) % n]
    labels[button_seat] = BTN
    labels[sb] = SB
    labels[bb] = BB

    between: list[int] = []
    i = (i_btn + 3) % n
    while seats[i] != button_seat:
        between.append(seats[i])
        i = (i + 1) % n

    table = middle_labels(naming, n)
    for k, seat in enumerate(between):
        labels[seat] = table[k] if k < len(table) else f"EP{k + 1}"
    return tuple(labels)
