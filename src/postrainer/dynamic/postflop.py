from __future__ import annotations

from collections.abc import Sequence

__all__ = ["in_position", "postflop_order"]


def postflop_order(active_seats: Sequence[int], button_seat: int) -> tuple[int, ...]:
    """Active seats in postflop acting order, starting left of the button."""

    seats = list(active_seats)
    if not seats:
        return ()
    n = len(seats)
    start = (seats.index(button_seat) + 1) % n
    return tuple(seats[(start + k) % n] for k in range(n))


def in_position(order: Sequence[int], seat: int, versus: int) -> bool:
    """True when ``seat`` acts after ``versus`` postflop."""

    return order.index(seat) > order.index(versus)
