"""Seat allocation for a drill round.

Ten seat slots always exist around the table; each round a random subset of
them is occupied and one occupied seat receives the dealer button.  Seats are
numbered clockwise, so ascending seat order doubles as table order for the
labeler and the postflop order helpers.
"""

from __future__ import annotations

from ..core.interfaces import RandomSource
from ..core.models import MAX_PLAYERS, MIN_PLAYERS, SEAT_COUNT

__all__ = ["allocate_seats"]


def allocate_seats(player_count: int, rng: RandomSource) -> tuple[tuple[int, ...], int]:
    """Return ``(active_seats, button_seat)`` for ``player_count`` players.

    The active seats are a uniform sample without replacement; the button is
    uniform among them.
    """

    if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
        raise ValueError(f"player_count must be within [{MIN_PLAYERS}, {MAX_PLAYERS}], got {player_count}")
    seats = list(range(SEAT_COUNT))
    rng.shuffle(seats)
    chosen = seats[:player_count]
    button = chosen[rng.randint(0, len(chosen) - 1)]
    return tuple(sorted(chosen)), button
