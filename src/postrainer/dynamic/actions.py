"""Preflop action scenarios shown alongside a round.

Action order is approximated by ascending seat number: only seats with a
higher number than the opener may respond, and only seats higher than the
responder may flat behind.  The scenario never wraps around the table.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Final

from ..core.interfaces import RandomSource
from ..core.models import CALL, FOLD, OR, SEAT_COUNT, THREE_BET

__all__ = ["generate_actions", "generate_actions_for_or_ip"]

logger = logging.getLogger(__name__)

THREE_BET_PROBABILITY: Final = 0.3
EXTRA_CALL_PROBABILITY: Final = 0.5


def _fill_folds(actions: list[str], active_seats: Sequence[int]) -> tuple[str, ...]:
    for seat in active_seats:
        if not actions[seat]:
            actions[seat] = FOLD
    return tuple(actions)


def generate_actions(active_seats: Sequence[int], rng: RandomSource) -> tuple[str, ...]:
    """Open-raise, an optional call or 3-bet, maybe one more call; everyone else folds."""

    actions = [""] * SEAT_COUNT
    if not active_seats:
        return tuple(actions)
    ordered = sorted(active_seats)
    or_index = rng.randint(0, len(ordered) - 1)
    actions[ordered[or_index]] = OR

    after_or = ordered[or_index + 1 :]
    if after_or:
        other_index = rng.randint(0, len(after_or) - 1)
        other_seat = after_or[other_index]
        other_action = THREE_BET if rng.random() < THREE_BET_PROBABILITY else CALL
        actions[other_seat] = other_action
        after_other = after_or[other_index + 1 :]
        # The draw is skipped entirely when nobody is left behind the caller.
        if other_action == CALL and after_other and rng.random() < EXTRA_CALL_PROBABILITY:
            actions[after_other[rng.randint(0, len(after_other) - 1)]] = CALL
    return _fill_folds(actions, active_seats)


def generate_actions_for_or_ip(
    active_seats: Sequence[int],
    or_seat: int,
    other_seat: int,
    other_action: str,
    rng: RandomSource,
) -> tuple[str, ...]:
    """Scenario for a fixed opener and responder.

    No extra caller is added behind a 3-bet.
    """

    actions = [""] * SEAT_COUNT
    if not active_seats:
        return tuple(actions)
    response = THREE_BET if other_action == THREE_BET else CALL
    actions[or_seat] = OR
    actions[other_seat] = response

    ordered = sorted(active_seats)
    after_other = ordered[ordered.index(other_seat) + 1 :] if other_seat in ordered else []
    if response != THREE_BET and after_other and rng.random() < EXTRA_CALL_PROBABILITY:
        call_seat = after_other[rng.randint(0, len(after_other) - 1)]
        if not actions[call_seat]:
            actions[call_seat] = CALL
        else:
            logger.debug("Extra caller landed on seat %s which already acted", call_seat)
    return _fill_folds(actions, active_seats)
