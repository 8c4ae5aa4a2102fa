from __future__ import annotations

import random

import pytest
from fakes import ScriptedRng

from postrainer.dynamic.seating import allocate_seats


@pytest.mark.parametrize("players", range(2, 11))
def test_allocate_seats_yields_requested_count_and_active_button(players: int) -> None:
    rng = random.Random(players * 17)
    for _ in range(50):
        active, button = allocate_seats(players, rng)
        assert len(active) == players
        assert len(set(active)) == players
        assert all(0 <= seat <= 9 for seat in active)
        assert list(active) == sorted(active)
        assert button in active


def test_allocate_seats_takes_shuffle_prefix_and_picks_button_in_shuffle_order() -> None:
    rng = ScriptedRng(shuffles=[[7, 3, 9, 0, 1, 2, 4, 5, 6, 8]], ints=[1])
    active, button = allocate_seats(3, rng)

    assert active == (3, 7, 9)
    assert button == 3
    assert rng.exhausted


def test_allocate_seats_full_table_uses_every_seat() -> None:
    active, button = allocate_seats(10, random.Random(5))
    assert active == tuple(range(10))
    assert button in active


@pytest.mark.parametrize("players", [0, 1, 11])
def test_allocate_seats_rejects_out_of_range_counts(players: int) -> None:
    with pytest.raises(ValueError):
        allocate_seats(players, random.Random(1))


def test_allocate_seats_button_spread_covers_all_active_seats() -> None:
    rng = ScriptedRng(ints=[0, 1, 2, 3], shuffles=[list(range(10))] * 4)
    buttons = {allocate_seats(4, rng)[1] for _ in range(4)}
    assert buttons == {0, 1, 2, 3}
