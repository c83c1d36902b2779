import random

import pytest

from snake_arcade.errors import FieldExhausted
from snake_arcade.grid import in_bounds, occupies, place_food


class ScriptedRng:
    """randrange() replays a fixed list of values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def randrange(self, n):
        self.calls += 1
        return self.values.pop(0)


@pytest.mark.parametrize("cell,expected", [
    ((0, 0), True),
    ((19, 19), True),
    ((-1, 0), False),
    ((0, -1), False),
    ((20, 5), False),
    ((5, 20), False),
])
def test_in_bounds(cell, expected):
    assert in_bounds(cell) is expected


def test_in_bounds_custom_size():
    assert in_bounds((4, 4), size=5)
    assert not in_bounds((5, 4), size=5)


def test_occupies_compares_by_value():
    actor = [(1, 2), (1, 3)]
    assert occupies(actor, (1, 3))
    assert not occupies(actor, (3, 1))
    assert not occupies([], (0, 0))


def test_place_food_rejects_occupied_cells():
    actor = ((0, 0), (1, 0))
    rng = ScriptedRng([0, 0, 1, 0, 2, 3])
    assert place_food(actor, rng) == (2, 3)
    assert rng.calls == 6


def test_place_food_never_lands_on_actor():
    rng = random.Random(7)
    actor = tuple((x, y) for x in range(4) for y in range(4) if (x, y) != (2, 1))
    for _ in range(20):
        assert place_food(actor, rng, size=4) == (2, 1)


def test_place_food_is_deterministic_for_a_seed():
    actor = ((10, 10), (10, 11), (10, 12))
    a = [place_food(actor, random.Random(42)) for _ in range(3)]
    b = [place_food(actor, random.Random(42)) for _ in range(3)]
    assert a == b


def test_place_food_raises_when_grid_is_full():
    actor = tuple((x, y) for x in range(3) for y in range(3))
    with pytest.raises(FieldExhausted):
        place_food(actor, random.Random(0), size=3)
