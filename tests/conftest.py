import os
from dataclasses import replace

import pytest

# headless pygame for render / audio / host tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from snake_arcade.config import Direction, Status  # noqa: E402
from snake_arcade.state import new_game_state  # noqa: E402


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms
        return self.now


class Recorder:
    """GameListener that remembers every notification."""

    def __init__(self):
        self.events = []

    def on_game_started(self):
        self.events.append(("started",))

    def on_item_consumed(self):
        self.events.append(("item",))

    def on_game_over(self, score, high_score):
        self.events.append(("over", score, high_score))


@pytest.fixture
def playing():
    """Build a PLAYING state from the default layout, with overrides."""
    def _make(**overrides):
        state = replace(new_game_state(), status=Status.PLAYING)
        return replace(state, **overrides)
    return _make


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorder():
    return Recorder()


def _drive_to_food(engine):
    """
    From the default layout (head (10,10) facing UP, item (5,5)) walk five
    cells up and five left so the fifth LEFT tick eats the item.
    """
    engine.submit_direction(Direction.UP)
    for _ in range(5):
        engine.on_tick()
    engine.submit_direction(Direction.LEFT)
    for _ in range(5):
        engine.on_tick()


@pytest.fixture
def drive_to_food():
    return _drive_to_food

