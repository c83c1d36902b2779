# state.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple
import logging
import random

from .config import (
    GRID_SIZE, MIN_TICK_INTERVAL, TICK_DECREMENT,
    Direction, Status,
)
from .difficulty import DEFAULT_DIFFICULTY, Difficulty, base_interval, points_for
from .errors import FieldExhausted
from .grid import Cell, in_bounds, occupies, place_food

logger = logging.getLogger(__name__)

# ---------- State ----------
@dataclass(frozen=True)
class GameState:
    actor: Tuple[Cell, ...]        # head at index 0
    item: Optional[Cell]           # None once the grid is full
    direction: Direction           # committed on the last tick
    pending: Direction             # applied on the next tick
    score: int
    high_score: int
    status: Status
    tick_interval: int             # ms between ticks
    difficulty: Difficulty

    @property
    def head(self) -> Cell:
        return self.actor[0]


def initial_actor(size: int = GRID_SIZE) -> Tuple[Cell, ...]:
    """Three cells in the middle column, head on top."""
    mid = size // 2
    return ((mid, mid), (mid, mid + 1), (mid, mid + 2))

def initial_item(size: int = GRID_SIZE) -> Cell:
    return (size // 4, size // 4)

def new_game_state(
    difficulty: Difficulty = DEFAULT_DIFFICULTY,
    high_score: int = 0,
    size: int = GRID_SIZE,
) -> GameState:
    return GameState(
        actor=initial_actor(size),
        item=initial_item(size),
        direction=Direction.UP,
        pending=Direction.UP,
        score=0,
        high_score=high_score,
        status=Status.IDLE,
        tick_interval=base_interval(difficulty),
        difficulty=difficulty,
    )

def restart(state: GameState, size: int = GRID_SIZE) -> GameState:
    """Fresh IDLE run on the same difficulty; only the high score survives."""
    return new_game_state(state.difficulty, state.high_score, size)

def _game_over(state: GameState, score: int) -> GameState:
    return replace(
        state,
        score=score,
        status=Status.GAME_OVER,
        high_score=max(score, state.high_score),
    )

# ---------- Update ----------
def step(
    state: GameState,
    rng: Optional[random.Random] = None,
    size: int = GRID_SIZE,
) -> GameState:
    """
    Advance the game by one tick and return the new state.

    The pre-move actor, tail included, counts as occupied when testing the
    new head, so following your own tail into the cell it is about to leave
    is fatal.
    """
    if state.status is not Status.PLAYING:
        return state

    hx, hy = state.head
    dx, dy = state.pending.delta
    new_head = (hx + dx, hy + dy)

    if not in_bounds(new_head, size) or occupies(state.actor, new_head):
        return _game_over(state, state.score)

    actor = (new_head,) + state.actor
    score = state.score
    item = state.item
    interval = state.tick_interval

    if new_head == state.item:
        score += points_for(state.difficulty)
        interval = max(MIN_TICK_INTERVAL, interval - TICK_DECREMENT)
        try:
            item = place_food(actor, rng, size)
        except FieldExhausted:
            logger.error("No free cell left for food (actor length %d); ending run", len(actor))
            return _game_over(
                replace(state, actor=actor, item=None, tick_interval=interval, direction=state.pending),
                score,
            )
    else:
        actor = actor[:-1]

    return replace(
        state,
        actor=actor,
        item=item,
        score=score,
        tick_interval=interval,
        direction=state.pending,
    )
