# arbiter.py
"""
Input arbitration: turns raw player intents into state transitions.

Directions are staged in ``pending`` and only take effect on the next
tick, so any number of key presses between two ticks collapses to the
latest valid one. Reversals are judged against the *committed* direction,
which is what stops a quick UP -> LEFT -> DOWN sequence from folding the
actor back onto itself within a single tick.
"""
from __future__ import annotations
from dataclasses import replace
import logging

from .config import GRID_SIZE, Direction, Intent, Status
from .difficulty import Difficulty, base_interval
from .errors import InvalidTransition
from .state import GameState, restart

logger = logging.getLogger(__name__)


def is_opposite(a: Direction, b: Direction) -> bool:
    (ax, ay), (bx, by) = a.delta, b.delta
    return ax == -bx and ay == -by

def propose_direction(state: GameState, new_dir: Direction) -> GameState:
    """
    Stage ``new_dir`` for the next tick.

    Only IDLE and PLAYING accept directions. Any direction key in IDLE
    starts the game, even one that is then rejected as a reversal.
    """
    if state.status not in (Status.IDLE, Status.PLAYING):
        return state

    status = Status.PLAYING
    if is_opposite(new_dir, state.direction):
        return state if state.status is status else replace(state, status=status)
    return replace(state, pending=new_dir, status=status)

def apply_control_intent(
    state: GameState, intent: Intent, size: int = GRID_SIZE
) -> GameState:
    """Strict variant of :func:`propose_control_intent`; raises InvalidTransition."""
    if intent is Intent.TOGGLE:
        if state.status is Status.IDLE or state.status is Status.PAUSED:
            return replace(state, status=Status.PLAYING)
        if state.status is Status.PLAYING:
            return replace(state, status=Status.PAUSED)
    elif intent is Intent.RESTART:
        if state.status is Status.GAME_OVER:
            return restart(state, size)
    raise InvalidTransition(state.status, intent)

def propose_control_intent(
    state: GameState, intent: Intent, size: int = GRID_SIZE
) -> GameState:
    try:
        return apply_control_intent(state, intent, size)
    except InvalidTransition as e:
        logger.debug("Ignored control intent: %s", e)
        return state

def select_difficulty(state: GameState, difficulty: Difficulty) -> GameState:
    """Switch difficulty; only allowed before the run starts."""
    if state.status is not Status.IDLE:
        logger.debug("Ignored difficulty change to %s while %s", difficulty.value, state.status.value)
        return state
    return replace(state, difficulty=difficulty, tick_interval=base_interval(difficulty))
