from dataclasses import replace

import pytest

from snake_arcade.arbiter import (
    apply_control_intent, is_opposite, propose_control_intent,
    propose_direction, select_difficulty,
)
from snake_arcade.config import Direction, Intent, Status
from snake_arcade.difficulty import Difficulty, base_interval
from snake_arcade.errors import InvalidTransition
from snake_arcade.state import new_game_state


def test_is_opposite():
    assert is_opposite(Direction.UP, Direction.DOWN)
    assert is_opposite(Direction.LEFT, Direction.RIGHT)
    assert not is_opposite(Direction.UP, Direction.LEFT)
    assert not is_opposite(Direction.UP, Direction.UP)
    assert Direction.LEFT.opposite is Direction.RIGHT


@pytest.mark.parametrize("committed", list(Direction))
def test_reversal_never_changes_pending(playing, committed):
    pending = next(d for d in Direction if d not in (committed, committed.opposite))
    state = playing(direction=committed, pending=pending)
    out = propose_direction(state, committed.opposite)
    assert out.pending is pending


def test_latest_valid_proposal_wins(playing):
    state = playing()
    state = propose_direction(state, Direction.LEFT)
    state = propose_direction(state, Direction.RIGHT)
    assert state.pending is Direction.RIGHT
    assert state.direction is Direction.UP


def test_reversal_is_judged_against_committed_direction(playing):
    # UP committed, LEFT staged: DOWN is still a reversal of what will move next tick
    state = propose_direction(playing(), Direction.LEFT)
    state = propose_direction(state, Direction.DOWN)
    assert state.pending is Direction.LEFT


def test_direction_starts_game_from_idle():
    state = new_game_state()
    out = propose_direction(state, Direction.LEFT)
    assert out.status is Status.PLAYING
    assert out.pending is Direction.LEFT


def test_rejected_direction_still_starts_game_from_idle():
    out = propose_direction(new_game_state(), Direction.DOWN)
    assert out.status is Status.PLAYING
    assert out.pending is Direction.UP


@pytest.mark.parametrize("status", [Status.PAUSED, Status.GAME_OVER])
def test_direction_ignored_when_not_idle_or_playing(status):
    state = replace(new_game_state(), status=status)
    assert propose_direction(state, Direction.LEFT) is state


@pytest.mark.parametrize("before,after", [
    (Status.IDLE, Status.PLAYING),
    (Status.PLAYING, Status.PAUSED),
    (Status.PAUSED, Status.PLAYING),
])
def test_toggle(before, after):
    state = replace(new_game_state(), status=before)
    assert propose_control_intent(state, Intent.TOGGLE).status is after


def test_pause_keeps_buffered_direction(playing):
    state = propose_direction(playing(), Direction.RIGHT)
    paused = propose_control_intent(state, Intent.TOGGLE)
    resumed = propose_control_intent(paused, Intent.TOGGLE)
    assert resumed.pending is Direction.RIGHT


@pytest.mark.parametrize("status,intent", [
    (Status.GAME_OVER, Intent.TOGGLE),
    (Status.IDLE, Intent.RESTART),
    (Status.PLAYING, Intent.RESTART),
    (Status.PAUSED, Intent.RESTART),
])
def test_undefined_intents_are_noops(status, intent):
    state = replace(new_game_state(), status=status)
    assert propose_control_intent(state, intent) is state
    with pytest.raises(InvalidTransition):
        apply_control_intent(state, intent)


def test_restart_from_game_over(playing):
    state = playing(score=8, high_score=8, status=Status.GAME_OVER,
                    actor=((0, 0), (0, 1), (0, 2), (0, 3)), tick_interval=60)
    out = propose_control_intent(state, Intent.RESTART)
    assert out.status is Status.IDLE
    assert out.high_score == 8
    assert out.score == 0
    assert out.actor == ((10, 10), (10, 11), (10, 12))
    assert out.tick_interval == base_interval(Difficulty.MEDIUM)


def test_select_difficulty_only_while_idle(playing):
    idle = new_game_state()
    out = select_difficulty(idle, Difficulty.HARD)
    assert out.difficulty is Difficulty.HARD
    assert out.tick_interval == base_interval(Difficulty.HARD)

    running = playing()
    assert select_difficulty(running, Difficulty.EASY) is running
