# engine.py
from __future__ import annotations
from typing import List, Optional
import logging
import random
import threading

from .config import GRID_SIZE, Direction, Intent, Status
from .difficulty import DEFAULT_DIFFICULTY, Difficulty
from .arbiter import propose_control_intent, propose_direction, select_difficulty
from .state import GameState, new_game_state, step

logger = logging.getLogger(__name__)


class GameListener:
    """
    Receiver of engine notifications. Subclass and override what you need;
    the defaults do nothing.
    """

    def on_game_started(self) -> None:
        pass

    def on_item_consumed(self) -> None:
        pass

    def on_game_over(self, score: int, high_score: int) -> None:
        pass


class Engine:
    """
    Single serialized entry point for every state mutation.

    Directions, control intents and ticks all swap ``self._state`` under
    one lock, so a key press can never interleave with a tick. Listeners
    are called synchronously, once per transition, after the new state is
    in place; an exception raised by a listener is logged and dropped.
    """

    def __init__(
        self,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
        high_score: int = 0,
        rng: Optional[random.Random] = None,
        size: int = GRID_SIZE,
    ):
        self.size = size
        self.rng = rng or random.Random()
        self._state = new_game_state(difficulty, high_score, size)
        self._listeners: List[GameListener] = []
        self._lock = threading.RLock()
        # bumped on every entry into PLAYING so the tick driver can re-arm
        self.play_epoch = 0

    # ---------- Listeners ----------
    def subscribe(self, listener: GameListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: GameListener) -> None:
        self._listeners.remove(listener)

    def _emit(self, name: str, *args) -> None:
        for listener in list(self._listeners):
            callback = getattr(listener, name, None)
            if callback is None:
                continue
            try:
                callback(*args)
            except Exception:
                logger.exception("Listener %r failed in %s", listener, name)

    # ---------- Queries ----------
    def get_state(self) -> GameState:
        return self._state

    @property
    def status(self) -> Status:
        return self._state.status

    # ---------- Mutations ----------
    def _commit(self, new: GameState) -> None:
        old, self._state = self._state, new
        if new is old:
            return

        if new.status is Status.PLAYING and old.status is not Status.PLAYING:
            self.play_epoch += 1
            if old.status is Status.IDLE:
                logger.debug("Game started on %s", new.difficulty.value)
                self._emit("on_game_started")
            return

        if old.status is Status.PLAYING and new.score > old.score:
            self._emit("on_item_consumed")
        if new.status is Status.GAME_OVER and old.status is Status.PLAYING:
            logger.info("Game over: score=%d high_score=%d length=%d",
                        new.score, new.high_score, len(new.actor))
            self._emit("on_game_over", new.score, new.high_score)

    def submit_direction(self, direction: Direction) -> GameState:
        with self._lock:
            self._commit(propose_direction(self._state, direction))
            return self._state

    def submit_control_intent(self, intent: Intent) -> GameState:
        with self._lock:
            self._commit(propose_control_intent(self._state, intent, self.size))
            return self._state

    def set_difficulty(self, difficulty: Difficulty) -> GameState:
        with self._lock:
            self._commit(select_difficulty(self._state, difficulty))
            return self._state

    def on_tick(self) -> bool:
        """Run one step if the game is in progress. Returns True if a step ran."""
        with self._lock:
            if self._state.status is not Status.PLAYING:
                return False
            self._commit(step(self._state, self.rng, self.size))
            return True
