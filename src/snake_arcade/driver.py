# driver.py
from __future__ import annotations
from typing import Callable, Optional
import time

from .config import Status
from .engine import Engine


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TickDriver:
    """
    Gates engine ticks on elapsed time, independent of the frame rate.

    Call :meth:`poll` as often as the host allows (once per frame). At most
    one step fires per poll; missed intervals are not caught up, and the
    last-tick timestamp is reset to *now* rather than advanced by the
    interval. Whenever the engine enters PLAYING (start or resume) the
    timestamp is re-armed, so the first step after a pause comes a full
    interval later instead of immediately.
    """

    def __init__(self, engine: Engine, clock: Optional[Callable[[], float]] = None):
        self.engine = engine
        self.clock = clock or monotonic_ms
        self.last_tick = self.clock()
        self._epoch = engine.play_epoch

    def poll(self) -> bool:
        """Returns True if a step was taken."""
        now = self.clock()
        if self.engine.status is not Status.PLAYING:
            return False

        if self._epoch != self.engine.play_epoch:
            self._epoch = self.engine.play_epoch
            self.last_tick = now
            return False

        if now - self.last_tick < self.engine.get_state().tick_interval:
            return False

        stepped = self.engine.on_tick()
        self.last_tick = now
        return stepped
