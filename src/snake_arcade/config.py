# config.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import os

from dotenv import load_dotenv  # type: ignore

# ----- Window & grid -----
GRID_SIZE = 20
CELL_SIZE = 24
HEADER_H = 56
WIDTH, HEIGHT = GRID_SIZE * CELL_SIZE, GRID_SIZE * CELL_SIZE + HEADER_H

# ----- Colors -----
BG        = (3, 7, 18)
GRID_LINE = (17, 24, 39)
GREEN     = (34, 197, 94)
HEAD      = (134, 239, 172)
RED       = (239, 68, 68)
YELLOW    = (250, 204, 21)
TEXT      = (220, 220, 230)
DIM       = (107, 114, 128)

# ----- Tick timing (milliseconds) -----
MIN_TICK_INTERVAL = 50
TICK_DECREMENT = 2

# ----- Starting layout -----
INITIAL_ACTOR = ((10, 10), (10, 11), (10, 12))
INITIAL_ITEM = (5, 5)

LEADERBOARD_SIZE = 5


class Direction(Enum):
    """Cardinal directions; the value is the (dx, dy) unit delta."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self):
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


class Status(Enum):
    IDLE = "IDLE"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


class Intent(Enum):
    TOGGLE = "TOGGLE"    # start / pause / resume
    RESTART = "RESTART"


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


# ----- Tunables -----
@dataclass
class Config:
    seed: int | None = None
    difficulty: str = "MEDIUM"
    fps: int = 60
    audio_enabled: bool = True
    volume: float = 0.3
    leaderboard_path: str = field(
        default_factory=lambda: os.path.join(os.path.expanduser("~"), ".snake_arcade.json")
    )
    commentary_model: str = "gpt-4o-mini"
    commentary_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "Config":
        """Build a Config from SNAKE_* environment variables (and a .env file if present)."""
        load_dotenv()
        cfg = cls()
        cfg.seed = _env_int("SNAKE_SEED", cfg.seed)
        cfg.difficulty = os.getenv("SNAKE_DIFFICULTY", cfg.difficulty).strip().upper()
        cfg.leaderboard_path = os.getenv("SNAKE_LEADERBOARD", cfg.leaderboard_path)
        cfg.commentary_model = os.getenv("SNAKE_COMMENTARY_MODEL", cfg.commentary_model)
        return cfg
