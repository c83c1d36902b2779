# difficulty.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class Difficulty(Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

    @classmethod
    def parse(cls, raw: str) -> "Difficulty":
        try:
            return cls(str(raw).strip().upper())
        except ValueError:
            raise ValueError(f"unknown difficulty: {raw!r}") from None


@dataclass(frozen=True)
class DifficultySettings:
    label: str
    tick_interval: int    # ms between ticks at the start of a run
    points: int           # score per item


DIFFICULTY_TABLE = MappingProxyType({
    Difficulty.EASY:   DifficultySettings(label="EASY",   tick_interval=200, points=1),
    Difficulty.MEDIUM: DifficultySettings(label="MEDIUM", tick_interval=130, points=2),
    Difficulty.HARD:   DifficultySettings(label="HARD",   tick_interval=80,  points=3),
})

DEFAULT_DIFFICULTY = Difficulty.MEDIUM


def settings_for(difficulty: Difficulty) -> DifficultySettings:
    return DIFFICULTY_TABLE[difficulty]

def base_interval(difficulty: Difficulty) -> int:
    return DIFFICULTY_TABLE[difficulty].tick_interval

def points_for(difficulty: Difficulty) -> int:
    return DIFFICULTY_TABLE[difficulty].points
