# session.py
"""
Session context that outlives a single run: the high score and the local
top-5 leaderboard, plus the JSON file they are persisted to.
"""
from __future__ import annotations
from dataclasses import asdict, dataclass
from datetime import date
from typing import List, Optional, Sequence
import json
import logging
import os

from .config import LEADERBOARD_SIZE
from .difficulty import Difficulty, settings_for
from .engine import Engine, GameListener

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int
    difficulty: Difficulty
    date: str

    def to_dict(self) -> dict:
        d = asdict(self)
        d["difficulty"] = self.difficulty.value
        return d

    @classmethod
    def from_dict(cls, raw: dict) -> "ScoreEntry":
        return cls(
            name=str(raw["name"]),
            score=int(raw["score"]),
            difficulty=Difficulty(raw["difficulty"]),
            date=str(raw.get("date", "")),
        )


def qualifies(score: int, top: Sequence[ScoreEntry], size: int = LEADERBOARD_SIZE) -> bool:
    """Does ``score`` earn a place in a leaderboard currently holding ``top``?"""
    if score <= 0:
        return False
    return len(top) < size or score > top[-1].score

def share_message(score: int, difficulty: Difficulty) -> str:
    return (
        f"SNAKE ARCADE\n"
        f"I scored {score} points on {settings_for(difficulty).label}!\n"
        f"Think you can beat me?"
    )


class LeaderboardStore:
    """High score and ranking kept in one small JSON document."""

    def __init__(self, path: Optional[str]):
        self.path = path

    def load(self):
        """Returns (high_score, entries). A missing or corrupt file reads as empty."""
        if not self.path or not os.path.exists(self.path):
            return 0, []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            entries = [ScoreEntry.from_dict(e) for e in data.get("ranking", [])]
            return int(data.get("high_score", 0)), entries
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Could not read leaderboard %s: %s", self.path, e)
            return 0, []

    def save(self, high_score: int, entries: Sequence[ScoreEntry]) -> None:
        if not self.path:
            return
        payload = {
            "high_score": high_score,
            "ranking": [e.to_dict() for e in entries],
        }
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            logger.warning("Could not write leaderboard %s: %s", self.path, e)


class Session(GameListener):
    """
    Owns everything that survives a restart. Subscribe it to the engine
    (``bind``) and it keeps the high score and leaderboard current.
    """

    def __init__(self, store: Optional[LeaderboardStore] = None):
        self.store = store or LeaderboardStore(None)
        self.high_score, ranking = self.store.load()
        self.ranking: List[ScoreEntry] = sorted(ranking, key=lambda e: -e.score)[:LEADERBOARD_SIZE]
        self.awaiting_name = False
        self.last_score = 0
        self.last_difficulty: Optional[Difficulty] = None
        self.engine: Optional[Engine] = None

    def bind(self, engine: Engine) -> None:
        self.engine = engine
        engine.subscribe(self)

    def on_game_over(self, score: int, high_score: int) -> None:
        self.last_score = score
        if self.engine is not None:
            self.last_difficulty = self.engine.get_state().difficulty
        if high_score > self.high_score:
            self.high_score = high_score
            self.store.save(self.high_score, self.ranking)
        self.awaiting_name = qualifies(score, self.ranking)

    def save_score(self, name: str, when: Optional[date] = None) -> Optional[ScoreEntry]:
        """Record the last run under ``name`` (first three letters, upper-cased)."""
        name = name.strip().upper()[:3]
        if not name or not self.awaiting_name or self.last_difficulty is None:
            return None
        entry = ScoreEntry(
            name=name,
            score=self.last_score,
            difficulty=self.last_difficulty,
            date=(when or date.today()).isoformat(),
        )
        self.ranking = sorted(self.ranking + [entry], key=lambda e: -e.score)[:LEADERBOARD_SIZE]
        self.awaiting_name = False
        self.store.save(self.high_score, self.ranking)
        return entry

    def dismiss(self) -> None:
        self.awaiting_name = False
