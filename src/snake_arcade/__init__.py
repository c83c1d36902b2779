"""Deterministic snake game engine with a pygame front end."""

from .config import Direction, Intent, Status
from .difficulty import Difficulty
from .engine import Engine, GameListener
from .errors import FieldExhausted, InvalidTransition, SnakeError
from .state import GameState, new_game_state, step

__all__ = [
    "Direction", "Intent", "Status", "Difficulty",
    "Engine", "GameListener",
    "FieldExhausted", "InvalidTransition", "SnakeError",
    "GameState", "new_game_state", "step",
]
