# errors.py
"""Exception types raised by the game engine."""


class SnakeError(Exception):
    """Base class for engine errors."""


class InvalidTransition(SnakeError):
    """A control intent that has no effect in the current status."""

    def __init__(self, status, intent):
        super().__init__(f"{intent} has no effect while {status}")
        self.status = status
        self.intent = intent


class FieldExhausted(SnakeError):
    """No free cell is left for the item."""
