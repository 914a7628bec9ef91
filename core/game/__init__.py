"""Game engine and state management."""

from core.game.events import GameEvent, EventEmitter, EventType
from core.game.state import GameState
from core.game.engine import BlackjackGame, GameStatus

__all__ = [
    "GameEvent",
    "EventEmitter",
    "EventType",
    "GameState",
    "BlackjackGame",
    "GameStatus",
]
