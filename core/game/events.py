"""Round events reported by the game engine."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of game events."""

    # Round flow
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Cards
    CARD_DEALT = auto()

    # Player actions
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_BUSTS = auto()

    # Dealer play
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Outcomes
    PLAYER_WINS = auto()
    DEALER_WINS = auto()
    PUSH = auto()

    INVALID_ACTION = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    Events are how the engine reports what happened during a round to
    whatever presentation layer is driving it.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """Dispatches events to subscribers and keeps a history of the round."""

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: list[GameEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        """Record an event and pass it to its subscribers."""
        self._event_history.append(event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)

        # Catch-all handlers
        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Create and emit a new event."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return self._event_history.copy()

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        """Return the recorded events of one type."""
        return [e for e in self._event_history if e.event_type == event_type]

    def clear_history(self) -> None:
        self._event_history.clear()
