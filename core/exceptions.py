"""Exceptions raised by the blackjack engine."""


class BlackjackError(Exception):
    """Base class for engine errors."""


class DeckExhausted(BlackjackError, IndexError):
    """Raised when drawing from an empty deck."""

    def __init__(self, message: str = "Cannot draw from empty deck") -> None:
        super().__init__(message)


class InvalidStateError(BlackjackError):
    """Raised when an action is not allowed in the current game state."""

    def __init__(self, action: str, state: object) -> None:
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} in state {state}")


class InvalidCardError(BlackjackError, ValueError):
    """Raised for a card code that cannot be parsed."""
