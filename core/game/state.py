"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Game state machine states.

    Flow: IN_PROGRESS → CONCLUDED
    """

    # Cards dealt, player may hit or stand
    IN_PROGRESS = auto()

    # Dealer has played and the winner is fixed
    CONCLUDED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

