"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field

from core.hand import DEALER_STANDS_ON, DealerPolicy


def _parse_seed() -> int | None:
    """Parse BLACKJACK_SEED environment variable."""
    seed = os.getenv("BLACKJACK_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class GameConfig:
    """Round configuration."""

    dealer_stands_on: int = field(
        default_factory=lambda: int(
            os.getenv("BLACKJACK_DEALER_STANDS_ON", str(DEALER_STANDS_ON))
        )
    )
    hide_dealer_first_card: bool = True
    initial_cards: int = 2
    seed: int | None = field(default_factory=_parse_seed)

    def __post_init__(self) -> None:
        """Validate the configuration."""
        if self.initial_cards < 1:
            raise ValueError("initial_cards must be at least 1")

    def dealer_policy(self) -> DealerPolicy:
        """Build the dealer policy for this configuration."""
        return DealerPolicy(
            hide_first_card=self.hide_dealer_first_card,
            stand_threshold=self.dealer_stands_on,
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    game: GameConfig = field(default_factory=GameConfig)


# Global configuration instance
config = AppConfig()
