"""Hand evaluation and dealer play for blackjack."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from core.cards import Card, Deck

BUST_LIMIT = 21
DEALER_STANDS_ON = 16


class Winner(Enum):
    """Outcome of a concluded round."""

    PLAYER = "player"
    DEALER = "dealer"
    PUSH = "push"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DealerPolicy:
    """
    How a dealer hand takes and plays its cards.

    hide_first_card: the first card drawn into the hand is dealt face down
    stand_threshold: the dealer keeps drawing while below this value
    """

    hide_first_card: bool = True
    stand_threshold: int = DEALER_STANDS_ON

    def __post_init__(self) -> None:
        """Validate the policy."""
        # The smallest card is worth 2, so any lower threshold never draws
        if self.stand_threshold < 2:
            raise ValueError("stand_threshold must be at least 2")


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)
    policy: DealerPolicy | None = None

    @classmethod
    def dealer(cls, policy: DealerPolicy | None = None) -> "Hand":
        """Create an empty hand played by the dealer."""
        return cls(policy=policy or DealerPolicy())

    @property
    def is_dealer(self) -> bool:
        return self.policy is not None

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def hit(self, deck: Deck) -> Card:
        """
        Draw the top card of the deck into the hand.

        A dealer hand takes its first card face down.

        Returns:
            The card added to the hand
        """
        card = deck.draw()
        if not self.cards and self.policy is not None and self.policy.hide_first_card:
            card = card.hidden()
        self.add_card(card)
        return card

    @property
    def value(self) -> int:
        """
        Sum of the card values.

        Aces always count 11 and face-down cards count 0.
        """
        return sum(card.value for card in self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > BUST_LIMIT

    @property
    def has_hidden_card(self) -> bool:
        return any(card.is_hidden for card in self.cards)

    def reveal_all(self) -> None:
        """Turn every card in the hand face up."""
        for card in self.cards:
            card.reveal()

    def play_as_dealer(self, deck: Deck, stand_threshold: int | None = None) -> int:
        """
        Play the hand by the dealer rule.

        Reveals the hand, then draws while the value is below the stand
        threshold and the deck still has cards.

        Args:
            deck: Deck to draw from
            stand_threshold: Overrides the policy threshold

        Returns:
            The number of cards drawn
        """
        if stand_threshold is None:
            stand_threshold = (
                self.policy.stand_threshold if self.policy is not None else DEALER_STANDS_ON
            )

        drawn = 0
        self.reveal_all()
        while self.value < stand_threshold and not deck.is_empty:
            self.hit(deck)
            self.reveal_all()
            drawn += 1
        return drawn

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(card.display() for card in self.cards)
        value_str = "(BUST)" if self.is_busted else f"({self.value})"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def determine_winner(player_value: int, dealer_value: int) -> Winner:
    """
    Decide the round from the final hand values.

    A player bust loses even when the dealer has also busted.
    """
    if player_value > BUST_LIMIT:
        return Winner.DEALER
    if dealer_value > BUST_LIMIT:
        return Winner.PLAYER
    if player_value == dealer_value:
        return Winner.PUSH
    if player_value > dealer_value:
        return Winner.PLAYER
    return Winner.DEALER
