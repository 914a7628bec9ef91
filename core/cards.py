"""Card and Deck classes."""

from enum import Enum
from random import Random
from typing import Iterable, Iterator

from core.exceptions import DeckExhausted, InvalidCardError

MASKED_DISPLAY = "XX"


class Suit(Enum):
    """Card suits, in deck-building order."""

    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    SPADES = "spades"
    HEARTS = "hearts"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.SPADES: "♠",
            Suit.HEARTS: "♥",
        }
        return symbols[self]

    @property
    def initial(self) -> str:
        """Return the capitalized first letter of the suit name."""
        return self.value[0].upper()


class Rank(Enum):
    """Card ranks, valued by their face."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value.isdigit():
            return int(self.value)
        if self == Rank.ACE:
            return 11
        return 10  # Face cards


class Card:
    """
    A playing card.

    ``rank`` and ``suit`` are fixed. A masked card (the dealer's hole card)
    reports a value of 0 and displays as ``XX`` until it is revealed.
    """

    __slots__ = ("_rank", "_suit", "masked", "revealed")

    def __init__(self, rank: Rank, suit: Suit, masked: bool = False) -> None:
        self._rank = rank
        self._suit = suit
        self.masked = masked
        self.revealed = False

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def is_hidden(self) -> bool:
        """Check if the card is currently face down."""
        return self.masked and not self.revealed

    @property
    def value(self) -> int:
        """Return the blackjack point value, 0 while face down."""
        if self.is_hidden:
            return 0
        return self._rank.blackjack_value

    def display(self) -> str:
        """Return the short card code, e.g. 'DA' or 'C10'."""
        if self.is_hidden:
            return MASKED_DISPLAY
        return f"{self._suit.initial}{self._rank}"

    def reveal(self) -> None:
        """Turn the card face up. Has no visible effect on an unmasked card."""
        self.revealed = True

    def hidden(self) -> "Card":
        """Return a face-down copy of this card."""
        return Card(self._rank, self._suit, masked=True)

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        if self.masked:
            return f"Card({self._rank.name}, {self._suit.name}, masked=True)"
        return f"Card({self._rank.name}, {self._suit.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return (self._rank, self._suit) == (other._rank, other._suit)

    def __hash__(self) -> int:
        return hash((self._rank, self._suit))

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a code like 'DA', '10H', 'KC' or 'K♣'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise InvalidCardError(f"Invalid card string: {s}")

        rank_map = {rank.value: rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
        }

        # Suit first ("DA") as displayed, or rank first ("AD")
        if s[0] in suit_map and s[1:] in rank_map:
            return cls(rank_map[s[1:]], suit_map[s[0]])
        if s[-1] in suit_map and s[:-1] in rank_map:
            return cls(rank_map[s[:-1]], suit_map[s[-1]])

        raise InvalidCardError(f"Invalid card string: {s}")


class Deck:
    """A standard 52-card deck, drawn from the front."""

    def __init__(
        self,
        rng: Random | None = None,
        cards: Iterable[Card] | None = None,
    ) -> None:
        """
        Initialize a deck.

        Args:
            rng: Random number generator used for shuffling
            cards: Exact card order to use instead of a shuffled deck
        """
        self._cards: list[Card] = self.build(rng) if cards is None else list(cards)

    @classmethod
    def build(cls, rng: Random | None = None) -> list[Card]:
        """Build all 52 cards in a uniformly shuffled order."""
        cards = [Card(rank, suit) for suit in Suit for rank in Rank]
        (rng or Random()).shuffle(cards)
        return cards

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise DeckExhausted()
        return self._cards.pop(0)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def is_empty(self) -> bool:
        return not self._cards
