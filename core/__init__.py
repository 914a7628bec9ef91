"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit
from core.exceptions import BlackjackError, DeckExhausted, InvalidCardError, InvalidStateError
from core.hand import DealerPolicy, Hand, Winner, determine_winner

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "DealerPolicy",
    "Hand",
    "Winner",
    "determine_winner",
    "BlackjackError",
    "DeckExhausted",
    "InvalidCardError",
    "InvalidStateError",
]
