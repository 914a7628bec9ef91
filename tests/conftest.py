"""Pytest fixtures for blackjack engine tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from config import GameConfig
from core.cards import Card, Deck, Rank, Suit
from core.hand import Hand
from core.game import BlackjackGame


def stack(*codes: str) -> Deck:
    """Build a deck that deals the given card codes in order."""
    return Deck(cards=[Card.from_string(code) for code in codes])


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def game_config():
    """Default round configuration, independent of the environment."""
    return GameConfig(dealer_stands_on=16, seed=None)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def dealer_hand():
    """An empty dealer hand."""
    return Hand.dealer()


@pytest.fixture
def hand_14():
    """C4 D10."""
    hand = Hand()
    hand.add_card(Card(Rank.FOUR, Suit.CLUBS))
    hand.add_card(Card(Rank.TEN, Suit.DIAMONDS))
    return hand


@pytest.fixture
def game(rng, game_config):
    """A freshly dealt round."""
    return BlackjackGame(rng=rng, config=game_config)


@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)
