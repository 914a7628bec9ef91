"""Tests for Hand evaluation and dealer play."""

import pytest

from hypothesis import given, strategies as st

from conftest import card_strategy, stack
from core.cards import Card, Deck, Rank, Suit
from core.exceptions import DeckExhausted
from core.hand import DealerPolicy, Hand, Winner, determine_winner


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self, empty_hand):
        """Test empty hand properties."""
        assert len(empty_hand) == 0
        assert empty_hand.value == 0
        assert not empty_hand.is_busted
        assert not empty_hand.is_dealer

    def test_value_is_sum(self, hand_14):
        assert hand_14.value == 14

    def test_value_from_hits(self, empty_hand):
        deck = stack("C4", "D10")
        empty_hand.hit(deck)
        empty_hand.hit(deck)
        assert empty_hand.value == 14
        assert deck.is_empty

    def test_hits_take_from_top_of_deck(self, empty_hand):
        club4 = Card(Rank.FOUR, Suit.CLUBS)
        diamond7 = Card(Rank.SEVEN, Suit.DIAMONDS)
        club_king = Card(Rank.KING, Suit.CLUBS)
        deck = Deck(cards=[club4, diamond7, club_king])

        empty_hand.hit(deck)
        empty_hand.hit(deck)

        assert empty_hand.cards == [club4, diamond7]
        assert empty_hand.cards[0] is club4
        assert list(deck) == [club_king]

    def test_hit_returns_card(self, empty_hand):
        deck = stack("HQ")
        card = empty_hand.hit(deck)
        assert card.display() == "HQ"

    def test_hit_on_empty_deck_raises(self, empty_hand):
        with pytest.raises(DeckExhausted):
            empty_hand.hit(Deck(cards=[]))
        assert len(empty_hand) == 0

    def test_ace_always_eleven(self, empty_hand):
        """Aces are never counted as 1, even when that busts the hand."""
        deck = stack("SA", "HA")
        empty_hand.hit(deck)
        empty_hand.hit(deck)
        assert empty_hand.value == 22
        assert empty_hand.is_busted

    def test_bust(self, hand_14):
        hand_14.add_card(Card(Rank.EIGHT, Suit.SPADES))
        assert hand_14.value == 22
        assert hand_14.is_busted

    def test_str(self, hand_14):
        assert str(hand_14) == "C4 D10 (14)"

    @given(st.lists(card_strategy(), max_size=8))
    def test_value_is_sum_of_card_values(self, cards):
        hand = Hand(cards=list(cards))
        assert hand.value == sum(card.rank.blackjack_value for card in cards)


class TestPlayAsDealer:
    """Tests for the dealer drawing rule."""

    def test_hits_below_16(self, empty_hand):
        deck = stack("C4", "D4", "C2", "H6")
        empty_hand.hit(deck)
        empty_hand.hit(deck)

        drawn = empty_hand.play_as_dealer(deck)

        assert empty_hand.value == 16
        assert drawn == 2

    def test_does_not_hit_at_17(self, empty_hand):
        deck = stack("C8", "D9", "H2")
        empty_hand.hit(deck)
        empty_hand.hit(deck)

        drawn = empty_hand.play_as_dealer(deck)

        assert empty_hand.value == 17
        assert drawn == 0
        assert len(deck) == 1

    def test_stops_on_21(self, empty_hand):
        deck = stack("C4", "D7", "CK")
        empty_hand.hit(deck)
        empty_hand.hit(deck)

        empty_hand.play_as_dealer(deck)

        assert empty_hand.value == 21

    def test_stops_when_deck_empty(self, empty_hand):
        deck = stack("C2", "D3", "H4")
        for _ in range(3):
            empty_hand.hit(deck)

        drawn = empty_hand.play_as_dealer(deck)

        assert drawn == 0
        assert empty_hand.value == 9

    def test_custom_threshold(self, empty_hand):
        deck = stack("C10", "D6", "H2")
        empty_hand.hit(deck)
        empty_hand.hit(deck)

        empty_hand.play_as_dealer(deck, stand_threshold=17)

        assert empty_hand.value == 18

    def test_reveals_every_card(self, dealer_hand):
        deck = stack("S5", "C3", "D2", "H9")
        dealer_hand.hit(deck)
        dealer_hand.hit(deck)
        assert dealer_hand.has_hidden_card

        dealer_hand.play_as_dealer(deck)

        assert not dealer_hand.has_hidden_card
        assert all(card.revealed for card in dealer_hand)
        assert dealer_hand.value == 19

    def test_reveals_even_without_drawing(self, dealer_hand):
        deck = stack("SK", "C9")
        dealer_hand.hit(deck)
        dealer_hand.hit(deck)

        dealer_hand.play_as_dealer(deck)

        assert [card.display() for card in dealer_hand] == ["SK", "C9"]


class TestDealerHand:
    """Tests for dealer hands."""

    def test_first_hit_is_hidden(self, dealer_hand):
        dealer_hand.hit(Deck())
        assert dealer_hand.cards[0].display() == "XX"
        assert dealer_hand.cards[0].value == 0

    def test_only_first_card_hidden(self, dealer_hand):
        deck = stack("DK", "H5", "C7")
        for _ in range(3):
            dealer_hand.hit(deck)

        assert [card.display() for card in dealer_hand] == ["XX", "H5", "C7"]
        assert dealer_hand.value == 12

    def test_hidden_card_keeps_rank_and_suit(self, dealer_hand):
        deck = stack("DK")
        drawn = next(iter(deck))
        dealer_hand.hit(deck)

        hole = dealer_hand.cards[0]
        assert hole is not drawn
        assert hole == drawn
        hole.reveal()
        assert hole.display() == "DK"

    def test_policy_without_hole_card(self):
        hand = Hand.dealer(DealerPolicy(hide_first_card=False))
        hand.hit(stack("DK"))
        assert hand.cards[0].display() == "DK"

    def test_policy_threshold(self):
        hand = Hand.dealer(DealerPolicy(stand_threshold=12))
        deck = stack("C5", "D6", "H3", "S4")
        hand.hit(deck)
        hand.hit(deck)

        hand.play_as_dealer(deck)

        assert hand.value == 14

    def test_policy_rejects_threshold_below_two(self):
        with pytest.raises(ValueError):
            DealerPolicy(stand_threshold=1)


class TestDetermineWinner:
    """Tests for winner determination."""

    def test_player_bust_dealer_wins(self):
        assert determine_winner(22, 15) == Winner.DEALER

    def test_dealer_bust_player_wins(self):
        assert determine_winner(18, 22) == Winner.PLAYER

    def test_player_higher_wins(self):
        assert determine_winner(18, 16) == Winner.PLAYER

    def test_dealer_higher_wins(self):
        assert determine_winner(17, 20) == Winner.DEALER

    def test_tie_is_push(self):
        assert determine_winner(16, 16) == Winner.PUSH

    def test_both_bust_dealer_wins(self):
        """The player's bust is checked before the dealer's."""
        assert determine_winner(25, 23) == Winner.DEALER

    @given(st.integers(min_value=22, max_value=40), st.integers(min_value=0, max_value=40))
    def test_player_bust_always_loses(self, player_value, dealer_value):
        assert determine_winner(player_value, dealer_value) == Winner.DEALER

    @given(st.integers(min_value=0, max_value=21), st.integers(min_value=0, max_value=21))
    def test_no_bust_higher_value_wins(self, player_value, dealer_value):
        winner = determine_winner(player_value, dealer_value)
        if player_value > dealer_value:
            assert winner == Winner.PLAYER
        elif player_value < dealer_value:
            assert winner == Winner.DEALER
        else:
            assert winner == Winner.PUSH
