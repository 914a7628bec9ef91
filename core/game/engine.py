"""Blackjack round engine with state machine."""

from dataclasses import dataclass
from random import Random
from typing import Any

from transitions import Machine

from config import GameConfig, config as app_config
from core.cards import Card, Deck
from core.exceptions import InvalidStateError
from core.hand import DealerPolicy, Hand, Winner, determine_winner
from core.game.events import EventEmitter, EventHandler, EventType
from core.game.state import GameState


@dataclass(frozen=True)
class GameStatus:
    """Read-only view of a round."""

    player_cards: tuple[Card, ...]
    player_value: int
    dealer_cards: tuple[Card, ...]
    dealer_value: int
    winner: Winner | None
    state: GameState

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with card codes rendered as text."""
        return {
            "player_cards": [card.display() for card in self.player_cards],
            "player_value": self.player_value,
            "dealer_cards": [card.display() for card in self.dealer_cards],
            "dealer_value": self.dealer_value,
            "winner": self.winner.value if self.winner is not None else None,
            "state": self.state.name.lower(),
        }


class BlackjackGame:
    """
    One round of blackjack, player against dealer.

    The round is dealt on construction. The player then hits until they
    stand or bust; either way the dealer plays out its hand and the winner
    is fixed. Progress is reported through events and ``status()``.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "conclude", "source": "in_progress", "dest": "concluded"},
    ]

    def __init__(
        self,
        rng: Random | None = None,
        deck: Deck | None = None,
        config: GameConfig | None = None,
        policy: DealerPolicy | None = None,
        handler: EventHandler | None = None,
    ) -> None:
        """
        Deal a new round.

        Args:
            rng: Random number generator for reproducible shuffles
            deck: Pre-arranged deck to deal from instead of a shuffled one
            config: Round configuration (uses the global config if not provided)
            policy: Dealer policy (built from the config if not provided)
            handler: Subscribed to all events before the cards are dealt
        """
        self.config = config or app_config.game
        if rng is None and self.config.seed is not None:
            rng = Random(self.config.seed)

        self.deck = deck if deck is not None else Deck(rng=rng)
        self.player_hand = Hand()
        self.dealer_hand = Hand.dealer(policy or self.config.dealer_policy())
        self.events = EventEmitter()
        self._winner: Winner | None = None

        if handler is not None:
            self.events.subscribe(handler)

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="in_progress",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        self._deal_initial_cards()

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    @property
    def winner(self) -> Winner | None:
        """The round winner, None until the round is concluded."""
        return self._winner

    @property
    def is_finished(self) -> bool:
        return self.state == GameState.CONCLUDED

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.state == GameState.IN_PROGRESS and not self.player_hand.is_busted

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.state == GameState.IN_PROGRESS

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def _deal_initial_cards(self) -> None:
        """Deal the player's cards, then the dealer's."""
        for _ in range(self.config.initial_cards):
            self._deal_card_to_hand(self.player_hand)
        for _ in range(self.config.initial_cards):
            self._deal_card_to_hand(self.dealer_hand)

        self.events.emit_new(
            EventType.ROUND_STARTED,
            player_value=self.player_hand.value,
            dealer_value=self.dealer_hand.value,
        )

    def _deal_card_to_hand(self, hand: Hand) -> Card:
        """Deal a card to a hand."""
        card = hand.hit(self.deck)
        self._report_card(card, hand)
        return card

    def _report_card(self, card: Card, hand: Hand) -> None:
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=card.display(),
            hand="dealer" if hand is self.dealer_hand else "player",
            hand_value=hand.value,
        )

    def _reject(self, action: str) -> None:
        """Report an action the current state does not allow."""
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=f"Cannot {action} in current state",
            state=self.state.name,
        )
        raise InvalidStateError(action, self.state)

    def hit(self) -> None:
        """
        Player hits (takes another card).

        A bust ends the player's turn: the dealer plays and the winner is set.

        Raises:
            InvalidStateError: if the round is already concluded
            DeckExhausted: if the deck has no cards left
        """
        if self.state != GameState.IN_PROGRESS:
            self._reject("hit")

        card = self.player_hand.hit(self.deck)
        drawn = self._settle() if self.player_hand.is_busted else None

        self._report_card(card, self.player_hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player_hand.value)

        if drawn is not None:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player_hand.value)
            self._report_round(drawn)

    def stand(self) -> None:
        """
        Player stands; the dealer plays and the winner is set.

        Raises:
            InvalidStateError: if the round is already concluded
        """
        if self.state != GameState.IN_PROGRESS:
            self._reject("stand")

        drawn = self._settle()
        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player_hand.value)
        self._report_round(drawn)

    def _settle(self) -> int:
        """
        Play the dealer, fix the winner and conclude the round.

        Runs before any event of the final action is emitted.

        Returns:
            The number of cards the dealer drew
        """
        drawn = self.dealer_hand.play_as_dealer(self.deck)
        self._winner = self.determine_winner(self.player_hand.value, self.dealer_hand.value)
        self.conclude()  # Trigger state transition
        return drawn

    def _report_round(self, drawn: int) -> None:
        """Emit the dealer's play and the outcome of a settled round."""
        hand = self.dealer_hand
        kept = len(hand) - drawn

        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=hand.cards[0].display(),
            hand_value=sum(card.value for card in hand.cards[:kept]),
        )
        for card in hand.cards[kept:]:
            self.events.emit_new(EventType.DEALER_HITS, card=card.display())

        if hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=hand.value)

        outcome_events = {
            Winner.PLAYER: EventType.PLAYER_WINS,
            Winner.DEALER: EventType.DEALER_WINS,
            Winner.PUSH: EventType.PUSH,
        }
        self.events.emit_new(
            outcome_events[self._winner],
            player_value=self.player_hand.value,
            dealer_value=hand.value,
        )
        self.events.emit_new(EventType.ROUND_ENDED, winner=self._winner.value)

    def status(self) -> GameStatus:
        """Snapshot of both hands and the winner."""
        return GameStatus(
            player_cards=tuple(self.player_hand.cards),
            player_value=self.player_hand.value,
            dealer_cards=tuple(self.dealer_hand.cards),
            dealer_value=self.dealer_hand.value,
            winner=self._winner,
            state=self.state,
        )

    @staticmethod
    def determine_winner(player_value: int, dealer_value: int) -> Winner:
        """Decide the round from final hand values."""
        return determine_winner(player_value, dealer_value)

    def __repr__(self) -> str:
        return f"BlackjackGame({self.status().to_dict()})"
