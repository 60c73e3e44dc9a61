"""Computer opponent strategies."""

from abc import ABC, abstractmethod
from collections import Counter
from typing import Optional
from crazyeights.simulation.state import Card, GameState, Suit
from crazyeights.simulation.movegen import playable_cards


class OpponentStrategy(ABC):
    """Base class for computer opponents."""

    @abstractmethod
    def choose_card(self, state: GameState) -> Optional[Card]:
        """Choose a card to play from the opponent's hand, or None to draw."""
        pass

    @abstractmethod
    def choose_suit(self, hand: tuple[Card, ...]) -> Suit:
        """Choose the wild suit after playing an eight."""
        pass


class SimpleOpponent(OpponentStrategy):
    """Plays the first legal non-eight, saving eights for when nothing else fits."""

    def choose_card(self, state: GameState) -> Optional[Card]:
        """Pick the first playable non-eight, then the first playable eight."""
        candidates = playable_cards(state.opponent_hand, state)
        if not candidates:
            return None
        for card in candidates:
            if not card.is_eight:
                return card
        return candidates[0]

    def choose_suit(self, hand: tuple[Card, ...]) -> Suit:
        """Most common suit in ``hand``; ties go to the earlier Suit member.

        Falls back to SPADES for an empty hand.
        """
        if not hand:
            return Suit.SPADES
        counts = Counter(card.suit for card in hand)
        # max() keeps the first maximum, so iterating Suit pins the tie-break
        return max(Suit, key=lambda suit: counts.get(suit, 0))
