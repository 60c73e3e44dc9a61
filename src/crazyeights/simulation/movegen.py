"""Legality checks and win detection."""

from typing import List, Optional
from crazyeights.simulation.state import Card, GameState, GameStatus, Suit


def is_playable(card: Card, top_card: Optional[Card], wild_suit: Optional[Suit]) -> bool:
    """Check whether ``card`` may be played onto ``top_card``.

    Eights are always playable. While a wild suit is active only that suit
    matches; otherwise suit or rank must match the top card.
    """
    if card.is_eight:
        return True
    if wild_suit is not None:
        return card.suit == wild_suit
    if top_card is None:
        return False
    return card.suit == top_card.suit or card.rank == top_card.rank


def playable_cards(hand: tuple[Card, ...], state: GameState) -> List[Card]:
    """Playable cards from ``hand`` against the current top card, in hand order."""
    return [c for c in hand if is_playable(c, state.top_card, state.wild_suit)]


def check_win(state: GameState) -> Optional[GameStatus]:
    """Return WON or LOST if a hand is empty, else None.

    The player is checked first, so two empty hands count as a player win.
    """
    if not state.player_hand:
        return GameStatus.WON
    if not state.opponent_hand:
        return GameStatus.LOST
    return None
