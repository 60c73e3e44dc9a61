"""Detect games that can no longer progress."""

from __future__ import annotations

from typing import Optional

from crazyeights.simulation.movegen import playable_cards
from crazyeights.simulation.state import GameState, Turn


class StuckDetector:
    """Counts consecutive forced skips on an empty deck.

    A skip is forced when the side to move had nothing playable and the deck
    was empty, so the turn passed without any card moving. Any other
    transition breaks the run.
    """

    def __init__(self, max_skipped_turns: int = 4):
        self.max_skipped_turns = max_skipped_turns
        self.skipped_turns = 0

    def record(self, before: GameState, after: GameState) -> None:
        """Record one transition."""
        hand = before.player_hand if before.turn == Turn.PLAYER else before.opponent_hand
        forced_skip = (
            not before.deck
            and len(after.discard) == len(before.discard)
            and after.turn != before.turn
            and not playable_cards(hand, before)
        )
        if forced_skip:
            self.skipped_turns += 1
        else:
            self.skipped_turns = 0

    def check(self) -> Optional[str]:
        """Return reason if stuck, None otherwise."""
        if self.skipped_turns >= self.max_skipped_turns:
            return f"{self.skipped_turns} turns skipped in a row with an empty deck"
        return None

    def reset(self) -> None:
        self.skipped_turns = 0
