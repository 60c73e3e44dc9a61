"""Rule explanation for the terminal front-end."""

from __future__ import annotations

from crazyeights.simulation.engine import HAND_SIZE
from crazyeights.simulation.state import GameStatus


class RuleExplainer:
    """Explains the game rules and outcomes."""

    def explain_rules(self) -> str:
        """Generate condensed rule summary."""
        lines: list[str] = []

        lines.append("=== Crazy Eights ===")
        lines.append("")
        lines.append(f"Setup: You and the AI each get {HAND_SIZE} cards")
        lines.append("1. Match the Suit or Rank of the top card in the discard pile.")
        lines.append("2. 8s are Wild! Play them anytime to change the current suit.")
        lines.append("3. If you can't play, you must draw a card from the pile.")
        lines.append("4. The first player to empty their hand wins the round!")

        return "\n".join(lines)

    def explain_outcome(self, status: GameStatus) -> str:
        """Describe how the game ended."""
        if status == GameStatus.WON:
            return "=== VICTORY! ===\nYou've successfully cleared your hand!"
        if status == GameStatus.LOST:
            return "=== DEFEAT! ===\nThe AI outplayed you this time. Ready for a rematch?"
        if status == GameStatus.PAUSED:
            return "=== Game paused ===\nNeither side can move and the deck is empty."
        return "Game in progress"
